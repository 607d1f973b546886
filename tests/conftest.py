import pytest
from fastapi.testclient import TestClient

import app as app_module
from config import Settings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("PORT", "APP_VERSION", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_client(monkeypatch):
    def _make(hostname="pod-1234", check_dependencies=app_module.check_dependencies, **settings):
        monkeypatch.setattr(app_module, "get_hostname", lambda: hostname)
        application = app_module.create_app(Settings(**settings), check_dependencies=check_dependencies)
        return TestClient(application)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()
