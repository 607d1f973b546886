import socket
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment snapshot taken at startup.

    PORT is kept as a string; a bad value only shows up when the listener binds.
    """

    port: str = "3000"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(frozen=True, env_ignore_empty=True)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_hostname() -> str:
    try:
        return socket.gethostname()
    except OSError:
        return ""
