import logging
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict
from starlette.routing import Route

from config import Settings, get_hostname, get_settings

logger = logging.getLogger(__name__)

GREETING = "Hello from Kubernetes (Updated via Rolling Update)!"


class GreetingResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    version: str
    hostname: str
    timestamp: str


class HealthStatusResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str


def utcnow():
    return datetime.now(timezone.utc)


def format_timestamp(moment):
    """RFC3339 at second precision, always in UTC with a trailing Z."""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def check_dependencies():
    # Real checks (DB, cache, ...) go here.
    return True


def create_app(settings: Settings | None = None, check_dependencies=check_dependencies) -> FastAPI:
    settings = settings or get_settings()
    version = settings.app_version
    hostname = get_hostname()

    app = FastAPI(title="k8s rolling update demo", version=version)

    def read_root(request):
        greeting = GreetingResponse(
            message=GREETING,
            version=version,
            hostname=hostname,
            timestamp=format_timestamp(utcnow()),
        )
        return JSONResponse(greeting.model_dump())

    def read_ready(request):
        if check_dependencies():
            return JSONResponse(HealthStatusResponse(status="ready").model_dump())
        return Response(status_code=503)

    def read_health(request):
        return JSONResponse(HealthStatusResponse(status="healthy").model_dump())

    # Probes and the greeting answer on any method; every other path gets the greeting.
    app.router.routes.extend(
        [
            Route("/ready", read_ready, methods=None),
            Route("/health", read_health, methods=None),
            Route("/", read_root, methods=None),
            Route("/{path:path}", read_root, methods=None, include_in_schema=False),
        ]
    )

    return app


app = create_app()


def build_server(settings: Settings) -> uvicorn.Server:
    try:
        port = int(settings.port)
    except ValueError:
        logger.critical("Cannot listen on port %r", settings.port)
        raise SystemExit(1)
    if not 0 <= port <= 65535:
        logger.critical("Cannot listen on port %r: out of range", settings.port)
        raise SystemExit(1)

    config = uvicorn.Config(create_app(settings), host="0.0.0.0", port=port, log_config=None)
    return uvicorn.Server(config)


def main():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    server = build_server(settings)
    logger.info("Server starting on port %s", settings.port)
    try:
        server.run()
    except SystemExit as exc:
        if exc.code:
            logger.critical("Listener on port %s failed, exiting", settings.port)
        raise


if __name__ == "__main__":
    main()
