from contextlib import asynccontextmanager

from fastapi import FastAPI

from api import users
from core.config import Settings, settings as default_settings
from core.database import engine, create_tables
from core.errors import register_error_handlers
from core.logging import configure_logging, get_logger
from core.middleware import RequestLoggingMiddleware
from core.routing import register_routes
from core.validation import ValidatorRegistry, catalog_for

log = get_logger(__name__)

ROUTES = (*users.ROUTES,)
VALIDATORS = (*users.VALIDATORS,)


def build_validator_registry(language: str) -> ValidatorRegistry:
    registry = ValidatorRegistry(catalog_for(language))
    for request_type, validator_type in VALIDATORS:
        registry.register(request_type, validator_type)
    return registry


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("startup", message="Bedrock API starting up")
    await create_tables()
    yield
    log.info("shutdown", message="Bedrock API shutting down")
    await engine.dispose()


def create_app(settings: Settings | None = None, *, use_lifespan: bool = True) -> FastAPI:
    settings = settings or default_settings

    configure_logging(
        level=settings.LOG_LEVEL,
        json_logs=settings.LOG_JSON,
        log_sql=settings.LOG_SQL,
    )

    app = FastAPI(
        title="Bedrock API",
        description="Web backend scaffold with self-validating value objects and uniform response envelopes",
        version=settings.APP_VERSION,
        lifespan=lifespan if use_lifespan else None,
    )

    register_error_handlers(app)
    app.add_middleware(RequestLoggingMiddleware)

    validators = build_validator_registry(settings.VALIDATION_LANGUAGE)
    register_routes(app, ROUTES, validators)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": settings.APP_VERSION}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    log.info("server_config", host=default_settings.BACKEND_HOST, port=default_settings.BACKEND_PORT, debug=default_settings.APP_DEBUG)
    uvicorn.run(
        "main:app",
        host=default_settings.BACKEND_HOST,
        port=default_settings.BACKEND_PORT,
        reload=default_settings.APP_DEBUG,
        log_config=None,
    )
