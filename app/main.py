from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi_pagination import add_pagination

from app.config import get_settings
from app.exceptions import BackendUnavailableError, MessagingError
from app.infra.logging_config import LoggingConfig, get_logger
from app.routers import (
    conversations_router,
    realtime_router,
    requests_router,
    users_router,
)

logger = get_logger("main")


async def messaging_error_handler(request: Request, exc: MessagingError) -> JSONResponse:
    if isinstance(exc, BackendUnavailableError):
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


def create_app(testing: bool = False) -> FastAPI:
    settings = get_settings()
    LoggingConfig()

    app = FastAPI(title=settings.app_name)

    if not testing:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(MessagingError, messaging_error_handler)

    app.include_router(users_router.router)
    app.include_router(requests_router.router)
    app.include_router(conversations_router.router)
    app.include_router(realtime_router.router)

    add_pagination(app)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "environment": settings.environment}

    logger.info("Created %s (testing=%s)", settings.app_name, testing)
    return app


app = create_app()
