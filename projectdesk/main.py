import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from projectdesk.api.routes.projects import router as projects_router
from projectdesk.config.settings import get_settings
from projectdesk.db.seed import seed_app_data
from projectdesk.db.session import get_sessionmaker
from projectdesk.middleware.error_handler import (
    ServiceError,
    catch_all_handler,
    service_error_handler,
    validation_error_handler,
)

logger = logging.getLogger(__name__)


def _configure_app_logging() -> None:
    """Ensure projectdesk.* logs are visible under the same sink as uvicorn error logs."""
    app_logger = logging.getLogger("projectdesk")
    uvicorn_error_logger = logging.getLogger("uvicorn.error")

    if uvicorn_error_logger.handlers:
        app_logger.handlers = list(uvicorn_error_logger.handlers)
        app_logger.setLevel(uvicorn_error_logger.level or logging.INFO)
        app_logger.propagate = False
        return

    if not app_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)s:     %(name)s - %(message)s")
        )
        app_logger.addHandler(handler)
    app_logger.setLevel(logging.INFO)
    app_logger.propagate = False


@asynccontextmanager
async def lifespan(app: FastAPI):
    _configure_app_logging()

    # Schema managed by Alembic; seeding only fills gaps
    session_factory = get_sessionmaker()
    with session_factory() as session:
        seed_app_data(session)
        session.commit()
    logger.info("%s started (env=%s)", get_settings().app_name, get_settings().app_env)

    yield


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, catch_all_handler)

    app.include_router(projects_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
