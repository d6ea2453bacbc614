import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure.database import engine, initialize_database
from app.infrastructure.push import initialize_firebase
from app.interfaces.api.errors import register_exception_handlers
from app.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database and the push provider before serving traffic."""

    initialize_database()
    initialize_firebase(get_settings())
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the notification service application."""

    settings = get_settings()
    logging.getLogger("app").setLevel(settings.log_level.upper())

    app = FastAPI(title="SiPPKe Notification Service", lifespan=lifespan)

    # The mobile app and the admin dashboard call the service from any origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app)
    return app


app = create_app()


def serve() -> None:
    """Run a standalone server unless the serverless host manages the process."""

    settings = get_settings()
    if not settings.serves_standalone:
        logger.info("Running under %s; not binding a port", settings.app_env)
        return
    logging.basicConfig(level=settings.log_level.upper())
    logger.info("Notification service running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    serve()
