from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings, setup_logging
from app.interfaces.api.routes import register_routes
from app.infrastructure.database import engine, initialize_database


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables at startup and release pooled connections on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the notifications API application."""

    setup_logging()
    settings = get_settings()

    app = FastAPI(title="Events Notifications API", lifespan=lifespan)

    # Allows the events dashboard frontend to call the API with cookies.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
