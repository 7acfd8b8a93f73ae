import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookyoon_notifications.config import get_settings
from bookyoon_notifications.infrastructure.database import engine, initialize_database
from bookyoon_notifications.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicializa la base de datos al arrancar y libera los recursos al cerrar."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Crea y configura la aplicación principal de FastAPI."""

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title=settings.application_name, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "Location",
            "Link",
            "X-Total-Count",
            f"X-{settings.application_name}-alert",
            f"X-{settings.application_name}-error",
            f"X-{settings.application_name}-params",
        ],
    )

    register_routes(app, prefix=settings.api_prefix)
    return app


app = create_app()
