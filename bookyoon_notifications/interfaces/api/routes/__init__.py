from fastapi import FastAPI

from .notifications import router as notifications_router


def register_routes(app: FastAPI, *, prefix: str = "") -> None:
    """Registra todos los routers de la API en la aplicación FastAPI."""

    app.include_router(notifications_router, prefix=prefix)
