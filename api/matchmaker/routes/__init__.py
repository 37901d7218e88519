from fastapi import FastAPI

from .likes import router as likes_router
from .match import router as match_router
from .recommendations import router as recommendations_router


def include_modular_routers(app: FastAPI) -> None:
    app.include_router(likes_router, tags=["likes"])
    app.include_router(match_router, tags=["matches"])
    app.include_router(recommendations_router, tags=["recommendations"])


__all__ = ["include_modular_routers"]
