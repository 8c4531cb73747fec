from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crowallet.api.core.config import settings
from crowallet.api.routers.v1 import api_router


def create_app() -> FastAPI:
    app = FastAPI(title=settings.PROJECT_NAME)
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
            allow_methods=["GET"],
            allow_headers=["*"],
        )
    app.include_router(api_router, prefix=settings.API_PATH)
    return app
