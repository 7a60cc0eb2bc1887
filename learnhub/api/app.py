# learnhub/api/app.py
from typing import Optional

from fastapi import FastAPI

from learnhub.api.routes.module_routes import router as module_router
from learnhub.config.settings import Settings, get_settings
from learnhub.repositories.module_repository import ModuleRepository
from learnhub.services.module_service import ModuleService


def create_app(
    repo: Optional[ModuleRepository] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Arma la aplicación con un store explícito (uno nuevo si no se pasa),
    de modo que cada test pueda tener su propio estado.
    """
    settings = settings or get_settings()
    repo = repo if repo is not None else ModuleRepository()

    app = FastAPI(title="LearnHub Modules API", version="1.0.0",
                  description="Módulos de aprendizaje filtrables, paginados y con progreso.")
    app.state.settings = settings
    app.state.module_service = ModuleService(repo, settings.max_page_size)

    @app.get("/", tags=["Health"])
    async def root():
        return {"message": "✅ LearnHub API is up and running."}

    app.include_router(module_router, prefix="/api/v1")
    return app
