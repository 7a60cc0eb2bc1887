# module_routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from learnhub.api.query_params import parse_query_params
from learnhub.config.settings import Settings
from learnhub.errors import NotFoundError, ValidationError
from learnhub.models.module_model import CategoryOut, CompletionUpdate, LearningModule, PageResult
from learnhub.services.module_service import ModuleService

router = APIRouter(prefix="/modules", tags=["Learning Modules"])


def get_module_service(request: Request) -> ModuleService:
    return request.app.state.module_service


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("", response_model=PageResult)
def list_modules(
    category: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    svc: ModuleService = Depends(get_module_service),
    settings: Settings = Depends(get_app_settings),
):
    """
    Lista paginada de módulos, filtrable por categoría.
    Los parámetros llegan crudos para poder aplicar la política reject/coerce.
    """
    try:
        params = parse_query_params(category, page, page_size, settings)
        return svc.list(params)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/categories", response_model=List[CategoryOut])
def list_categories(svc: ModuleService = Depends(get_module_service)):
    return svc.categories()


@router.get("/{module_id}", response_model=LearningModule)
def get_module(module_id: str, svc: ModuleService = Depends(get_module_service)):
    try:
        return svc.get(module_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{module_id}", response_model=LearningModule)
def update_module(
    module_id: str,
    body: CompletionUpdate,
    svc: ModuleService = Depends(get_module_service),
):
    """Solo se puede modificar el flag completed."""
    try:
        return svc.set_completed(module_id, body.completed)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
