# learnhub/services/module_service.py
import logging
from typing import List

from learnhub.errors import NotFoundError
from learnhub.models.module_model import (
    CATEGORY_LABELS,
    CategoryOut,
    LearningModule,
    PageResult,
    QueryParams,
    ordered_categories,
)
from learnhub.repositories.module_repository import ModuleRepository
from learnhub.services.module_query import query

logger = logging.getLogger(__name__)


class ModuleService:
    def __init__(self, repo: ModuleRepository, max_page_size: int):
        self.repo = repo
        self.max_page_size = max_page_size

    # ===============================================================
    # 📋 LIST
    # ===============================================================
    def list(self, params: QueryParams) -> PageResult:
        result = query(self.repo.find_all(), params, self.max_page_size)
        logger.debug(
            f"[modules.list] category={params.category} page={params.page} "
            f"pageSize={params.page_size} -> {len(result.modules)}/{result.total}"
        )
        return result

    def categories(self) -> List[CategoryOut]:
        return [CategoryOut(value=c, label=CATEGORY_LABELS[c]) for c in ordered_categories()]

    # ===============================================================
    # 🔎 GET BY ID
    # ===============================================================
    def get(self, module_id: str) -> LearningModule:
        module = self.repo.find_one(module_id)
        if module is None:
            raise NotFoundError(module_id)
        return module

    # ===============================================================
    # ✏️ UPDATE (solo el flag completed)
    # ===============================================================
    def set_completed(self, module_id: str, completed: bool) -> LearningModule:
        updated = self.repo.set_completed(module_id, completed)
        if updated is None:
            logger.warning(f"[modules.update] id inexistente: {module_id}")
            raise NotFoundError(module_id)
        logger.info(f"[modules.update] {module_id} completed={completed}")
        return updated
