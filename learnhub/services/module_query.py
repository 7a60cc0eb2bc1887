# learnhub/services/module_query.py
from typing import Optional, Sequence

from learnhub.errors import ValidationError
from learnhub.models.module_model import CATEGORY_PRIORITY, LearningModule, PageResult, QueryParams


def query(
    all_modules: Sequence[LearningModule],
    params: QueryParams,
    max_page_size: Optional[int] = None,
) -> PageResult:
    """
    Filtra por categoría (match exacto) y pagina en orden del store.
    Una página fuera de rango devuelve modules=[] con el total correcto.
    """
    if params.category is not None and params.category not in CATEGORY_PRIORITY:
        raise ValidationError(f"Categoría inválida: {params.category}")
    if params.page < 1:
        raise ValidationError("page debe ser >= 1")
    if params.page_size < 1:
        raise ValidationError("pageSize debe ser >= 1")
    if max_page_size is not None and params.page_size > max_page_size:
        raise ValidationError(f"pageSize no puede superar {max_page_size}")

    if params.category is None:
        filtered = list(all_modules)
    else:
        filtered = [m for m in all_modules if m.category == params.category]

    skip = (params.page - 1) * params.page_size
    return PageResult(total=len(filtered), modules=filtered[skip: skip + params.page_size])
