# learnhub/api/query_params.py
import logging
from typing import Optional

from learnhub.config.settings import Settings
from learnhub.errors import ValidationError
from learnhub.models.module_model import Category, QueryParams

logger = logging.getLogger(__name__)


def _parse_category(raw: Optional[str]) -> Optional[Category]:
    # categoría vacía equivale a ausente; una desconocida es siempre 400
    if raw is None or raw.strip() == "":
        return None
    try:
        return Category(raw.strip())
    except ValueError:
        valid = ", ".join(c.value for c in Category)
        raise ValidationError(f"Categoría inválida: {raw!r} (válidas: {valid})")


def _parse_positive(name: str, raw: Optional[str], default: int, maximum: Optional[int], coerce: bool) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        if coerce:
            logger.info(f"{name}={raw!r} no es entero, se usa {default}")
            return default
        raise ValidationError(f"{name} debe ser un entero positivo")

    if value < 1:
        if coerce:
            logger.info(f"{name}={value} fuera de rango, se usa {default}")
            return default
        raise ValidationError(f"{name} debe ser >= 1")

    if maximum is not None and value > maximum:
        if coerce:
            logger.info(f"{name}={value} supera el máximo, se usa {maximum}")
            return maximum
        raise ValidationError(f"{name} no puede superar {maximum}")
    return value


def parse_query_params(
    category: Optional[str],
    page: Optional[str],
    page_size: Optional[str],
    settings: Settings,
) -> QueryParams:
    """
    Valida/coacciona los parámetros crudos de GET /modules.
    - category inválida -> ValidationError siempre
    - page/pageSize inválidos -> ValidationError ("reject") o default ("coerce")
    """
    coerce = settings.pagination_policy == "coerce"
    return QueryParams(
        category=_parse_category(category),
        page=_parse_positive("page", page, 1, None, coerce),
        page_size=_parse_positive(
            "pageSize", page_size, settings.default_page_size, settings.max_page_size, coerce
        ),
    )
