from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class Category(str, Enum):
    AI = "AI"
    DIGITAL_SKILLS = "DigitalSkills"
    SUSTAINABILITY = "Sustainability"


# Orden total fijo de categorías: lo comparten la validación del servidor
# y el ordenamiento del cliente.
CATEGORY_PRIORITY: Dict[Category, int] = {
    Category.AI: 0,
    Category.DIGITAL_SKILLS: 1,
    Category.SUSTAINABILITY: 2,
}

CATEGORY_LABELS: Dict[Category, str] = {
    Category.AI: "AI",
    Category.DIGITAL_SKILLS: "Digital Skills",
    Category.SUSTAINABILITY: "Sustainability",
}


def ordered_categories() -> List[Category]:
    return sorted(CATEGORY_PRIORITY, key=CATEGORY_PRIORITY.__getitem__)


class LearningModule(BaseModel):
    id: str
    title: str
    category: Category
    completed: bool = False

    def sort_key(self):
        return (CATEGORY_PRIORITY[self.category], self.title)


class QueryParams(BaseModel):
    category: Optional[Category] = None
    page: int = Field(default=1, ge=1)
    # en el wire se llama pageSize; el máximo lo impone la configuración
    page_size: int = Field(default=10, ge=1, alias="pageSize")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_query(self) -> Dict[str, str]:
        """
        Parámetros listos para la querystring de GET /modules.
        pageSize sólo viaja si se fijó explícitamente; si no, manda el default del servidor.
        """
        params = {"page": str(self.page)}
        if "page_size" in self.model_fields_set:
            params["pageSize"] = str(self.page_size)
        if self.category is not None:
            params["category"] = self.category.value
        return params


class PageResult(BaseModel):
    total: int = Field(ge=0)
    modules: List[LearningModule] = Field(default_factory=list)


class CompletionUpdate(BaseModel):
    completed: StrictBool

    model_config = ConfigDict(extra="forbid")


class CategoryOut(BaseModel):
    value: Category
    label: str
