from typing import Dict, Iterable, List, Optional

from learnhub.models.module_model import Category, LearningModule

SEED_MODULES: List[Dict] = [
    {"id": "m-ai-101", "title": "Introduction to Machine Learning", "category": "AI"},
    {"id": "m-ds-101", "title": "Spreadsheets Fundamentals", "category": "DigitalSkills"},
    {"id": "m-su-101", "title": "Circular Economy Basics", "category": "Sustainability"},
    {"id": "m-ai-102", "title": "Prompt Engineering", "category": "AI"},
    {"id": "m-ds-102", "title": "Cybersecurity Awareness", "category": "DigitalSkills"},
    {"id": "m-su-102", "title": "Carbon Footprint Accounting", "category": "Sustainability"},
    {"id": "m-ai-103", "title": "Responsible AI", "category": "AI"},
    {"id": "m-ds-103", "title": "Cloud Collaboration Tools", "category": "DigitalSkills"},
    {"id": "m-su-103", "title": "Renewable Energy Systems", "category": "Sustainability"},
    {"id": "m-ai-104", "title": "Computer Vision Essentials", "category": "AI"},
    {"id": "m-ds-104", "title": "Data Literacy", "category": "DigitalSkills"},
    {"id": "m-su-104", "title": "Sustainable Supply Chains", "category": "Sustainability"},
]


class ModuleRepository:
    """
    Store en memoria de módulos de aprendizaje.
    Mantiene el orden de inserción (orden del store) y la unicidad de ids.
    """

    def __init__(self, modules: Optional[Iterable[LearningModule]] = None):
        self._modules: Dict[str, LearningModule] = {}
        for module in modules if modules is not None else self._seed():
            if module.id in self._modules:
                raise ValueError(f"Id de módulo duplicado: {module.id}")
            self._modules[module.id] = module

    @staticmethod
    def _seed() -> List[LearningModule]:
        return [LearningModule(**data) for data in SEED_MODULES]

    def find_all(self) -> List[LearningModule]:
        return list(self._modules.values())

    def find_by_category(self, category: Category) -> List[LearningModule]:
        return [m for m in self._modules.values() if m.category == category]

    def find_one(self, module_id: str) -> Optional[LearningModule]:
        return self._modules.get(module_id)

    def set_completed(self, module_id: str, completed: bool) -> Optional[LearningModule]:
        """Muta el flag completed in-place; None si el id no existe."""
        module = self._modules.get(module_id)
        if module is None:
            return None
        module.completed = completed
        return module
