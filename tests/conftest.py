from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from learnhub.api.app import create_app  # noqa: E402
from learnhub.config.settings import Settings  # noqa: E402
from learnhub.errors import NotFoundError, TransportError  # noqa: E402
from learnhub.models.module_model import LearningModule, PageResult, QueryParams  # noqa: E402
from learnhub.repositories.module_repository import ModuleRepository  # noqa: E402
from learnhub.services.module_query import query  # noqa: E402


def module(module_id: str, title: str, category: str, completed: bool = False) -> LearningModule:
    return LearningModule(id=module_id, title=title, category=category, completed=completed)


class FakeTransport:
    """
    Transporte en memoria. Cada llamada puede quedar retenida por un
    asyncio.Event ("gate") para controlar el orden de resolución.
    """

    def __init__(self, modules: Iterable[LearningModule]) -> None:
        self.repo = ModuleRepository([m.model_copy() for m in modules])
        self.page_gates: Dict[int, asyncio.Event] = {}
        self.update_gates: List[asyncio.Event] = []
        self.fail_pages: Set[int] = set()
        self.fail_updates: Set[int] = set()
        self.fetch_calls: List[QueryParams] = []
        self.update_calls: List[tuple] = []

    def gate_page(self, page: int) -> asyncio.Event:
        self.page_gates[page] = asyncio.Event()
        return self.page_gates[page]

    def gate_next_update(self) -> asyncio.Event:
        gate = asyncio.Event()
        self.update_gates.append(gate)
        return gate

    async def fetch_page(self, params: QueryParams) -> PageResult:
        self.fetch_calls.append(params)
        gate = self.page_gates.get(params.page)
        if gate is not None:
            await gate.wait()
        if params.page in self.fail_pages:
            raise TransportError("connection reset")
        return query(self.repo.find_all(), params)

    async def update_completed(self, module_id: str, completed: bool) -> LearningModule:
        call_index = len(self.update_calls)
        self.update_calls.append((module_id, completed))
        if call_index < len(self.update_gates):
            await self.update_gates[call_index].wait()
        if call_index in self.fail_updates:
            raise TransportError("connection reset")
        updated = self.repo.set_completed(module_id, completed)
        if updated is None:
            raise NotFoundError(module_id)
        return updated.model_copy()


@pytest.fixture
def settings() -> Settings:
    return Settings(default_page_size=10, max_page_size=50, pagination_policy="reject")


@pytest.fixture
def repo() -> ModuleRepository:
    return ModuleRepository()


@pytest.fixture
def client(repo: ModuleRepository, settings: Settings) -> TestClient:
    return TestClient(create_app(repo=repo, settings=settings))


@pytest.fixture
def sample_modules() -> List[LearningModule]:
    return [
        module("a", "Z", "Sustainability"),
        module("b", "A", "AI"),
        module("c", "B", "AI"),
        module("d", "Data Literacy", "DigitalSkills"),
        module("e", "Carbon", "Sustainability", completed=True),
    ]


@pytest.fixture
def make_transport():
    def factory(modules: Optional[Iterable[LearningModule]] = None) -> FakeTransport:
        return FakeTransport(modules if modules is not None else ModuleRepository().find_all())

    return factory
