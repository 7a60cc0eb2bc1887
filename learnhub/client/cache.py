"""Cache reactivo del cliente: última página cargada y vista completa del catálogo."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple

from learnhub.client.observable import EventStream, Observable
from learnhub.client.transport import ModulesTransport
from learnhub.errors import LearnHubError
from learnhub.models.module_model import (
    CATEGORY_PRIORITY,
    Category,
    LearningModule,
    PageResult,
    QueryParams,
)

logger = logging.getLogger(__name__)


def sort_modules(modules: Iterable[LearningModule]) -> Tuple[LearningModule, ...]:
    """Orden por prioridad de categoría y luego título."""
    return tuple(sorted(modules, key=lambda m: m.sort_key()))


def derive_categories(modules: Iterable[LearningModule]) -> Tuple[Category, ...]:
    """Categorías presentes, sin duplicados, en el orden fijo de prioridad."""
    present = {m.category for m in modules}
    return tuple(sorted(present, key=CATEGORY_PRIORITY.__getitem__))


@dataclass(frozen=True)
class CacheState:
    modules: Tuple[LearningModule, ...] = ()
    total: int = 0
    params: Optional[QueryParams] = None
    all_modules: Tuple[LearningModule, ...] = ()
    # cada vista cuenta sus propios reemplazos: load -> modules, load_catalog -> all_modules
    modules_version: int = 0
    catalog_version: int = 0

    def find(self, module_id: str) -> Optional[LearningModule]:
        for module in self.modules + self.all_modules:
            if module.id == module_id:
                return module
        return None


@dataclass(frozen=True)
class ErrorSignal:
    """Error visible para el usuario (toast)."""

    message: str
    module_id: Optional[str] = None
    error: Optional[Exception] = None


def _patch(modules: Tuple[LearningModule, ...], module_id: str, completed: bool) -> Tuple[LearningModule, ...]:
    return tuple(
        m.model_copy(update={"completed": completed}) if m.id == module_id else m
        for m in modules
    )


class ModuleCache:
    """
    Dueño único del estado; los suscriptores sólo leen a través de los streams.

    ``catalog_page_size`` fija el pageSize de ``load_catalog``; sin él se usa
    el default del servidor, que nunca excede su máximo.
    """

    def __init__(self, transport: ModulesTransport, catalog_page_size: Optional[int] = None) -> None:
        self.transport = transport
        self.catalog_page_size = catalog_page_size
        self._state = CacheState()
        self._load_seq = 0
        self._catalog_seq = 0

        self.modules: Observable[Tuple[LearningModule, ...]] = Observable(())
        self.total: Observable[int] = Observable(0)
        self.all_modules: Observable[Tuple[LearningModule, ...]] = Observable(())
        self.categories: Observable[Tuple[Category, ...]] = Observable(())
        self.loading: Observable[bool] = Observable(False)
        self.errors: EventStream[ErrorSignal] = EventStream()

        self.all_modules.subscribe(lambda modules: self.categories.set(derive_categories(modules)))

    @property
    def state(self) -> CacheState:
        return self._state

    def snapshot(self) -> CacheState:
        # CacheState es inmutable: el propio valor sirve de snapshot
        return self._state

    def _set_state(self, state: CacheState) -> None:
        self._state = state
        self.modules.set(state.modules)
        self.total.set(state.total)
        self.all_modules.set(state.all_modules)

    # ===============================================================
    # Cargas (la última en despacharse gana)
    # ===============================================================
    async def load(self, params: QueryParams) -> Optional[PageResult]:
        """
        Carga una página y reemplaza el estado. Devuelve None si mientras
        tanto se despachó una carga más nueva (el resultado se descarta).
        """
        self._load_seq += 1
        seq = self._load_seq
        self.loading.set(True)
        try:
            result = await self.transport.fetch_page(params)
        except LearnHubError as e:
            if seq != self._load_seq:
                logger.debug(f"Carga #{seq} superada, se ignora su error: {e}")
                return None
            self.report_error(ErrorSignal(f"No se pudieron cargar los módulos: {e}", error=e))
            raise
        finally:
            if seq == self._load_seq:
                self.loading.set(False)

        if seq != self._load_seq:
            logger.debug(f"Carga #{seq} superada por #{self._load_seq}, se descarta")
            return None

        self._set_state(replace(
            self._state,
            modules=sort_modules(result.modules),
            total=result.total,
            params=params,
            modules_version=self._state.modules_version + 1,
        ))
        return result

    async def load_catalog(self) -> Optional[Tuple[LearningModule, ...]]:
        """Recorre todas las páginas sin filtro para la vista completa."""
        self._catalog_seq += 1
        seq = self._catalog_seq
        collected: List[LearningModule] = []
        page = 1
        try:
            while True:
                if self.catalog_page_size is None:
                    params = QueryParams(page=page)
                else:
                    params = QueryParams(page=page, page_size=self.catalog_page_size)
                result = await self.transport.fetch_page(params)
                collected.extend(result.modules)
                if not result.modules or len(collected) >= result.total:
                    break
                page += 1
        except LearnHubError as e:
            if seq != self._catalog_seq:
                return None
            self.report_error(ErrorSignal(f"No se pudo cargar el catálogo: {e}", error=e))
            raise

        if seq != self._catalog_seq:
            logger.debug(f"Catálogo #{seq} superado, se descarta")
            return None

        catalog = sort_modules(collected)
        self._set_state(replace(
            self._state,
            all_modules=catalog,
            catalog_version=self._state.catalog_version + 1,
        ))
        return catalog

    # ===============================================================
    # Mutaciones locales (usadas por el controlador optimista)
    # ===============================================================
    def apply_completed(
        self,
        module_id: str,
        completed: bool,
        in_modules: bool = True,
        in_catalog: bool = True,
    ) -> bool:
        """Cambia el flag en las vistas pedidas. El orden no cambia: completed no es clave de orden."""
        state = self._state
        found = (in_modules and any(m.id == module_id for m in state.modules)) or (
            in_catalog and any(m.id == module_id for m in state.all_modules)
        )
        if not found:
            return False
        self._set_state(replace(
            state,
            modules=_patch(state.modules, module_id, completed) if in_modules else state.modules,
            all_modules=_patch(state.all_modules, module_id, completed) if in_catalog else state.all_modules,
        ))
        return True

    def restore_completed(self, module_id: str, completed: bool, snapshot: CacheState) -> bool:
        """
        Repone el flag sólo en las vistas que no fueron recargadas desde el
        snapshot; una vista recargada ya trae el valor del servidor.
        """
        in_modules = self._state.modules_version == snapshot.modules_version
        in_catalog = self._state.catalog_version == snapshot.catalog_version
        if not (in_modules or in_catalog):
            return False
        return self.apply_completed(module_id, completed, in_modules=in_modules, in_catalog=in_catalog)

    def report_error(self, signal: ErrorSignal) -> None:
        logger.warning(signal.message)
        self.errors.emit(signal)
