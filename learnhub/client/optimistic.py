"""Toggle optimista del flag completed con rollback ante error."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from learnhub.client.cache import CacheState, ErrorSignal, ModuleCache
from learnhub.client.observable import Observable
from learnhub.client.transport import ModulesTransport
from learnhub.errors import LearnHubError, NotFoundError

logger = logging.getLogger(__name__)


class ToggleState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass
class ToggleRequest:
    module_id: str
    completed: bool
    generation: int
    snapshot: CacheState
    state: ToggleState = ToggleState.IDLE
    error: Optional[LearnHubError] = None


class OptimisticUpdateController:
    """
    Cada toggle lleva su propio snapshot. Un contador de generación por id
    evita que el rollback de un request viejo pise una escritura más nueva.
    Cuando falla el último request en vuelo de un id, se vuelve al último
    valor confirmado por el servidor.
    """

    def __init__(self, cache: ModuleCache, transport: ModulesTransport) -> None:
        self.cache = cache
        self.transport = transport
        self._generations: Dict[str, int] = {}
        self._in_flight: Dict[str, int] = {}
        # último valor aceptado por el servidor y la generación que lo confirmó
        self._confirmed: Dict[str, Tuple[bool, int]] = {}
        self.pending: Observable[FrozenSet[str]] = Observable(frozenset())

    def _track(self, module_id: str, delta: int) -> None:
        count = self._in_flight.get(module_id, 0) + delta
        if count > 0:
            self._in_flight[module_id] = count
        else:
            self._in_flight.pop(module_id, None)
        self.pending.set(frozenset(self._in_flight))

    def is_latest(self, request: ToggleRequest) -> bool:
        return self._generations.get(request.module_id) == request.generation

    def confirmed_value(self, module_id: str) -> Optional[bool]:
        confirmed = self._confirmed.get(module_id)
        return confirmed[0] if confirmed is not None else None

    async def toggle(self, module_id: str) -> ToggleRequest:
        current = self.cache.state.find(module_id)
        if current is None:
            raise NotFoundError(module_id, f"Módulo {module_id} no está en el cache")

        if module_id not in self._in_flight:
            # sin requests pendientes, lo que muestra el cache es lo último conocido del servidor
            _, confirmed_gen = self._confirmed.get(module_id, (current.completed, 0))
            self._confirmed[module_id] = (current.completed, confirmed_gen)

        generation = self._generations.get(module_id, 0) + 1
        self._generations[module_id] = generation
        request = ToggleRequest(
            module_id=module_id,
            completed=not current.completed,
            generation=generation,
            snapshot=self.cache.snapshot(),
        )

        self.cache.apply_completed(module_id, request.completed)
        request.state = ToggleState.PENDING
        self._track(module_id, +1)
        try:
            updated = await self.transport.update_completed(module_id, request.completed)
        except LearnHubError as e:
            request.state = ToggleState.ROLLED_BACK
            request.error = e
            self._rollback(request, others_in_flight=self._in_flight.get(module_id, 0) > 1)
            self.cache.report_error(ErrorSignal(
                f"No se pudo actualizar el módulo {module_id}: {e}",
                module_id=module_id,
                error=e,
            ))
            return request
        finally:
            self._track(module_id, -1)

        request.state = ToggleState.COMMITTED
        _, confirmed_gen = self._confirmed.get(module_id, (updated.completed, 0))
        if generation > confirmed_gen:
            self._confirmed[module_id] = (updated.completed, generation)
        # el servidor es la fuente de verdad si devolvió otro valor
        if updated.completed != request.completed and self.is_latest(request):
            self.cache.apply_completed(module_id, updated.completed)
        return request

    def _rollback(self, request: ToggleRequest, others_in_flight: bool) -> None:
        module_id = request.module_id
        if others_in_flight:
            if not self.is_latest(request):
                logger.info(
                    f"Rollback de {module_id} omitido: hay un toggle más nuevo "
                    f"(gen {self._generations.get(module_id)} > {request.generation})"
                )
                return
            # el snapshot guarda la escritura optimista del request anterior, aún pendiente
            value = request.snapshot.find(module_id).completed
        else:
            value = self.confirmed_value(module_id)

        if not self.cache.restore_completed(module_id, value, request.snapshot):
            logger.info(f"Rollback de {module_id} omitido: el cache fue recargado")
