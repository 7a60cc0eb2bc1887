"""Celdas de estado observables para el cache del cliente."""

import logging
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

Unsubscribe = Callable[[], None]


class EventStream(Generic[T]):
    """Broadcast simple a los suscriptores actuales, sin valor retenido."""

    def __init__(self) -> None:
        self._subscribers: List[Callable[[T], None]] = []

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, value: T) -> None:
        # copia: un suscriptor puede desuscribirse mientras se notifica
        for callback in list(self._subscribers):
            callback(value)


class Observable(EventStream[T]):
    """
    Una única celda mutable más broadcast. Al suscribirse se recibe el valor
    actual de inmediato; después, cada cambio.
    """

    def __init__(self, initial: T) -> None:
        super().__init__()
        self._value = initial

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        unsubscribe = super().subscribe(callback)
        callback(self._value)
        return unsubscribe

    def set(self, value: T) -> None:
        if value == self._value:
            return
        self._value = value
        self.emit(value)
