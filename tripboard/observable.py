from __future__ import annotations

from typing import Any, Callable, List

from .models import UpdateType

Observer = Callable[[UpdateType, Any], None]


class Observable:
    """Synchronous publish/subscribe used by every model.

    Observers run in registration order on the caller's stack; an observer
    raising stops the broadcast and propagates out of :meth:`_notify`.
    """

    def __init__(self) -> None:
        self._observers: List[Observer] = []

    def add_observer(self, observer: Observer) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, update_type: UpdateType, payload: Any = None) -> None:
        for observer in list(self._observers):
            observer(update_type, payload)


__all__ = ["Observable", "Observer"]
