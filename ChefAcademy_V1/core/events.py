import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, List, Mapping

from ChefAcademy_V1.domain.types import EventKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameEvent:
    """Something that changed in the player's progress."""

    kind: EventKind
    payload: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # listeners get a read-only view
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))


Listener = Callable[[GameEvent], None]


class EventBus:
    """Synchronous change notification for the view layer and quest tracking."""

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns the function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, kind: EventKind, **payload: Any) -> GameEvent:
        event = GameEvent(kind, payload)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed on %s", listener, kind.value)
        return event

    def __len__(self) -> int:
        return len(self._listeners)
