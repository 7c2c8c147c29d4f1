"""In-process event dispatching for task link changes."""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Protocol

logger = logging.getLogger(__name__)

EVENT_TASK_LINK_CREATE_UPDATE = "tasklink.create_update"
EVENT_TASK_LINK_DELETE = "tasklink.delete"

Listener = Callable[[str, Dict[str, Any]], None]


class EventSink(Protocol):
    def publish(self, event_name: str, payload: Dict[str, Any]) -> None:
        ...


class EventDispatcher:
    """Fire-and-forget dispatcher: listeners are called in subscription order."""

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def subscribe(self, event_name: str, listener: Listener) -> None:
        self._listeners[event_name].append(listener)

    def publish(self, event_name: str, payload: Dict[str, Any]) -> None:
        logger.debug("publish %s %s", event_name, payload)
        for listener in list(self._listeners.get(event_name, [])):
            try:
                listener(event_name, payload)
            except Exception:
                # un listener en erreur ne doit pas bloquer les autres
                logger.warning("Listener failed for %s", event_name, exc_info=True)


def log_listener(event_name: str, payload: Dict[str, Any]) -> None:
    logger.info("%s: %s", event_name, payload)
