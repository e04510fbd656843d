"""
Dashboard state store.

Pub/Sub holder for the latest dashboard values. Producers publish a value
under a key; every subscriber receives a StateUpdate and re-renders from it.
Each application owns its own store instance.
"""

import logging
import time
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

STATE_KEYS = (
    "projects",
    "tasks",
    "top_priority_tasks",
    "budget",
    "analytics",
)


@dataclass
class StateUpdate:
    """A published value; timestamp is epoch milliseconds."""
    key: str
    value: Any
    timestamp: int


Subscriber = Callable[[StateUpdate], None]


class StateStore:
    """
    Latest-value store with subscriber notification.

    Usage:
        store = StateStore()
        unsubscribe = store.subscribe(lambda update: print(update.key))
        store.publish("tasks", tasks)
        unsubscribe()
    """

    def __init__(self):
        self._values: Dict[str, Any] = {key: None for key in STATE_KEYS}
        self._subscribers: List[Subscriber] = []

    def get(self, key: str) -> Any:
        if key not in self._values:
            raise KeyError(f"Unknown state key: {key}")
        return self._values[key]

    def snapshot(self) -> Dict[str, Any]:
        """Copy of all current values."""
        return deepcopy(self._values)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a subscriber; returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, key: str, value: Any) -> StateUpdate:
        """
        Store a value and notify subscribers.

        A failing subscriber is logged and does not block the others.
        """
        if key not in self._values:
            raise KeyError(f"Unknown state key: {key}")

        self._values[key] = value
        update = StateUpdate(key=key, value=value, timestamp=int(time.time() * 1000))

        for callback in list(self._subscribers):
            try:
                callback(update)
            except Exception:
                logger.exception("State subscriber failed for key %s", key)

        return update
