# bikeflow/pipeline/events.py
from __future__ import annotations

from typing import Callable, Dict, List


class EventSource:
    """
    Minimal named-event registry. Handlers run synchronously in
    registration order.
    """

    def __init__(self):
        self._handlers: Dict[str, List[Callable]] = {}

    def on(self, event: str, handler: Callable) -> Callable:
        self._handlers.setdefault(event, []).append(handler)
        return handler

    def emit(self, event: str, *args) -> None:
        for handler in list(self._handlers.get(event, [])):
            handler(*args)


class TimeControl(EventSource):
    """
    Stand-in for the time slider: emits "input" with the new filter value.
    """

    def __init__(self):
        super().__init__()
        self.value = None

    def set_value(self, value) -> None:
        self.value = value
        self.emit("input", value)
