from __future__ import annotations

"""Tiny pub/sub event bus used by the board to publish snapshots."""

from typing import Any, Callable, Dict, List

Handler = Callable[[Any], None]


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Handler]] = {}

    def subscribe(self, event: str, handler: Handler) -> Callable[[], None]:
        """Register `handler` for `event`; returns a callable that removes it."""
        self._subs.setdefault(event, []).append(handler)
        return lambda: self.unsubscribe(event, handler)

    def unsubscribe(self, event: str, handler: Handler) -> None:
        handlers = self._subs.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: str, payload: Any) -> None:
        # copy so handlers may unsubscribe while being called
        for h in list(self._subs.get(event, [])):
            h(payload)

    def count(self, event: str) -> int:
        return len(self._subs.get(event, []))

    def clear(self) -> None:
        self._subs.clear()
