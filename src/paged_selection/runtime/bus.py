"""Synchronous publish/subscribe channel between the model and the UI."""

from __future__ import annotations

from typing import Callable, Dict, List

Subscriber = Callable[[object], None]


class EventBus:
    """Minimal event bus; callbacks run inline on the emitting turn."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Subscriber]] = {}

    def subscribe(self, event: str, callback: Subscriber) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Subscriber) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


__all__ = ["EventBus", "Subscriber"]
