"""
Listener Registry for Fable.

Hosts subscribe to engine output and state changes. Each subscription
returns its own handle, so registering the same callback twice yields two
independent subscriptions that are removed independently.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, eq=False)
class Subscription:
    """Opaque handle for one registered listener."""

    registry: ListenerRegistry = field(repr=False)

    def cancel(self) -> bool:
        """Unregister. Returns False if already cancelled."""
        return self.registry.remove(self)


class ListenerRegistry(Generic[T]):
    """Ordered collection of callbacks receiving values of type T."""

    def __init__(self) -> None:
        self._listeners: dict[Subscription, Callable[[T], None]] = {}

    def add(self, callback: Callable[[T], None]) -> Subscription:
        handle = Subscription(registry=self)
        self._listeners[handle] = callback
        return handle

    def remove(self, handle: Subscription) -> bool:
        return self._listeners.pop(handle, None) is not None

    def clear(self) -> None:
        self._listeners.clear()

    def emit(self, value: T) -> None:
        """Call every listener synchronously, in registration order."""
        for callback in list(self._listeners.values()):
            callback(value)

    def __len__(self) -> int:
        return len(self._listeners)
