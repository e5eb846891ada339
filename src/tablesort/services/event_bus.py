"""Synchronous publish/subscribe for sort notifications.

Lets views, status bars and tests react to sorting without the coordinator
knowing about them:
 - typed events (``SortEvent``) with arbitrary string names also accepted
 - one-shot subscriptions
 - error isolation: a failing handler is recorded, the publish cycle continues
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "SortEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]


class SortEvent(str, Enum):
    SORT_REQUESTED = "sort_requested"
    SORT_APPLIED = "sort_applied"
    COMPARATOR_CHANGED = "comparator_changed"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | SortEvent) -> str:
    return name.value if isinstance(name, SortEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Subscriber lists are guarded by a re-entrant lock; handlers run with the
    lock released (copy-first) so they may subscribe or unsubscribe while
    being dispatched.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    def subscribe(
        self, name: str | SortEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                bucket[:] = [s for s in bucket if s is not sub]
                if not bucket:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    def publish(self, name: str | SortEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: str | SortEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
