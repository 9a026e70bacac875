"""Event bus for store change notifications.

The entry store publishes an event after every change to its collection;
views and the CLI subscribe instead of polling. Hooks can be sync or async.

Usage::

    from inkwell.core.events import EventBus, Event, ENTRIES_CHANGED

    bus = EventBus()
    bus.on(ENTRIES_CHANGED, lambda event: print(event.payload["reason"]))
    bus.emit_sync(Event(name=ENTRIES_CHANGED, payload={"reason": "create"}))
"""

from __future__ import annotations

import asyncio
import inspect
from collections import defaultdict
from dataclasses import dataclass, field
from time import time
from typing import Any

from loguru import logger

ENTRIES_CHANGED = "journal.entries.changed"
SYNC_STATE_CHANGED = "journal.sync.changed"

# Callable[[Event], None] | Callable[[Event], Awaitable[None]]
Hook = Any


@dataclass(frozen=True)
class Event:
    """An immutable event that flows through the bus."""

    name: str
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time)
    source: str = ""


class EventBus:
    """Simple pub/sub event bus supporting sync and async hooks."""

    def __init__(self) -> None:
        self._hooks: dict[str, list[Hook]] = defaultdict(list)
        self._background_tasks: set[asyncio.Task] = set()

    def on(self, event_name: str, hook: Hook) -> None:
        """Register *hook* for a specific event name."""
        self._hooks[event_name].append(hook)

    def off(self, event_name: str, hook: Hook) -> None:
        """Unregister *hook*; unknown hooks are ignored."""
        try:
            self._hooks[event_name].remove(hook)
        except ValueError:
            pass

    def emit_sync(self, event: Event) -> None:
        """Emit from a sync context.

        Async hooks are scheduled on the running loop when there is one and
        skipped otherwise. A failing hook is logged and never propagates.
        """
        loop: asyncio.AbstractEventLoop | None = None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            pass

        for hook in list(self._hooks.get(event.name, [])):
            try:
                if inspect.iscoroutinefunction(hook):
                    if loop is not None:
                        task = loop.create_task(hook(event))
                        self._background_tasks.add(task)
                        task.add_done_callback(self._background_tasks.discard)
                    else:
                        logger.debug(f"Skipping async hook {hook!r}: no running event loop")
                else:
                    hook(event)
            except Exception as exc:
                logger.warning(f"Event hook failed for {event.name}: {exc}")
