"""Named queues of deferred callbacks.

A QueueRegistry maps queue names to ordered lists of callables. Producers
push callables under a name with add(); consumers later run everything
under that name with execute() or drain it with execute_and_clear().
Every mutating method returns the registry so calls can be chained:

    registry.add("boot", load_plugins).add("boot", warm_cache).execute("boot", app)
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple

from .config import RegistrySettings

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]


class QueueRegistry:
    """Registry of named callback queues.

    Not thread-safe; callers sharing a registry across threads must guard it
    themselves.
    """

    def __init__(self, settings: Optional[RegistrySettings] = None):
        self._queues: Dict[str, List[Callback]] = {}
        self._settings = settings or RegistrySettings()

    @property
    def settings(self) -> RegistrySettings:
        return self._settings

    def __contains__(self, name: object) -> bool:
        return name in self._queues

    def __repr__(self) -> str:
        sizes = ", ".join(f"{name!r}: {len(queue)}" for name, queue in self._queues.items())
        return f"{type(self).__name__}({{{sizes}}})"

    def names(self) -> List[Any]:
        """Return the names of existing queues in creation order."""
        return list(self._queues)

    def add(self, name: str, fn: Callback) -> QueueRegistry:
        """Append a callable to the named queue, creating the queue if needed."""
        queue = self._queues.get(name)
        if queue is None:
            logger.debug("Creating queue %r", name)
            queue = self._queues[name] = []
        queue.append(fn)
        return self

    def on(self, name: str) -> Callable[[Callback], Callback]:
        """Decorator that adds the decorated function to the named queue.

        The function is returned unchanged so it can later be passed to
        remove().
        """
        def decorator(fn: Callback) -> Callback:
            self.add(name, fn)
            return fn
        return decorator

    def get(self, name: str) -> List[Callback] | Literal[False]:
        """Return the live queue for name, or False if there is none.

        The list is not copied: mutating it mutates the registry.
        """
        queue = self._queues.get(name)
        if queue is None:
            return False
        return queue

    def remove(self, name: str, fn: Callback) -> QueueRegistry:
        """Remove the first occurrence of fn (compared by identity) from the queue."""
        queue = self._queues.get(name)
        if queue is None:
            return self

        for index, queued in enumerate(queue):
            if queued is fn:
                del queue[index]
                logger.debug("Removed %r from queue %r", fn, name)
                break

        self._drop_if_empty(name, queue)
        return self

    def execute(self, name: str, *args: Any, **kwargs: Any) -> QueueRegistry:
        """Call every callable in the queue with the given arguments.

        The queue is left intact. Only callables queued when the call starts
        are run; anything added during the pass waits for the next call.
        """
        queue = self._queues.get(name)
        if queue is None:
            return self

        snapshot = tuple(queue)
        logger.debug("Executing %d callback(s) in queue %r", len(snapshot), name)
        for fn in snapshot:
            self._invoke(name, fn, args, kwargs)
        return self

    def execute_and_clear(self, name: str, *args: Any, **kwargs: Any) -> QueueRegistry:
        """Pop each queued callable off the front and call it.

        Every callable present when the call starts runs exactly once. Callables
        added to the same queue during the pass stay queued.
        """
        queue = self._queues.get(name)
        if queue is None:
            return self

        pending = len(queue)
        logger.debug("Draining %d callback(s) from queue %r", pending, name)
        try:
            for _ in range(pending):
                # a callback may have removed entries from this queue
                if not queue:
                    break
                fn = queue.pop(0)
                self._invoke(name, fn, args, kwargs)
        finally:
            self._drop_if_empty(name, queue)
        return self

    def clear(self, name: str) -> QueueRegistry:
        """Delete the named queue and everything in it."""
        if self._queues.pop(name, None) is not None:
            logger.debug("Cleared queue %r", name)
        return self

    def _invoke(self, name: str, fn: Callback, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> None:
        if self._settings.on_error == "raise":
            fn(*args, **kwargs)
            return
        try:
            fn(*args, **kwargs)
        except Exception as e:
            logger.exception("Error in callback %r from queue %r: %s", fn, name, e)

    def _drop_if_empty(self, name: str, queue: List[Callback]) -> None:
        if not self._settings.drop_empty or queue:
            return
        # only drop the queue we worked on, not one re-created by a callback
        if self._queues.get(name) is queue:
            del self._queues[name]
            logger.debug("Dropped empty queue %r", name)
