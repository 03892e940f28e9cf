"""callqueue: named queues of deferred callbacks.

Push functions to a queue from one module and run them later from another,
without either side holding a reference to the other.

Main entry points:
- QueueRegistry: an independent registry owned by whoever needs one
- Module-level add/get/remove/execute/execute_and_clear/clear: shortcuts
  bound to the process-wide default_registry

Example:
    import callqueue

    callqueue.add("shutdown", close_db)
    ...
    callqueue.execute_and_clear("shutdown", reason="SIGTERM")
"""
from __future__ import annotations

from .config import RegistrySettings, load_settings
from .errors import CallQueueError, ConfigError
from .registry import Callback, QueueRegistry

default_registry = QueueRegistry()

add = default_registry.add
get = default_registry.get
remove = default_registry.remove
execute = default_registry.execute
execute_and_clear = default_registry.execute_and_clear
clear = default_registry.clear
on = default_registry.on
names = default_registry.names

__all__ = [
    # Registry
    "Callback",
    "QueueRegistry",
    "default_registry",
    # Shortcuts on the default registry
    "add",
    "get",
    "remove",
    "execute",
    "execute_and_clear",
    "clear",
    "on",
    "names",
    # Settings
    "RegistrySettings",
    "load_settings",
    # Errors
    "CallQueueError",
    "ConfigError",
    # Version
    "__version__",
]

__version__ = "1.1.4"
