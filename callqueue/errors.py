"""Exception types raised by callqueue."""
from __future__ import annotations


class CallQueueError(Exception):
    """Base class for callqueue errors."""
    pass


class ConfigError(CallQueueError, ValueError):
    """Raised when registry settings cannot be loaded or are invalid."""
    pass
