"""Shared fixtures for the callqueue test suite."""
import pytest

import callqueue
from callqueue import QueueRegistry, RegistrySettings


class Recorder:
    """Callable that records each call's arguments."""

    def __init__(self, label, log=None):
        self.label = label
        self.calls = []
        self.log = log

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        if self.log is not None:
            self.log.append(self.label)

    def __repr__(self):
        return f"Recorder({self.label!r})"


@pytest.fixture
def registry():
    return QueueRegistry()


@pytest.fixture
def lenient_registry():
    """Registry that logs callback errors instead of raising them."""
    return QueueRegistry(RegistrySettings(on_error="log"))


@pytest.fixture
def call_log():
    return []


@pytest.fixture
def recorder(call_log):
    """Factory for Recorder callables sharing one call log."""

    def make(label):
        return Recorder(label, call_log)

    return make


@pytest.fixture
def clean_default_registry():
    """Remove any queues a test leaves on the shared default registry."""
    before = set(callqueue.names())
    yield callqueue.default_registry
    for name in callqueue.names():
        if name not in before:
            callqueue.clear(name)
