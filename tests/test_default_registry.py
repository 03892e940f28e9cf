"""Tests for the module-level shortcuts bound to the shared default registry."""
import callqueue
from callqueue import QueueRegistry


def test_shortcuts_share_one_registry(clean_default_registry):
    calls = []

    def record(value):
        calls.append(value)

    callqueue.add("test.default.boot", record)
    assert callqueue.get("test.default.boot") == [record]

    callqueue.execute("test.default.boot", "ready")

    assert calls == ["ready"]
    assert "test.default.boot" in clean_default_registry


def test_shortcuts_chain_on_default_registry(clean_default_registry):
    seen = []

    def handler(value):
        seen.append(value)

    result = callqueue.add("test.default.once", handler).execute_and_clear(
        "test.default.once", 7
    )

    assert result is callqueue.default_registry
    assert seen == [7]
    assert callqueue.get("test.default.once") == []

    callqueue.clear("test.default.once")
    assert callqueue.get("test.default.once") is False


def test_on_decorator_and_remove(clean_default_registry):
    @callqueue.on("test.default.hooks")
    def hook():
        pass

    assert hook in callqueue.get("test.default.hooks")
    assert "test.default.hooks" in callqueue.names()

    callqueue.remove("test.default.hooks", hook)
    assert callqueue.get("test.default.hooks") == []


def test_separate_registries_are_isolated(clean_default_registry):
    own = QueueRegistry()
    own.add("test.default.isolated", lambda: None)

    assert callqueue.get("test.default.isolated") is False


def test_version_is_exported():
    assert callqueue.__version__
