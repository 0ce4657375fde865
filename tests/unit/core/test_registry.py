"""
test_registry.py
----------------
Unit tests for bettertemp.core.registry module.
"""
import threading

from bettertemp.core.registry import LiveFileRegistry, default_registry


class TestLiveFileRegistry:
    """Tests for LiveFileRegistry class."""

    def test_add_and_contains(self):
        registry = LiveFileRegistry()
        registry.add("/tmp/a")
        assert "/tmp/a" in registry
        assert "/tmp/b" not in registry
        assert len(registry) == 1

    def test_discard_is_idempotent(self):
        """Removing twice (unlink, then finalizer) does not raise."""
        registry = LiveFileRegistry()
        registry.add("/tmp/a")
        registry.discard("/tmp/a")
        registry.discard("/tmp/a")
        assert "/tmp/a" not in registry

    def test_snapshot_is_sorted_copy(self):
        registry = LiveFileRegistry()
        registry.add("/tmp/b")
        registry.add("/tmp/a")
        snapshot = registry.snapshot()
        assert snapshot == ["/tmp/a", "/tmp/b"]
        snapshot.clear()
        assert len(registry) == 2

    def test_iteration(self):
        registry = LiveFileRegistry()
        registry.add("/tmp/a")
        assert list(registry) == ["/tmp/a"]

    def test_empty_registry_is_falsy_but_present(self):
        """An empty registry is falsy; callers must compare against None."""
        registry = LiveFileRegistry()
        assert not registry
        assert registry is not None

    def test_naming_lock_is_a_lock(self):
        registry = LiveFileRegistry()
        assert registry.naming_lock.acquire(blocking=False)
        assert not registry.naming_lock.acquire(blocking=False)
        registry.naming_lock.release()

    def test_concurrent_adds(self):
        registry = LiveFileRegistry()

        def worker(n):
            for i in range(100):
                registry.add(f"/tmp/{n}-{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(registry) == 400


class TestDefaultRegistry:
    """Tests for default_registry function."""

    def test_singleton(self):
        assert default_registry() is default_registry()

    def test_is_registry(self):
        assert isinstance(default_registry(), LiveFileRegistry)
