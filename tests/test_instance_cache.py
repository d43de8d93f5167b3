"""
Tests for the per-model instance registry.
"""

import threading
import time

import pytest

from lookupable import InstanceRegistry


class Loader:
    """Loader stub counting its calls."""

    def __init__(self, records=("a", "b"), delay=0.0):
        self.records = list(records)
        self.delay = delay
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        return self.records


@pytest.fixture
def registry():
    return InstanceRegistry()


def test_loads_once(registry):
    """Test the loader runs only on the first read."""
    loader = Loader()

    first = registry.get_or_load("widgets", loader)
    second = registry.get_or_load("widgets", loader)

    assert first == ("a", "b")
    assert second is first
    assert loader.calls == 1


def test_snapshot_is_immutable_copy(registry):
    """Test later changes to the loaded list do not leak into the snapshot."""
    loader = Loader()
    snapshot = registry.get_or_load("widgets", loader)

    loader.records.append("c")

    assert snapshot == ("a", "b")
    assert registry.get_or_load("widgets", loader) == ("a", "b")


def test_keys_are_independent(registry):
    """Test each key has its own snapshot."""
    registry.get_or_load("widgets", Loader(["w"]))
    registry.get_or_load("tags", Loader(["t"]))

    assert registry.peek("widgets") == ("w",)
    assert registry.peek("tags") == ("t",)
    assert set(registry.loaded_keys()) == {"widgets", "tags"}


def test_empty_snapshot_is_cached(registry):
    """Test an empty collection still counts as loaded."""
    loader = Loader([])

    assert registry.get_or_load("widgets", loader) == ()
    assert registry.get_or_load("widgets", loader) == ()
    assert loader.calls == 1
    assert registry.is_loaded("widgets")


def test_failed_load_is_retried(registry):
    """Test an exception propagates and is not cached."""
    calls = []

    def failing():
        calls.append(1)
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        registry.get_or_load("widgets", failing)

    assert not registry.is_loaded("widgets")
    assert registry.get_or_load("widgets", Loader(["ok"])) == ("ok",)
    assert registry.get_stats().failed_loads == 1


def test_concurrent_first_reads_load_once(registry):
    """Test racing threads share a single load."""
    loader = Loader(delay=0.05)
    results = []

    def read():
        results.append(registry.get_or_load("widgets", loader))

    threads = [threading.Thread(target=read) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert loader.calls == 1
    assert len(results) == 8
    assert all(result is results[0] for result in results)


def test_stats_while_other_models_load(registry):
    """Test stats and loaded_keys stay readable while new keys are added."""
    errors = []
    done = threading.Event()

    def add_keys():
        try:
            for i in range(2000):
                registry.get_or_load(f"model-{i}", Loader(["r"]))
        finally:
            done.set()

    def read_stats():
        try:
            while not done.is_set():
                registry.loaded_keys()
                registry.get_stats()
        except RuntimeError as e:
            errors.append(e)

    threads = [threading.Thread(target=add_keys), threading.Thread(target=read_stats)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(registry.loaded_keys()) == 2000
    assert registry.get_stats().records == 2000


def test_peek_does_not_load(registry):
    """Test peek never calls a loader."""
    assert registry.peek("widgets") is None
    assert not registry.is_loaded("widgets")


def test_stats(registry):
    """Test hit/load accounting."""
    registry.get_or_load("widgets", Loader(["a", "b"]))
    registry.get_or_load("widgets", Loader())
    registry.get_or_load("widgets", Loader())
    registry.get_or_load("tags", Loader(["t"]))

    stats = registry.get_stats()
    assert stats.loads == 2
    assert stats.hits == 2
    assert stats.size == 2
    assert stats.records == 3
    assert stats.hit_rate == 0.5


def test_clear(registry):
    """Test clear drops snapshots and resets stats."""
    loader = Loader()
    registry.get_or_load("widgets", loader)

    registry.clear()

    assert registry.loaded_keys() == []
    assert registry.get_stats().loads == 0
    registry.get_or_load("widgets", loader)
    assert loader.calls == 2
