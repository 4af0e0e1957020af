"""Tests for the per-key lock registry."""

import threading
import time

from travellite.application.locks import KeyedLock


def test_lock_is_released_and_forgotten_after_use() -> None:
    """Given a held key, when the block exits, then the registry is empty again."""
    locks = KeyedLock()

    with locks.hold("b-1"):
        assert len(locks) == 1

    assert len(locks) == 0


def test_lock_is_released_when_block_raises() -> None:
    """Given a block that raises, when it exits, then the key can be taken again."""
    locks = KeyedLock()

    try:
        with locks.hold("b-1"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    acquired = threading.Event()

    def take() -> None:
        with locks.hold("b-1"):
            acquired.set()

    worker = threading.Thread(target=take)
    worker.start()
    worker.join(timeout=2)
    assert acquired.is_set()
    assert len(locks) == 0


def test_same_key_is_mutually_exclusive() -> None:
    """Given threads on the same key, when they run, then their critical sections never overlap."""
    locks = KeyedLock()
    inside = 0
    max_inside = 0
    counter_lock = threading.Lock()

    def work() -> None:
        nonlocal inside, max_inside
        with locks.hold("same"):
            with counter_lock:
                inside += 1
                max_inside = max(max_inside, inside)
            time.sleep(0.01)
            with counter_lock:
                inside -= 1

    threads = [threading.Thread(target=work) for _ in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert max_inside == 1
    assert len(locks) == 0


def test_different_keys_do_not_block_each_other() -> None:
    """Given one key held, when another key is requested, then it is granted immediately."""
    locks = KeyedLock()
    granted = threading.Event()

    def take_other() -> None:
        with locks.hold("b-2"):
            granted.set()

    with locks.hold("b-1"):
        worker = threading.Thread(target=take_other)
        worker.start()
        assert granted.wait(timeout=2)
        worker.join()
