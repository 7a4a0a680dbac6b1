from __future__ import annotations

import logging
import threading
import time

import pytest
from yht_client import NetworkError, TokenManager
from yht_client.errors import ApiError


def _sequence(*steps):
    """fetch() that replays tokens or raises errors in order, repeating the last step."""
    items = list(steps)

    def fetch() -> str:
        step = items.pop(0) if len(items) > 1 else items[0]
        if isinstance(step, Exception):
            raise step
        return step

    return fetch


def test_token_is_empty_before_first_refresh() -> None:
    manager = TokenManager(_sequence("t1"))
    assert manager.token == ""


def test_failed_cycle_keeps_last_good_token() -> None:
    manager = TokenManager(_sequence("t1", NetworkError("down"), "t3"))

    assert manager.refresh() is True
    assert manager.token == "t1"
    assert manager.refresh() is False
    assert manager.token == "t1"
    assert manager.refresh() is True
    assert manager.token == "t3"


def test_platform_rejection_is_tolerated() -> None:
    manager = TokenManager(_sequence(ApiError(401, "bad key")))
    assert manager.refresh() is False
    assert manager.token == ""


def test_empty_token_is_treated_as_failure() -> None:
    manager = TokenManager(_sequence("t1", ""))
    manager.refresh()
    assert manager.refresh() is False
    assert manager.token == "t1"


def test_unexpected_errors_are_not_swallowed() -> None:
    manager = TokenManager(_sequence(KeyError("bug")))
    with pytest.raises(KeyError):
        manager.refresh()


def test_start_twice_raises() -> None:
    manager = TokenManager(_sequence("t1"), interval_s=60)
    manager.start()
    try:
        with pytest.raises(RuntimeError):
            manager.start()
    finally:
        manager.stop(timeout=1.0)
    assert not manager.running


def test_loop_refreshes_sequentially_until_stopped() -> None:
    seen = threading.Event()
    lock = threading.Lock()
    active = [0]
    overlaps = []
    counter = [0]

    def fetch() -> str:
        with lock:
            active[0] += 1
            overlaps.append(active[0])
            counter[0] += 1
            n = counter[0]
        if n >= 3:
            seen.set()
        with lock:
            active[0] -= 1
        return f"t{n}"

    manager = TokenManager(fetch, interval_s=0.01)
    manager.start()
    try:
        assert seen.wait(5)
    finally:
        manager.stop(timeout=5)

    assert not manager.running
    assert max(overlaps) == 1
    assert manager.token == f"t{counter[0]}"


def test_concurrent_reader_never_sees_torn_token() -> None:
    good = {f"token-{i:04d}-" + "x" * 64 for i in range(0, 200, 2)}
    counter = [0]
    done = threading.Event()

    def fetch() -> str:
        i = counter[0]
        counter[0] += 1
        if i >= 200:
            done.set()
            raise NetworkError("finished")
        if i % 2:
            raise NetworkError("flaky")
        return f"token-{i:04d}-" + "x" * 64

    manager = TokenManager(fetch, interval_s=0)
    observed: set[str] = set()

    def reader() -> None:
        while not done.is_set():
            observed.add(manager.token)

    t = threading.Thread(target=reader)
    t.start()
    manager.start()
    try:
        assert done.wait(10)
    finally:
        manager.stop(timeout=5)
        t.join(5)

    assert observed <= good | {""}
    assert manager.token == "token-0198-" + "x" * 64


def _wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def test_loop_survives_unexpected_error(caplog) -> None:
    manager = TokenManager(_sequence(KeyError("bug"), "t2"), interval_s=0.01)
    with caplog.at_level(logging.ERROR, logger="yht_client.token_manager"):
        manager.start()
        try:
            assert _wait_for(lambda: manager.token == "t2")
        finally:
            manager.stop(timeout=5)

    assert not manager.running
    assert any("unexpected error" in r.getMessage() for r in caplog.records)


def test_error_during_shutdown_is_not_logged(caplog) -> None:
    holder = {}

    def fetch() -> str:
        # close() tears down the transport while a fetch is in flight
        holder["manager"].stop()
        raise RuntimeError("client closed")

    manager = TokenManager(fetch, interval_s=60)
    holder["manager"] = manager
    with caplog.at_level(logging.ERROR, logger="yht_client.token_manager"):
        manager.start()
        assert _wait_for(lambda: not manager.running)

    assert manager.token == ""
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
