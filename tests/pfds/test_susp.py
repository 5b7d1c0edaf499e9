import threading
import time
from typing import List

import pytest

from pfds.susp import Susp


def test_delay_does_not_run():
    calls: List[int] = []
    susp = Susp.delay(lambda: calls.append(1) or 42)
    assert not susp.forced()
    assert calls == []


def test_force_memoizes():
    calls: List[int] = []

    def compute() -> int:
        calls.append(1)
        return 42

    susp = Susp.delay(compute)
    assert susp.force() == 42
    assert susp.force() == 42
    assert susp.forced()
    assert calls == [1]


def test_now_is_forced():
    susp = Susp.now("done")
    assert susp.forced()
    assert susp.force() == "done"


def test_failed_force_retries():
    attempts: List[int] = []

    def flaky() -> int:
        attempts.append(1)
        if len(attempts) == 1:
            raise ValueError("first time")
        return 7

    susp = Susp.delay(flaky)
    with pytest.raises(ValueError):
        susp.force()
    assert not susp.forced()
    assert susp.force() == 7
    assert len(attempts) == 2


def test_long_chain_forces_without_recursion():
    """Each link forces its predecessor; the chain is longer than the stack"""
    susp: Susp[int] = Susp.now(0)
    for _ in range(20000):
        prev = susp
        susp = Susp.delay(lambda prev=prev: prev.force() + 1, after=prev)
    assert not susp.forced()
    assert susp.force() == 20000
    assert prev.forced()


def test_concurrent_force_runs_once():
    calls: List[int] = []
    start = threading.Event()

    def slow() -> int:
        calls.append(1)
        time.sleep(0.05)
        return 99

    susp = Susp.delay(slow)
    results: List[int] = []

    def worker() -> None:
        start.wait()
        results.append(susp.force())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    start.set()
    for thread in threads:
        thread.join()

    assert results == [99] * 8
    assert calls == [1]
