from __future__ import annotations

import threading
import time

import pytest

from repobatch.parallel import fan_out


def test_results_follow_input_order_not_completion_order():
    # later items finish first
    results = fan_out(lambda i: (time.sleep((5 - i) * 0.01), i)[1], range(5))

    assert results == [0, 1, 2, 3, 4]


def test_empty_input():
    assert fan_out(lambda i: i, []) == []


def test_all_siblings_run_before_an_error_surfaces():
    finished = []
    lock = threading.Lock()

    def work(i):
        if i == 0:
            raise RuntimeError("boom")
        time.sleep(0.02)
        with lock:
            finished.append(i)
        return i

    with pytest.raises(RuntimeError):
        fan_out(work, [0, 1, 2])

    assert sorted(finished) == [1, 2]


def test_nested_fan_outs_do_not_starve():
    # every level owns its pool, so inner calls never wait on outer workers
    results = fan_out(lambda i: fan_out(lambda j: (i, j), range(3)), range(4))

    assert results == [[(i, j) for j in range(3)] for i in range(4)]
