import pytest

from seriespi.bench import (
    GROUP_CACHE_INIT,
    GROUP_NO_THREADS,
    GROUP_WITH_THREADS,
    format_rows,
    keypoints,
    run_benchmark,
    time_call,
)


def test_keypoints():
    assert keypoints(100, 1000, 100) == [100, 200, 300, 400, 500, 600, 700, 800, 900]
    with pytest.raises(ValueError):
        keypoints(100, 1000, 0)
    with pytest.raises(ValueError):
        keypoints(0, 10, 1)


def test_time_call():
    calls = []
    best, mean = time_call(lambda: calls.append(1), 3)
    assert len(calls) == 3
    assert 0 <= best <= mean


def test_run_benchmark_groups():
    rows = list(run_benchmark([10, 20], 2, samples=1))
    assert [(r.group, r.digits) for r in rows] == [
        (GROUP_NO_THREADS, 10),
        (GROUP_WITH_THREADS, 10),
        (GROUP_CACHE_INIT, 10),
        (GROUP_NO_THREADS, 20),
        (GROUP_WITH_THREADS, 20),
        (GROUP_CACHE_INIT, 20),
    ]
    assert rows[1].workers == 2
    table = format_rows(rows)
    assert table.splitlines()[0].startswith("group")
    assert len(table.splitlines()) == 7
