"""Timing harness for the series engine.

Measures three groups: the single-threaded path, the threaded path and the
factorial cache on its own.
"""
import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List

from .factorial import build_factorial_cache
from .precision import convert_precision, make_context
from .series import compute_pi


logger = logging.getLogger(__name__)

GROUP_NO_THREADS = "no threads"
GROUP_WITH_THREADS = "with threads"
GROUP_CACHE_INIT = "factorial cache init"


@dataclass(frozen=True)
class BenchRow:
    group: str
    digits: int
    workers: int
    samples: int
    best: float
    mean: float


def keypoints(start: int, stop: int, step: int) -> List[int]:
    if step < 1:
        raise ValueError("step must be >= 1")
    if start < 1:
        raise ValueError("start must be >= 1")
    return list(range(start, stop, step))


def time_call(fn: Callable[[], object], samples: int):
    samples = int(samples)
    if samples < 1:
        raise ValueError("samples must be >= 1")
    timings = []
    for _ in range(samples):
        t0 = time.perf_counter()
        fn()
        timings.append(time.perf_counter() - t0)
    return min(timings), math.fsum(timings) / len(timings)


def run_benchmark(digit_points: Iterable[int], worker_count: int, samples: int = 10) -> Iterator[BenchRow]:
    for digits in digit_points:
        precision = convert_precision(digits)
        groups = [
            (GROUP_NO_THREADS, 1, lambda: compute_pi(digits, 1)),
            (GROUP_WITH_THREADS, worker_count, lambda: compute_pi(digits, worker_count)),
            (
                GROUP_CACHE_INIT,
                1,
                lambda: build_factorial_cache(make_context(precision.working_bits), 4 * precision.terms),
            ),
        ]
        for group, workers, fn in groups:
            best, mean = time_call(fn, samples)
            logger.info("%s/%d: best %.6fs mean %.6fs", group, digits, best, mean)
            yield BenchRow(group, digits, workers, samples, best, mean)


def format_rows(rows: Iterable[BenchRow]) -> str:
    lines = [f"{'group':<22}{'digits':>8}{'workers':>9}{'best (s)':>12}{'mean (s)':>12}"]
    for r in rows:
        lines.append(f"{r.group:<22}{r.digits:>8}{r.workers:>9}{r.best:>12.6f}{r.mean:>12.6f}")
    return "\n".join(lines)
