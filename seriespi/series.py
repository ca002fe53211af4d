import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Sequence

from mpmath.ctx_mp import MPContext

from .errors import WorkerFailure
from .factorial import FactorialCache, build_factorial_cache
from .partition import partition_range
from .precision import DIGITS_PER_TERM, GUARD_DIGITS, convert_precision, make_context


logger = logging.getLogger(__name__)

_A = 1103
_B = 26390
_C = 396
_D = 9801


def series_term(ctx: MPContext, cache: FactorialCache, k: int):
    top = cache.get(4 * k) * (ctx.mpf(_A) + ctx.mpf(_B) * k)
    bottom = cache.get(k) ** 4 * ctx.mpf(_C) ** (4 * k)
    return top / bottom


def sum_range(ctx: MPContext, cache: FactorialCache, indices: range):
    s = ctx.mpf(0)
    for k in indices:
        s += series_term(ctx, cache, k)
    return s


def partial_sum(ctx: MPContext, cache: FactorialCache, ranges: Iterable[range], worker: int = 0):
    start = time.perf_counter()
    s = ctx.mpf(0)
    done = 0
    for r in ranges:
        job_start = time.perf_counter()
        logger.debug("worker %d starting on [%d, %d)", worker, r.start, r.stop)
        s += sum_range(ctx, cache, r)
        done += 1
        logger.debug("worker %d done with [%d, %d) in %.6fs", worker, r.start, r.stop, time.perf_counter() - job_start)
    logger.debug("worker %d done in %.6fs, %d ranges (thread %s)", worker, time.perf_counter() - start, done, threading.current_thread().name)
    return s


def sum_with_threads(ctx: MPContext, cache: FactorialCache, tasks: Sequence[List[range]]):
    with ThreadPoolExecutor(max_workers=len(tasks), thread_name_prefix="seriespi") as ex:
        futures = [ex.submit(partial_sum, ctx, cache, task, i) for i, task in enumerate(tasks)]
        partials = []
        for i, fut in enumerate(futures):
            try:
                partials.append(fut.result())
            except Exception as exc:
                for other in futures:
                    other.cancel()
                raise WorkerFailure(i, exc) from exc
    return partials


def finalize(ctx: MPContext, partials: Iterable, final_bits: int):
    """Turn the summed series (which converges to 1/pi) into pi at ``final_bits``."""
    total = ctx.mpf(0)
    for p in partials:
        total += p
    total *= (ctx.mpf(2) * ctx.sqrt(2)) / ctx.mpf(_D)
    pi = 1 / total
    return make_context(final_bits).mpf(pi)


def compute_pi(
    requested_digits: int,
    worker_count: int = 1,
    digits_per_term: int = DIGITS_PER_TERM,
    guard_digits: int = GUARD_DIGITS,
):
    total_start = time.perf_counter()
    precision = convert_precision(requested_digits, digits_per_term=digits_per_term, guard_digits=guard_digits)
    if isinstance(worker_count, bool) or int(worker_count) < 1:
        raise ValueError("worker_count must be >= 1")
    worker_count = int(worker_count)
    n = precision.terms
    logger.debug("input precision: %d digits", requested_digits)
    logger.debug("used precision: %d bits (final %d bits)", precision.working_bits, precision.final_bits)
    logger.debug("iterations: %d", n)

    ctx = make_context(precision.working_bits)
    cache_start = time.perf_counter()
    # 4 * (n - 1) is the largest factorial argument any term needs.
    cache = build_factorial_cache(ctx, 4 * n)
    logger.debug("cache preparation done in %.6fs", time.perf_counter() - cache_start)

    tasks = partition_range(n, worker_count) if worker_count > 1 else None
    if tasks is None:
        partials = [partial_sum(ctx, cache, [range(n)])]
    else:
        partials = sum_with_threads(ctx, cache, tasks)

    pi = finalize(ctx, partials, precision.final_bits)
    logger.debug("total execution done in %.6fs", time.perf_counter() - total_start)
    return pi
