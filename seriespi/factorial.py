from dataclasses import dataclass
from typing import Iterator, Tuple

from mpmath.ctx_mp import MPContext

from .errors import CacheIndexOutOfRange


@dataclass(frozen=True)
class FactorialCache:
    """Factorials ``0! .. max_index!`` rounded to a fixed bit precision.

    Built once by :func:`build_factorial_cache` and shared read-only between
    worker threads. Entry ``i`` is entry ``i - 1`` times ``i`` rounded to
    ``prec`` bits, so large entries are approximations of the exact factorial.
    """

    prec: int
    entries: Tuple

    @property
    def max_index(self) -> int:
        return len(self.entries) - 1

    def get(self, i: int):
        if i < 0 or i > self.max_index:
            raise CacheIndexOutOfRange(i, self.max_index)
        return self.entries[i]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator:
        return iter(self.entries)


def build_factorial_cache(ctx: MPContext, max_index: int) -> FactorialCache:
    max_index = int(max_index)
    if max_index < 0:
        raise ValueError("max_index must be >= 0")
    acc = ctx.mpf(1)
    out = [acc]
    for i in range(1, max_index + 1):
        acc = acc * i
        out.append(acc)
    return FactorialCache(prec=ctx.prec, entries=tuple(out))
