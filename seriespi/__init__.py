__all__ = [
    "compute_pi",
    "convert_precision",
    "build_factorial_cache",
    "partition_range",
    "render_decimal",
    "FactorialCache",
    "Precision",
    "SeriesPiError",
    "InvalidPrecision",
    "CacheIndexOutOfRange",
    "WorkerFailure",
]

from .constants import render_decimal
from .errors import CacheIndexOutOfRange, InvalidPrecision, SeriesPiError, WorkerFailure
from .factorial import FactorialCache, build_factorial_cache
from .partition import partition_range
from .precision import Precision, convert_precision
from .series import compute_pi
