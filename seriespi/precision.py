import logging
import math
from dataclasses import dataclass

from mpmath.ctx_mp import MPContext

from .errors import InvalidPrecision


logger = logging.getLogger(__name__)

# Terms of the 1103 + 26390k series add roughly eight correct digits each.
DIGITS_PER_TERM = 7
GUARD_DIGITS = 1
# Pi has a single digit in front of the point.
INTEGER_DIGITS = 1
# Past this point the factorial cache alone needs gigabytes. Not enforced.
MAX_REASONABLE_DIGITS = 1_000_000


@dataclass(frozen=True)
class Precision:
    terms: int
    working_bits: int
    final_bits: int


def digits_to_bits(decimal_digits: int) -> int:
    return int(math.floor(decimal_digits * math.log2(10)))


def convert_precision(
    requested_digits: int,
    digits_per_term: int = DIGITS_PER_TERM,
    guard_digits: int = GUARD_DIGITS,
) -> Precision:
    """Size the series and the working/final bit budgets for a digit request.

    ``requested_digits`` counts places after the decimal point. The working
    precision carries ``guard_digits`` extra places to absorb the rounding
    done while building the factorial cache and summing terms.

    Both bit budgets are ``floor(digits * log2(10))`` taken over significant
    figures, so the leading ``3`` of pi is counted on top of the requested
    places. The final precision is therefore ``floor((d + 1) * log2(10))``
    rather than ``floor(d * log2(10))``; with the latter a one-place request
    gets 3 bits, which rounds pi to 3.0.
    """
    if isinstance(requested_digits, bool) or not isinstance(requested_digits, int):
        raise InvalidPrecision(f"requested_digits must be an integer, got {requested_digits!r}")
    if requested_digits < 1:
        raise InvalidPrecision("requested_digits must be >= 1")
    if digits_per_term < 1:
        raise InvalidPrecision("digits_per_term must be >= 1")
    if guard_digits < 0:
        raise InvalidPrecision("guard_digits must be >= 0")
    if requested_digits > MAX_REASONABLE_DIGITS:
        logger.warning("%d digits requested; expect very long runtimes and heavy memory use", requested_digits)
    terms = math.ceil(requested_digits / digits_per_term)
    working_digits = requested_digits + guard_digits
    return Precision(
        terms=terms,
        working_bits=digits_to_bits(working_digits + INTEGER_DIGITS),
        final_bits=digits_to_bits(requested_digits + INTEGER_DIGITS),
    )


def make_context(bits: int) -> MPContext:
    ctx = MPContext()
    ctx.prec = bits
    return ctx
