from mpmath.ctx_mp import MPContext

from .precision import digits_to_bits


PI_INTEGER_PART = 3


def render_decimal(x, digits: int) -> str:
    digits = int(digits)
    if digits < 0:
        raise ValueError("digits must be >= 0")
    ctx = MPContext()
    ctx.prec = x.context.prec + digits_to_bits(digits) + 64
    scaled = int(ctx.floor(ctx.mpf(x) * 10**digits))
    head, tail = divmod(scaled, 10**digits)
    if not digits:
        return str(head)
    return f"{head}.{tail:0{digits}d}"


def pi_digits_spigot():
    q, r, t, k, n, l = 1, 0, 1, 1, 3, 3
    while True:
        if 4 * q + r - t < n * t:
            yield n
            q, r, t, k, n, l = (
                10 * q,
                10 * (r - n * t),
                t,
                k,
                ((10 * (3 * q + r)) // t) - 10 * n,
                l,
            )
        else:
            q, r, t, k, n, l = (
                q * k,
                (2 * q + r) * l,
                t * l,
                k + 1,
                (q * (7 * k + 2) + r * l) // (t * l),
                l + 2,
            )


def spigot_fractional_digits(count: int) -> str:
    g = pi_digits_spigot()
    next(g)
    return "".join(str(next(g)) for _ in range(int(count)))


def format_spigot_pi(prefix_digits: int) -> str:
    prefix_digits = int(prefix_digits)
    if prefix_digits < 1:
        raise ValueError("prefix_digits must be >= 1")
    return f"{PI_INTEGER_PART}." + spigot_fractional_digits(prefix_digits - 1)
