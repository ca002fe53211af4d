import pytest

from seriespi.errors import InvalidPrecision
from seriespi.precision import convert_precision, digits_to_bits, make_context


def test_digits_to_bits():
    assert digits_to_bits(1) == 3
    assert digits_to_bits(10) == 33
    assert digits_to_bits(100) == 332


def test_single_digit_request():
    p = convert_precision(1)
    assert p.terms == 1
    assert p.working_bits == 9
    assert p.final_bits == 6


def test_term_count_rounds_up():
    assert convert_precision(7).terms == 1
    assert convert_precision(8).terms == 2
    assert convert_precision(50).terms == 8


def test_working_precision_carries_guard_digit():
    p = convert_precision(50)
    assert p.working_bits == digits_to_bits(52)
    assert p.final_bits == digits_to_bits(51)
    assert p.working_bits > p.final_bits


def test_custom_guard_and_rate():
    p = convert_precision(20, digits_per_term=5, guard_digits=4)
    assert p.terms == 4
    assert p.working_bits == digits_to_bits(25)


@pytest.mark.parametrize("bad", [0, -1, True, 1.5, "10"])
def test_invalid_precision(bad):
    with pytest.raises(InvalidPrecision):
        convert_precision(bad)


def test_invalid_precision_is_value_error():
    with pytest.raises(ValueError):
        convert_precision(0)


def test_make_context():
    ctx = make_context(100)
    assert ctx.prec == 100
    assert ctx.mpf(1).context is ctx
