import pytest

from near_linkdrop.constants import NEAR_NOMINATION
from near_linkdrop.utils import format_near_amount, parse_near_amount


@pytest.mark.parametrize(
    "amount, yocto",
    [
        ("1", NEAR_NOMINATION),
        ("0.005", 5 * 10**21),
        ("1,000", 1000 * NEAR_NOMINATION),
        ("0.000000000000000000000001", 1),
        (2, 2 * NEAR_NOMINATION),
    ],
)
def test_parse_near_amount(amount, yocto):
    assert parse_near_amount(amount) == str(yocto)


@pytest.mark.parametrize("amount", ["abc", "0.0000000000000000000000001", "NaN"])
def test_parse_near_amount_rejects(amount):
    with pytest.raises(ValueError):
        parse_near_amount(amount)


def test_format_near_amount():
    assert format_near_amount(4005 * 10**21) == "4.005"
    assert format_near_amount(NEAR_NOMINATION) == "1"
    assert format_near_amount(0) == "0"
