from decimal import Decimal

import pytest

from near_linkdrop.amounts import calculate_ft_transfer_amount, calculate_funding_amount
from near_linkdrop.constants import NEAR_NOMINATION


def test_single_key_funding_amount():
    total = calculate_funding_amount(
        "1", num_keys=1, uses_per_key=1, key_fee="0.005", offset=2, drop_fee=1
    )
    assert total == str(4005 * NEAR_NOMINATION // 1000)


def test_default_fees_match_explicit_ones():
    assert calculate_funding_amount("1", 1, 1) == calculate_funding_amount(
        "1", 1, 1, key_fee="0.005", offset="2", drop_fee="1"
    )


@pytest.mark.parametrize(
    "deposit, key_fee, offset, num_keys, uses, drop_fee",
    [
        ("0", "0", "0", 1, 1, "0"),
        ("0.5", "0.005", "2", 3, 1, "1"),
        ("1.25", "0.01", "0", 10, 4, "2"),
        ("100", "0.005", "2", 50, 2, "1"),
    ],
)
def test_formula(deposit, key_fee, offset, num_keys, uses, drop_fee):
    expected = (
        (Decimal(deposit) + Decimal(key_fee) + Decimal(offset)) * num_keys * uses
        + Decimal(drop_fee)
    ) * NEAR_NOMINATION
    total = calculate_funding_amount(
        deposit, num_keys, uses, key_fee=key_fee, offset=offset, drop_fee=drop_fee
    )
    assert int(total) == int(expected)


def test_drop_fee_is_charged_once():
    one = int(calculate_funding_amount("1", 1, 1, key_fee=0, offset=0, drop_fee=1))
    ten = int(calculate_funding_amount("1", 10, 1, key_fee=0, offset=0, drop_fee=1))
    assert ten - one == 9 * NEAR_NOMINATION


def test_monotonic_in_keys_and_uses():
    by_keys = [int(calculate_funding_amount("0.1", n, 2)) for n in range(1, 8)]
    by_uses = [int(calculate_funding_amount("0.1", 2, u)) for u in range(1, 8)]
    assert by_keys == sorted(by_keys)
    assert by_uses == sorted(by_uses)


@pytest.mark.parametrize("num_keys, uses", [(0, 1), (1, 0), (-1, 1), (1, -2)])
def test_rejects_non_positive_counts(num_keys, uses):
    with pytest.raises(ValueError):
        calculate_funding_amount("1", num_keys, uses)


def test_rejects_negative_deposit():
    with pytest.raises(ValueError):
        calculate_funding_amount("-1", 1, 1)


def test_ft_transfer_amount():
    assert calculate_ft_transfer_amount("25", num_keys=1, uses_per_key=1) == "50"
    assert calculate_ft_transfer_amount("25", 3, 2, surplus_factor=1) == "150"


def test_ft_transfer_amount_must_be_integral():
    with pytest.raises(ValueError):
        calculate_ft_transfer_amount("2.5", 1, 1)
