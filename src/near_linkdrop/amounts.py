from decimal import Decimal, InvalidOperation
from typing import Union

from near_linkdrop.constants import DROP_FEE, KEY_FEE, OFFSET
from near_linkdrop.utils import parse_near_amount

Number = Union[str, int, Decimal]


def _decimal(value: Number, name: str) -> Decimal:
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not result.is_finite() or result < 0:
        raise ValueError(f"{name} must be a non-negative number, got {value!r}")
    return result


def _check_counts(num_keys: int, uses_per_key: int):
    if num_keys < 1:
        raise ValueError(f"num_keys must be at least 1, got {num_keys}")
    if uses_per_key < 1:
        raise ValueError(f"uses_per_key must be at least 1, got {uses_per_key}")


def calculate_funding_amount(
    deposit_per_use: Number,
    num_keys: int,
    uses_per_key: int,
    key_fee: Number = KEY_FEE,
    offset: Number = OFFSET,
    drop_fee: Number = DROP_FEE,
) -> str:
    """
    Balance to attach to ``add_to_balance`` so the proxy can cover a drop.

    ``(deposit_per_use + key_fee + offset) * num_keys * uses_per_key + drop_fee``,
    all in NEAR. The drop fee is charged once per drop.

    Returns:
        Total in yoctoNEAR as a decimal string

    Raises:
        ValueError: If num_keys or uses_per_key is below 1, or an amount is negative
    """
    _check_counts(num_keys, uses_per_key)
    per_use = (
        _decimal(deposit_per_use, "deposit_per_use")
        + _decimal(key_fee, "key_fee")
        + _decimal(offset, "offset")
    )
    total = per_use * num_keys * uses_per_key + _decimal(drop_fee, "drop_fee")
    return parse_near_amount(total)


def calculate_ft_transfer_amount(
    balance_per_use: Number,
    num_keys: int,
    uses_per_key: int,
    surplus_factor: int = 2,
) -> str:
    """
    Fungible tokens to send to the proxy, in the token's smallest unit.
    """
    _check_counts(num_keys, uses_per_key)
    if surplus_factor < 1:
        raise ValueError(f"surplus_factor must be at least 1, got {surplus_factor}")
    balance = _decimal(balance_per_use, "balance_per_use")
    if balance != balance.to_integral_value():
        raise ValueError(f"balance_per_use must be an integer, got {balance_per_use!r}")
    return str(int(balance) * num_keys * uses_per_key * surplus_factor)
