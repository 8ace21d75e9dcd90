from datetime import datetime
from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from near_linkdrop.constants import NEAR_NOMINATION, NEAR_NOMINATION_EXP


def utcnow():
    """
    Get current UTC datetime.

    Returns:
        datetime object representing current UTC time
    """
    return datetime.utcnow()


def timestamp():
    """
    Get current UTC timestamp.

    Returns:
        float representing seconds since Unix epoch
    """
    return utcnow().timestamp()


def parse_near_amount(amount: Union[str, int, Decimal]) -> str:
    """
    Convert a human readable NEAR amount to yoctoNEAR.

    Args:
        amount: Amount in NEAR, e.g. "1.5" or Decimal("0.005")

    Returns:
        Amount in yoctoNEAR as a decimal string

    Raises:
        ValueError: If the amount is not a number or has more than 24 fractional digits
    """
    try:
        value = Decimal(str(amount).strip().replace(",", ""))
    except InvalidOperation:
        raise ValueError(f"Invalid NEAR amount: {amount!r}")
    if not value.is_finite():
        raise ValueError(f"Invalid NEAR amount: {amount!r}")
    with localcontext() as ctx:
        ctx.prec = 80
        yocto = value.scaleb(NEAR_NOMINATION_EXP)
    if yocto != yocto.to_integral_value():
        raise ValueError(
            f"Cannot parse {amount!r} as NEAR amount, too many fractional digits"
        )
    return str(int(yocto))


def format_near_amount(yocto: Union[str, int]) -> str:
    """
    Convert a yoctoNEAR amount to a NEAR string without trailing zeros.
    """
    with localcontext() as ctx:
        ctx.prec = 80
        value = Decimal(int(yocto)) / NEAR_NOMINATION
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
