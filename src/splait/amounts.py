"""
Amount coercion for split plans.

Amounts travel as decimal strings so that no precision is lost between the
LLM answer, the preview and the on-chain call. Arithmetic is done with
``decimal.Decimal``; conversion to wei goes through web3.
"""

from decimal import (
    ROUND_DOWN,
    ROUND_HALF_UP,
    Decimal,
    DecimalException,
    DefaultContext,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import Any

from web3 import Web3

from .constants import NATIVE_DECIMALS

# Enough digits for any uint256 wei amount expressed in ETH
_DECIMAL_PRECISION = 96


def parse_amount(value: Any) -> Decimal | None:
    """
    Parse a decimal string or real number into a finite Decimal.

    Booleans, non-finite numbers, unparseable strings and any other type
    yield None.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            return None
    elif isinstance(value, int):
        parsed = Decimal(value)
    elif isinstance(value, float):
        # repr() gives the shortest string that round-trips, e.g. 0.1 -> "0.1"
        parsed = Decimal(repr(value))
    elif isinstance(value, Decimal):
        parsed = value
    else:
        return None

    if not parsed.is_finite():
        return None
    return parsed


def _check_precision(precision: int | None) -> None:
    if precision is None:
        return
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise ValueError(f"precision must be a non-negative integer, got {precision!r}")


def _digits_for(amount: Decimal, fractional: int) -> int:
    """Context precision that holds `amount` with `fractional` decimals exactly."""
    if amount.adjusted() > DefaultContext.Emax:
        raise Overflow(f"{amount} is out of range")
    # integer digits, a rounding carry and one guard digit
    return max(_DECIMAL_PRECISION, amount.adjusted() + fractional + 3)


def _render_plain(amount: Decimal) -> str:
    """Positional notation, no exponent, no trailing zeros."""
    if amount == 0:
        return "0"
    with localcontext() as ctx:
        ctx.prec = max(_DECIMAL_PRECISION, len(amount.as_tuple().digits))
        return format(amount.normalize(), "f")


def _render_fixed(amount: Decimal, precision: int) -> str:
    """Round half-up to `precision` fractional digits, keeping trailing zeros."""
    with localcontext() as ctx:
        ctx.prec = _digits_for(amount, precision)
        quantized = amount.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    if quantized == 0:
        quantized = abs(quantized)
    return format(quantized, "f")


def coerce(value: Any, precision: int | None = None) -> str:
    """
    Convert a string or numeric amount into a canonical decimal string.

    Args:
        value: Decimal string or real number. Anything else yields "0".
        precision: Fractional digits to round to. None keeps string input
            verbatim (stripped) and renders numbers without rounding.

    Returns:
        Decimal string

    Raises:
        ValueError: If precision is negative or not an integer

    Example:
        >>> coerce("2.5")
        '2.5'
        >>> coerce(2.5, precision=6)
        '2.500000'
        >>> coerce(["2.5"])
        '0'
    """
    _check_precision(precision)

    parsed = parse_amount(value)
    if parsed is None:
        return "0"

    if precision is None and isinstance(value, str):
        return value.strip()

    try:
        if precision is not None:
            return _render_fixed(parsed, precision)
        return _render_plain(parsed)
    except DecimalException:
        # Exponent beyond what decimal can render
        return "0"


def split_equally(total: Any, count: int, precision: int | None = None) -> str:
    """
    Compute the per-recipient share of an equal split.

    Without a precision the share is truncated to wei precision (18 digits)
    so the shares never add up to more than the total.

    Raises:
        ValueError: If count is not positive or total is not a number
    """
    _check_precision(precision)
    if count <= 0:
        raise ValueError(f"count must be positive, got {count}")

    parsed = parse_amount(total)
    if parsed is None:
        raise ValueError(f"Invalid total amount: {total!r}")

    try:
        with localcontext() as ctx:
            # Quotient digits are truncated, never rounded up
            ctx.prec = _digits_for(parsed, max(NATIVE_DECIMALS, precision or 0))
            ctx.rounding = ROUND_DOWN
            share = parsed / count
            if precision is None:
                share = share.quantize(Decimal(1).scaleb(-NATIVE_DECIMALS))

        if precision is not None:
            return _render_fixed(share, precision)
        return _render_plain(share)
    except DecimalException as e:
        raise ValueError(f"Invalid total amount: {total!r}") from e


def to_wei(amount: Any) -> int:
    """
    Convert an ETH amount (decimal string or number) to wei.

    Digits beyond wei precision are truncated.

    Raises:
        ValueError: If the amount is not a number or is negative
    """
    parsed = parse_amount(amount)
    if parsed is None:
        raise ValueError(f"Invalid amount: {amount!r}")
    if parsed < 0:
        raise ValueError(f"Amount must not be negative, got {amount!r}")
    return Web3.to_wei(parsed, "ether")
