"""Helper functions for building, editing and submitting split plans."""

from typing import Any

from ._exceptions import InvalidPlanError
from .addresses import canonicalize, is_valid_address, to_checksum
from .amounts import coerce, parse_amount, split_equally, to_wei
from .constants import (
    EXPLICIT_SPLIT_CONFIDENCE,
    INVALID_TOTAL_AMOUNT,
    NO_RECIPIENTS_PROVIDED,
)
from .types import Recipient, SplitPlan, Transfer
from .validator import validate


def calculate_equal_split(
    total_amount: Any,
    addresses: list[str],
    precision: int | None = None,
) -> SplitPlan:
    """
    Build an equal split over a known list of addresses.

    Unlike the fallback extractor, the inputs are explicit, so the result
    carries full confidence. Problems are reported in ``error``.

    Example:
        >>> plan = calculate_equal_split("10", ["0x" + "11" * 20, "0x" + "22" * 20])
        >>> [r.amount for r in plan.recipients]
        ['5', '5']
    """
    if not addresses:
        return SplitPlan(error=NO_RECIPIENTS_PROVIDED)

    invalid = [address for address in addresses if not is_valid_address(address)]
    if invalid:
        return SplitPlan(error=f"Invalid addresses: {', '.join(map(str, invalid))}")

    total = parse_amount(total_amount)
    if total is None or total <= 0:
        return SplitPlan(error=INVALID_TOTAL_AMOUNT)

    share = split_equally(total_amount, len(addresses), precision)
    return SplitPlan(
        total_amount=coerce(total_amount, precision),
        recipients=[
            Recipient(address=canonicalize(address), amount=share) for address in addresses
        ],
        split_type="equal",
        confidence=EXPLICIT_SPLIT_CONFIDENCE,
    )


def edit_total(plan: SplitPlan, new_total: Any, precision: int | None = None) -> SplitPlan:
    """
    Apply a user edit of the total amount.

    The new total is divided equally over the plan's recipients and the
    edited plan goes back through validate(), like any other candidate.
    """
    total = parse_amount(new_total)
    if total is None or total < 0:
        return plan.model_copy(update={"error": INVALID_TOTAL_AMOUNT, "confidence": 0.0})

    candidate: dict[str, Any] = {
        "totalAmount": coerce(new_total, precision),
        "splitType": "equal",
        "confidence": plan.confidence,
        "recipients": [],
    }
    if plan.recipients:
        share = split_equally(new_total, len(plan.recipients), precision)
        candidate["recipients"] = [
            {"address": r.address, "amount": share} for r in plan.recipients
        ]

    return validate(candidate, precision)


def to_transfers(plan: SplitPlan) -> list[Transfer]:
    """
    Convert a plan into checksum-address / wei transfers for the contract.

    Raises:
        InvalidPlanError: If the plan is unusable or an amount is not positive
    """
    if not plan.usable:
        raise InvalidPlanError(plan.error or "Plan has no recipients")

    transfers = []
    for recipient in plan.recipients:
        try:
            amount_wei = to_wei(recipient.amount)
            address = to_checksum(recipient.address)
        except ValueError as e:
            raise InvalidPlanError(str(e)) from e
        if amount_wei <= 0:
            raise InvalidPlanError(
                f"Amount for {recipient.address} must be positive, got {recipient.amount}"
            )
        transfers.append(Transfer(address=address, amount_wei=amount_wei))

    return transfers


def total_wei(transfers: list[Transfer]) -> int:
    """Value to attach to the split call: the sum of all transfers."""
    return sum(t.amount_wei for t in transfers)
