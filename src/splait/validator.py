"""Validation and cleanup of candidate split plans."""

import logging
from collections.abc import Mapping
from numbers import Real
from typing import Any

from .addresses import canonicalize, is_valid_address
from .amounts import coerce
from .constants import ADDRESS_LENGTH, ADDRESS_PREFIX, NO_VALID_RECIPIENTS, SPLIT_TYPES
from .types import Recipient, SplitPlan

logger = logging.getLogger(__name__)


def _clean_recipient(entry: Any, precision: int | None) -> Recipient | None:
    if not isinstance(entry, Mapping):
        return None

    address = entry.get("address")
    if not isinstance(address, str):
        return None
    if len(address) != ADDRESS_LENGTH or not address.startswith(ADDRESS_PREFIX):
        return None
    if not is_valid_address(address):
        return None

    return Recipient(
        address=canonicalize(address),
        amount=coerce(entry.get("amount"), precision),
    )


def _clean_confidence(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        return 0.0
    if not 0 <= value <= 1:
        return 0.0
    return float(value)


def validate(candidate: Any, precision: int | None = None) -> SplitPlan:
    """
    Turn an untrusted candidate plan into a well-formed SplitPlan.

    The candidate usually comes straight from an LLM answer or a user edit,
    so every field is checked on its own and anything unrecognized falls back
    to the zero plan default. Recipients with a malformed address are
    dropped without error.

    Never raises (apart from an invalid ``precision``, which is a caller bug).

    Args:
        candidate: Decoded JSON object, or anything else
        precision: Fractional digits to round amounts to (None = passthrough)

    Returns:
        SplitPlan; carries ``error`` when no valid recipient survived

    Example:
        >>> plan = validate({"recipients": [{"address": "0xBAD", "amount": "1"}]})
        >>> plan.error
        'No valid recipients found'
    """
    total_amount = "0"
    recipients: list[Recipient] = []
    split_type = "equal"
    confidence = 0.0
    error: str | None = None

    if isinstance(candidate, Mapping):
        if candidate.get("splitType") in SPLIT_TYPES:
            split_type = candidate["splitType"]

        raw_total = candidate.get("totalAmount")
        if isinstance(raw_total, (str, Real)) and not isinstance(raw_total, bool):
            total_amount = coerce(raw_total, precision)

        raw_recipients = candidate.get("recipients")
        if isinstance(raw_recipients, (list, tuple)):
            for entry in raw_recipients:
                recipient = _clean_recipient(entry, precision)
                if recipient is None:
                    logger.debug("Dropping recipient with invalid address: %r", entry)
                    continue
                recipients.append(recipient)

        confidence = _clean_confidence(candidate.get("confidence"))

        if isinstance(candidate.get("error"), str):
            error = candidate["error"]
    else:
        logger.debug("Unrecognized candidate plan of type %s", type(candidate).__name__)

    if not recipients and error is None:
        error = NO_VALID_RECIPIENTS
        confidence = 0.0

    return SplitPlan(
        total_amount=total_amount,
        recipients=recipients,
        split_type=split_type,
        confidence=confidence,
        error=error,
    )
