"""
Regex fallback for when the LLM produced nothing usable.

Recovers an equal split from the raw instruction: the first "<number> ETH"
is the total, every distinct address is a recipient.
"""

import logging
import re
from typing import Any

from .addresses import canonicalize
from .amounts import coerce, parse_amount, split_equally
from .constants import COULD_NOT_PARSE, DEFAULT_CURRENCY_SYMBOL, FALLBACK_CONFIDENCE
from .types import Recipient, SplitPlan

logger = logging.getLogger(__name__)

ADDRESS_SEARCH_PATTERN = re.compile(r"0x[0-9a-fA-F]{40}")


def _amount_pattern(symbol: str) -> re.Pattern[str]:
    return re.compile(rf"(\d+(?:\.\d+)?)\s*{re.escape(symbol)}\b", re.IGNORECASE)


def find_total(raw_text: str, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """First number followed by the currency symbol, or "0"."""
    match = _amount_pattern(symbol).search(raw_text)
    return match.group(1) if match else "0"


def find_addresses(raw_text: str) -> list[str]:
    """All distinct addresses in the text, lowercased, in first-seen order."""
    seen: dict[str, None] = {}
    for match in ADDRESS_SEARCH_PATTERN.finditer(raw_text):
        seen.setdefault(canonicalize(match.group(0)), None)
    return list(seen)


def extract(
    raw_text: Any,
    precision: int | None = None,
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> SplitPlan:
    """
    Extract an equal split directly from the user's text.

    Args:
        raw_text: The original instruction
        precision: Fractional digits for amounts (None = exact to wei)
        symbol: Native unit symbol that marks the total amount

    Returns:
        SplitPlan with confidence 0.8, or the zero plan with
        error "Could not parse input"

    Example:
        >>> plan = extract("Send 1 ETH to 0x1234567890123456789012345678901234567890")
        >>> plan.recipients[0].amount
        '1'
    """
    if not isinstance(raw_text, str):
        raw_text = ""

    total = find_total(raw_text, symbol)
    addresses = find_addresses(raw_text)

    parsed_total = parse_amount(total)
    if not addresses or parsed_total is None or parsed_total == 0:
        logger.info(
            "Fallback extraction failed (total=%s, addresses=%d)", total, len(addresses)
        )
        return SplitPlan(error=COULD_NOT_PARSE)

    try:
        share = split_equally(total, len(addresses), precision)
    except ValueError:
        logger.info("Fallback extraction failed: total %s out of range", total[:20])
        return SplitPlan(error=COULD_NOT_PARSE)

    return SplitPlan(
        total_amount=coerce(total, precision),
        recipients=[Recipient(address=address, amount=share) for address in addresses],
        split_type="equal",
        confidence=FALLBACK_CONFIDENCE,
    )
