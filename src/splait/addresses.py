"""
Account identifier validation for split recipients.
"""

import re
from typing import Any

from web3 import Web3

from .constants import ADDRESS_LENGTH, ADDRESS_PREFIX

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_valid_address(value: Any) -> bool:
    """
    Check that a value is a well-formed account identifier.

    A valid identifier is a string of exactly 42 characters: the ``0x``
    prefix followed by 40 hexadecimal digits in any case. No checksum or
    on-chain lookup is performed.

    Args:
        value: Candidate identifier (any type)

    Returns:
        True if valid, False otherwise
    """
    if not isinstance(value, str):
        return False
    if len(value) != ADDRESS_LENGTH or not value.startswith(ADDRESS_PREFIX):
        return False
    return ADDRESS_PATTERN.match(value) is not None


def canonicalize(address: str) -> str:
    """Lowercase form of an already-validated address."""
    return address.lower()


def to_checksum(address: str) -> str:
    """
    Convert an address to its EIP-55 checksum form for contract calls.

    Raises:
        ValueError: If the address is not well-formed
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    return Web3.to_checksum_address(canonicalize(address))
