# Suppress websockets deprecation warning from web3.py (ethereum/web3.py#3530)
# web3.py unconditionally imports LegacyWebSocketProvider even for HTTP-only usage.
# This will be fixed in web3.py v8. Remove this filter after upgrading.
import warnings

warnings.filterwarnings(
    "ignore",
    message="websockets.legacy is deprecated",
    category=DeprecationWarning,
    module=r"websockets\.legacy",
)

"""
Splait

Split native funds among several addresses from a plain-language instruction.
An LLM turns the instruction into a split plan; every plan is validated, and
a regex fallback recovers equal splits when the LLM is unavailable.

Usage (sync):
    from splait import SplaitConfig, SplitParser

    parser = SplitParser(SplaitConfig(api_key="sk-..."))
    plan = parser.parse("Split 10 ETH equally among 0x..., 0x...")

    if plan.usable:
        print(plan.to_response())

Without the LLM:
    from splait import extract, validate

    plan = extract("Split 10 ETH equally among 0x..., 0x...")
    plan = validate({"totalAmount": "3", "recipients": [...], "splitType": "custom"})

Submitting a plan:
    from splait import execute_split_plan
    from web3 import AsyncWeb3
    from eth_account import Account

    w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
    account = Account.from_key("0x...")
    result = await execute_split_plan(w3, account, contract_address, plan)
"""

from ._exceptions import (
    ConfigurationError,
    InsufficientGasError,
    InvalidInputError,
    InvalidPlanError,
    SplaitError,
    TransactionError,
    TransactionRejectedError,
    TransactionRevertedError,
    UnparseableResponseError,
    UpstreamUnavailableError,
)
from ._version import __version__

# ABI (for advanced usage)
from .abi import SPLAIT_ABI

# Core
from .addresses import canonicalize, is_valid_address, to_checksum
from .amounts import coerce, split_equally, to_wei

# Configuration
from .config import SplaitConfig

# Constants
from .constants import FALLBACK_CONFIDENCE, MAX_INPUT_LENGTH, NATIVE_DECIMALS

# On-chain execution
from .execute import execute_split_plan
from .fallback import extract

# Plan helpers
from .helpers import calculate_equal_split, edit_total, to_transfers, total_wei

# LLM clients
from .llm import SYSTEM_PROMPT, AsyncOpenAIChatClient, OpenAIChatClient, extract_json

# Parsers
from .parser import AsyncSplitParser, SplitParser

# Types
from .types import ExecuteResult, GasOptions, Recipient, SplitPlan, SplitType, Transfer
from .validator import validate

__all__ = [
    # Version
    "__version__",
    # Configuration
    "SplaitConfig",
    # Parsers
    "SplitParser",
    "AsyncSplitParser",
    # LLM clients
    "OpenAIChatClient",
    "AsyncOpenAIChatClient",
    "extract_json",
    "SYSTEM_PROMPT",
    # Core
    "validate",
    "extract",
    "is_valid_address",
    "canonicalize",
    "to_checksum",
    "coerce",
    "split_equally",
    "to_wei",
    # Plan helpers
    "calculate_equal_split",
    "edit_total",
    "to_transfers",
    "total_wei",
    # Execution
    "execute_split_plan",
    # Types
    "SplitPlan",
    "Recipient",
    "SplitType",
    "Transfer",
    "ExecuteResult",
    "GasOptions",
    # Constants
    "FALLBACK_CONFIDENCE",
    "MAX_INPUT_LENGTH",
    "NATIVE_DECIMALS",
    # ABI
    "SPLAIT_ABI",
    # Exceptions
    "SplaitError",
    "ConfigurationError",
    "InvalidInputError",
    "UpstreamUnavailableError",
    "UnparseableResponseError",
    "InvalidPlanError",
    "TransactionError",
    "TransactionRejectedError",
    "TransactionRevertedError",
    "InsufficientGasError",
]
