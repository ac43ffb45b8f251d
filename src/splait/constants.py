"""Address, amount and parsing constants for splait."""

# Account identifiers: "0x" + 40 hex digits
ADDRESS_PREFIX = "0x"
ADDRESS_LENGTH = 42

# Native unit (ETH) has 18 decimals
NATIVE_DECIMALS = 18
DEFAULT_CURRENCY_SYMBOL = "ETH"

# Split types accepted from a candidate plan
SPLIT_TYPES: tuple[str, ...] = ("equal", "custom")
DEFAULT_SPLIT_TYPE = "equal"

# Confidence assigned to plans recovered by the regex extractor.
# Lower than a typical LLM answer to mark the degraded path.
FALLBACK_CONFIDENCE = 0.8

# Confidence assigned to explicit equal splits over a known address list
EXPLICIT_SPLIT_CONFIDENCE = 1.0

# Error messages embedded in SplitPlan.error
NO_VALID_RECIPIENTS = "No valid recipients found"
COULD_NOT_PARSE = "Could not parse input"
NO_RECIPIENTS_PROVIDED = "No recipients provided"
INVALID_TOTAL_AMOUNT = "Invalid total amount"

# LLM provider defaults (OpenAI-compatible chat completions)
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_COMPLETION_TOKENS = 500

# Request limits
MAX_INPUT_LENGTH = 500
