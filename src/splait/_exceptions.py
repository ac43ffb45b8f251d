"""Custom exceptions for splait."""


class SplaitError(Exception):
    """Base exception for splait."""


class ConfigurationError(SplaitError):
    """Invalid configuration (missing API key, bad precision, etc.)."""


class InvalidInputError(SplaitError):
    """Malformed parse request (missing, empty or non-string input)."""


class UpstreamUnavailableError(SplaitError):
    """The LLM provider could not be reached or answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnparseableResponseError(SplaitError):
    """The LLM provider answered, but not with a usable JSON object."""

    def __init__(self, message: str, content: str | None = None) -> None:
        super().__init__(message)
        self.content = content


class InvalidPlanError(SplaitError):
    """A split plan cannot be turned into on-chain transfers."""


class TransactionError(SplaitError):
    """Transaction failed."""


class TransactionRejectedError(TransactionError):
    """Transaction was rejected by the wallet."""


class TransactionRevertedError(TransactionError):
    """Transaction reverted on-chain."""


class InsufficientGasError(TransactionError):
    """Insufficient gas for transaction."""
