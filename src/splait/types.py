"""Type definitions for splait."""

from typing import Literal

from pydantic import BaseModel, Field

from ._exceptions import (
    InsufficientGasError,
    TransactionError,
    TransactionRejectedError,
    TransactionRevertedError,
)

SplitType = Literal["equal", "custom"]


class Recipient(BaseModel):
    """
    One row of a split plan.

    Example:
        Recipient(address="0xa72505f52928f5255fbb82a031ae2d0980ff6621", amount="5")
    """

    address: str
    amount: str

    model_config = {"frozen": True}


class SplitPlan(BaseModel):
    """
    How a total amount is divided among recipients.

    Built fresh for every parse request and never persisted. Python field
    names are snake_case; the wire format (``to_response()``) uses the
    camelCase names ``totalAmount`` and ``splitType``.

    A plan with an ``error`` or without recipients must not be executed.
    """

    total_amount: str = Field(default="0", alias="totalAmount")
    recipients: list[Recipient] = Field(default_factory=list)
    split_type: SplitType = Field(default="equal", alias="splitType")
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    error: str | None = None

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def usable(self) -> bool:
        """True when the plan has recipients and no error."""
        return bool(self.recipients) and self.error is None

    def to_response(self) -> dict:
        """JSON-ready dict with camelCase keys; ``error`` omitted when unset."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Transfer(BaseModel):
    """On-chain transfer: checksum address and amount in wei."""

    address: str
    amount_wei: int = Field(ge=0)

    model_config = {"frozen": True}


# Result status types
ExecuteStatus = Literal["EXECUTED", "FAILED"]
FailedReason = Literal[
    "invalid_plan",
    "wallet_rejected",
    "transaction_failed",
    "transaction_reverted",
    "insufficient_gas",
]


class ExecuteResult(BaseModel):
    """
    Result of execute_split_plan operation.

    status: EXECUTED | FAILED
    """

    status: ExecuteStatus
    signature: str | None = None
    reason: FailedReason | str | None = None
    message: str | None = None

    model_config = {"frozen": True}

    def raise_for_status(self) -> None:
        """Raise the matching TransactionError if the execution failed."""
        if self.status != "FAILED":
            return

        message = self.message or self.reason or "Transaction failed"
        if self.reason == "wallet_rejected":
            raise TransactionRejectedError(message)
        if self.reason == "transaction_reverted":
            raise TransactionRevertedError(message)
        if self.reason == "insufficient_gas":
            raise InsufficientGasError(message)
        raise TransactionError(message)


class GasOptions(BaseModel):
    """
    Gas configuration for transactions.

    By default, uses a fixed gas limit and lets the RPC set gas prices.
    Enable estimate_gas for dynamic estimation, or set EIP-1559 fees explicitly.

    Example:
        GasOptions(estimate_gas=True)  # Dynamic estimation with 20% buffer
        GasOptions(max_fee_per_gas=50_000_000_000)  # 50 gwei max fee
    """

    estimate_gas: bool = False
    """Estimate gas dynamically (adds 20% buffer). Default: False (use fixed limit)."""

    gas_limit: int | None = None
    """Override gas limit. If None, uses default or estimation."""

    max_fee_per_gas: int | None = None
    """EIP-1559 max fee per gas in wei. If set, uses type 2 transactions."""

    max_priority_fee_per_gas: int | None = None
    """EIP-1559 priority fee per gas in wei. Defaults to 1 gwei if max_fee is set."""

    model_config = {"frozen": True}
