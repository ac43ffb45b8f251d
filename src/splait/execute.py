"""Standalone execute_split_plan operation: submit a plan on-chain."""

import logging
from typing import cast

from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from web3 import AsyncWeb3
from web3.contract.async_contract import AsyncContractFunction
from web3.exceptions import ContractLogicError, Web3Exception

from ._exceptions import InvalidPlanError
from .abi import SPLAIT_ABI
from .helpers import to_transfers, total_wei
from .types import ExecuteResult, GasOptions, SplitPlan

logger = logging.getLogger(__name__)

# Type alias for transaction params
TxParams = dict[str, int | str]

# Default gas limits
DEFAULT_GAS_BASE = 60_000
DEFAULT_GAS_PER_RECIPIENT = 40_000
DEFAULT_PRIORITY_FEE = 1_000_000_000  # 1 gwei


def default_gas_limit(recipient_count: int) -> int:
    """Fixed gas limit for a split call with `recipient_count` transfers."""
    return DEFAULT_GAS_BASE + DEFAULT_GAS_PER_RECIPIENT * recipient_count


async def build_tx_params(
    w3: AsyncWeb3,
    sender: ChecksumAddress | str,
    chain_id: int,
    value: int,
    default_gas: int,
    gas_options: GasOptions | None = None,
    contract_call: AsyncContractFunction | None = None,
) -> TxParams:
    """
    Build transaction parameters with gas options.

    Handles:
    - Gas estimation (with 20% buffer) when estimate_gas=True
    - EIP-1559 type 2 transactions when max_fee_per_gas is set
    - Fallback to legacy transactions otherwise

    Args:
        w3: AsyncWeb3 instance
        sender: Sender address
        chain_id: Chain ID
        value: Wei to attach to the call
        default_gas: Default gas limit if not estimating
        gas_options: Optional gas configuration
        contract_call: Contract function call for estimation (required if estimate_gas=True)

    Returns:
        Transaction parameters dict
    """
    nonce = await w3.eth.get_transaction_count(cast(ChecksumAddress, sender))

    tx_params: TxParams = {
        "from": sender,
        "nonce": nonce,
        "chainId": chain_id,
        "value": value,
    }

    opts = gas_options or GasOptions()

    # Determine gas limit
    if opts.gas_limit is not None:
        tx_params["gas"] = opts.gas_limit
    elif opts.estimate_gas and contract_call is not None:
        estimated = await contract_call.estimate_gas({"from": sender, "value": value})
        tx_params["gas"] = int(estimated * 1.2)  # 20% buffer
    else:
        tx_params["gas"] = default_gas

    # EIP-1559 or legacy
    if opts.max_fee_per_gas is not None:
        tx_params["type"] = "0x2"
        tx_params["maxFeePerGas"] = opts.max_fee_per_gas
        tx_params["maxPriorityFeePerGas"] = (
            opts.max_priority_fee_per_gas
            if opts.max_priority_fee_per_gas is not None
            else DEFAULT_PRIORITY_FEE
        )

    return tx_params


async def execute_split_plan(
    w3: AsyncWeb3,
    account: LocalAccount,
    contract_address: str,
    plan: SplitPlan,
    gas: GasOptions | None = None,
) -> ExecuteResult:
    """
    Submit a validated plan as a single payable splitFunds call.

    - If the plan is unusable: returns FAILED (invalid_plan), nothing sent
    - On success: returns EXECUTED with transaction hash
    - On failure: returns FAILED with details

    There are no retries; the caller decides what to do with a failure.

    Args:
        w3: AsyncWeb3 instance connected to the chain
        account: Account to sign the transaction
        contract_address: Address of the splitting contract
        plan: Plan returned by the parser (after any user edits)
        gas: Optional gas configuration

    Returns:
        ExecuteResult with status EXECUTED or FAILED

    Example:
        >>> from web3 import AsyncWeb3
        >>> from eth_account import Account
        >>>
        >>> w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider("http://localhost:8545"))
        >>> account = Account.from_key("0x...")
        >>> result = await execute_split_plan(w3, account, "0xSplait...", plan)
    """
    try:
        transfers = to_transfers(plan)
    except InvalidPlanError as e:
        return ExecuteResult(status="FAILED", reason="invalid_plan", message=str(e))

    value = total_wei(transfers)

    try:
        contract_address = AsyncWeb3.to_checksum_address(contract_address)
        chain_id = await w3.eth.chain_id
        contract = w3.eth.contract(address=contract_address, abi=SPLAIT_ABI)

        # Build transaction with gas options
        contract_call = contract.functions.splitFunds(
            [(t.address, t.amount_wei) for t in transfers]
        )
        tx_params = await build_tx_params(
            w3,
            account.address,
            chain_id,
            value,
            default_gas_limit(len(transfers)),
            gas_options=gas,
            contract_call=contract_call,
        )
        tx = await contract_call.build_transaction(tx_params)

        # Sign and send
        signed = account.sign_transaction(tx)
        tx_hash = await w3.eth.send_raw_transaction(signed.raw_transaction)

        # Wait for confirmation
        receipt = await w3.eth.wait_for_transaction_receipt(tx_hash)
        if receipt.get("status") == 0:
            return ExecuteResult(
                status="FAILED",
                signature=tx_hash.hex(),
                reason="transaction_reverted",
                message="Transaction reverted",
            )

        logger.info("Split executed: %d transfers, %d wei, tx %s", len(transfers), value, tx_hash.hex())
        return ExecuteResult(status="EXECUTED", signature=tx_hash.hex())

    except ContractLogicError as e:
        return ExecuteResult(
            status="FAILED",
            reason="transaction_reverted",
            message=str(e),
        )
    except Web3Exception as e:
        message = str(e).lower()
        if "rejected" in message or "denied" in message:
            return ExecuteResult(
                status="FAILED",
                reason="wallet_rejected",
                message="Transaction rejected",
            )
        if "gas" in message or "insufficient" in message:
            return ExecuteResult(
                status="FAILED",
                reason="insufficient_gas",
                message=str(e),
            )
        return ExecuteResult(
            status="FAILED",
            reason="transaction_failed",
            message=str(e),
        )
    except Exception as e:
        # Unexpected errors (network issues, etc.)
        logger.error("Split execution failed: %s", e)
        return ExecuteResult(
            status="FAILED",
            reason="transaction_failed",
            message=str(e),
        )
