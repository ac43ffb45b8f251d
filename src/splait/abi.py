"""
Contract ABI for the Splait fund-splitting contract.

One payable write: the caller attaches the total value and the contract
forwards each transfer's amount to its recipient.
"""

# (recipient, amount in wei) pairs, in plan order
_TRANSFER_COMPONENTS = [
    {"name": "recipient", "type": "address"},
    {"name": "amount", "type": "uint256"},
]

SPLAIT_ABI = [
    {
        "type": "function",
        "name": "splitFunds",
        "inputs": [
            {
                "name": "transfers",
                "type": "tuple[]",
                "components": _TRANSFER_COMPONENTS,
            },
        ],
        "outputs": [],
        "stateMutability": "payable",
    },
    {
        "type": "event",
        "name": "FundsSplit",
        "inputs": [
            {"name": "sender", "type": "address", "indexed": True},
            {"name": "total", "type": "uint256", "indexed": False},
            {"name": "recipientCount", "type": "uint256", "indexed": False},
        ],
        "anonymous": False,
    },
    {
        "type": "error",
        "name": "ValueMismatch",
        "inputs": [
            {"name": "expected", "type": "uint256"},
            {"name": "received", "type": "uint256"},
        ],
    },
    {
        "type": "error",
        "name": "TransferFailed",
        "inputs": [{"name": "recipient", "type": "address"}],
    },
]
