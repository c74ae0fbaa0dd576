__all__ = [
    # Configuration
    "ProbeConfig",
    # Errors
    "ProbeError",
    "ConfigError",
    "RpcError",
    "RpcTransportError",
    "BlockNotFoundError",
    "KeyMissingError",
    "InvalidKeyError",
    "SigningError",
    "BroadcastMismatchError",
    "ReceiptTimeoutError",
    "ContractError",
    # Models
    "BlockSummary",
    "TransferResult",
    "CounterResult",
    "Outcome",
    # Keys
    "generate_eoa",
    "get_address",
    "load_private_key",
    # Contract binding
    "Counter",
    "KeyedTransactor",
    # Routines
    "query_block",
    "transfer_value",
    "call_counter",
    "run_all",
]

from .config import ProbeConfig
from .errors import (
    BlockNotFoundError,
    BroadcastMismatchError,
    ConfigError,
    ContractError,
    InvalidKeyError,
    KeyMissingError,
    ProbeError,
    ReceiptTimeoutError,
    RpcError,
    RpcTransportError,
    SigningError,
)
from .models import BlockSummary, CounterResult, Outcome, TransferResult
from .keys import generate_eoa, get_address, load_private_key
from .chain.counter import Counter, KeyedTransactor
from .routines import call_counter, query_block, run_all, transfer_value
