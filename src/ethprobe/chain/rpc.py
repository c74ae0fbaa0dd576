"""
JSON-RPC client for Ethereum nodes.

Thin functions over httpx + eth-abi.  Every call opens its own HTTP client;
there is no shared connection handle between routines.
"""

from __future__ import annotations

import itertools
import os
import time
from typing import Any, Optional

import httpx
from eth_abi import decode, encode
from eth_utils import keccak

from ..config import DEFAULT_RPC_URL
from ..errors import ReceiptTimeoutError, RpcError, RpcTransportError
from ..utils import hex_to_int
from .abi import find_function

REQUEST_TIMEOUT = 30.0

_id_counter = itertools.count(1)


def get_rpc_url() -> str:
    """Get the RPC URL from environment or default."""
    return os.environ.get("ETHPROBE_RPC_URL") or DEFAULT_RPC_URL


def _rpc_call(method: str, params: list, rpc_url: Optional[str] = None) -> Any:
    """
    Make a JSON-RPC call.

    Args:
        method: RPC method name (e.g., "eth_call")
        params: RPC parameters
        rpc_url: RPC endpoint URL

    Returns:
        Result field from the RPC response

    Raises:
        RpcError: If the node returns a JSON-RPC error object
        RpcTransportError: If the HTTP request fails
    """
    url = rpc_url or get_rpc_url()
    payload = {
        "jsonrpc": "2.0",
        "method": method,
        "params": params,
        "id": next(_id_counter),
    }

    try:
        with httpx.Client(timeout=REQUEST_TIMEOUT) as client:
            response = client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPError as exc:
        raise RpcTransportError(f"{method} failed against {url}: {exc}") from exc
    except ValueError as exc:
        raise RpcTransportError(f"{method}: response from {url} is not JSON") from exc

    if not isinstance(data, dict):
        raise RpcError(method, f"malformed response: {data!r}")

    err = data.get("error")
    if err is not None:
        if isinstance(err, dict):
            raise RpcError(
                method,
                str(err.get("message", err)),
                code=err.get("code"),
                data=err.get("data"),
            )
        raise RpcError(method, str(err))

    return data.get("result")


def _quantity(method: str, result: Any) -> int:
    """Decode a hex quantity result; a null or garbled value is an RPC failure."""
    try:
        return hex_to_int(result)
    except ValueError as exc:
        raise RpcError(method, f"expected a hex quantity, got {result!r}") from exc


# ---------------------------------------------------------------------------
# Chain state
# ---------------------------------------------------------------------------


def get_block_by_number(
    block_number: int,
    full_txs: bool = False,
    rpc_url: Optional[str] = None,
) -> Optional[dict]:
    """Fetch a block; ``None`` if the node does not know it."""
    return _rpc_call(
        "eth_getBlockByNumber", [hex(block_number), bool(full_txs)], rpc_url=rpc_url
    )


def get_balance(address: str, rpc_url: Optional[str] = None) -> int:
    """
    Get ETH balance for an address.

    Returns:
        Balance in wei
    """
    result = _rpc_call("eth_getBalance", [address, "latest"], rpc_url=rpc_url)
    return _quantity("eth_getBalance", result)


def get_nonce(address: str, block: str = "pending", rpc_url: Optional[str] = None) -> int:
    """
    Get transaction nonce for an address.

    Defaults to the pending nonce so queued transactions are accounted for.
    """
    result = _rpc_call("eth_getTransactionCount", [address, block], rpc_url=rpc_url)
    return _quantity("eth_getTransactionCount", result)


def get_gas_price(rpc_url: Optional[str] = None) -> int:
    """Suggested legacy gas price in wei."""
    return _quantity("eth_gasPrice", _rpc_call("eth_gasPrice", [], rpc_url=rpc_url))


def get_chain_id(rpc_url: Optional[str] = None) -> int:
    """EIP-155 chain id reported by the node."""
    return _quantity("eth_chainId", _rpc_call("eth_chainId", [], rpc_url=rpc_url))


def estimate_gas(tx: dict, rpc_url: Optional[str] = None) -> int:
    return _quantity("eth_estimateGas", _rpc_call("eth_estimateGas", [tx], rpc_url=rpc_url))


def eth_call(tx: dict, block: str = "latest", rpc_url: Optional[str] = None) -> str:
    return _rpc_call("eth_call", [tx, block], rpc_url=rpc_url)


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


def send_raw_transaction(raw_tx: str, rpc_url: Optional[str] = None) -> str:
    """
    Send a signed raw transaction.

    Args:
        raw_tx: 0x-prefixed hex encoded signed transaction

    Returns:
        Transaction hash reported by the node
    """
    return _rpc_call("eth_sendRawTransaction", [raw_tx], rpc_url=rpc_url)


def get_transaction_receipt(tx_hash: str, rpc_url: Optional[str] = None) -> Optional[dict]:
    return _rpc_call("eth_getTransactionReceipt", [tx_hash], rpc_url=rpc_url)


def wait_for_receipt(
    tx_hash: str,
    timeout: float = 120,
    poll_interval: float = 2.0,
    rpc_url: Optional[str] = None,
) -> dict:
    """
    Poll until the transaction is mined.

    Args:
        tx_hash: Transaction hash
        timeout: Maximum wait time in seconds; 0 waits indefinitely
        poll_interval: Polling interval in seconds

    Raises:
        ReceiptTimeoutError: If no receipt appears within ``timeout``
    """
    start = time.monotonic()
    while True:
        receipt = get_transaction_receipt(tx_hash, rpc_url=rpc_url)
        if receipt is not None:
            return receipt
        if timeout and time.monotonic() - start >= timeout:
            raise ReceiptTimeoutError(
                f"Transaction {tx_hash} not mined within {timeout}s"
            )
        time.sleep(poll_interval)


# ---------------------------------------------------------------------------
# Contract calls
# ---------------------------------------------------------------------------


def function_selector(abi: list, function_name: str) -> tuple[bytes, list[str]]:
    """Return the 4-byte selector and input types for an ABI function."""
    func = find_function(abi, function_name)
    input_types = [inp["type"] for inp in func.get("inputs", [])]
    sig = f"{function_name}({','.join(input_types)})"
    return keccak(text=sig)[:4], input_types


def encode_function_call(abi: list, function_name: str, args: Optional[list] = None) -> str:
    """ABI-encode a function call to 0x-prefixed calldata."""
    selector, input_types = function_selector(abi, function_name)
    encoded_args = encode(input_types, list(args)) if args else b""
    return "0x" + selector.hex() + encoded_args.hex()


def decode_function_result(abi: list, function_name: str, data: str) -> Any:
    """
    ABI-decode a function call result.

    Returns:
        Decoded result (single value or tuple)
    """
    func = find_function(abi, function_name)
    output_types = [out["type"] for out in func.get("outputs", [])]
    if not output_types:
        return None

    raw = bytes.fromhex(data[2:] if data.startswith("0x") else data)
    decoded = decode(output_types, raw)

    if len(decoded) == 1:
        return decoded[0]
    return decoded


def read_contract(
    contract_address: str,
    function_name: str,
    abi: list,
    args: Optional[list] = None,
    block: str = "latest",
    rpc_url: Optional[str] = None,
) -> Any:
    """
    Read from a smart contract (eth_call).

    Returns:
        Decoded return value(s), or None for empty return data
    """
    calldata = encode_function_call(abi, function_name, args)
    result = eth_call({"to": contract_address, "data": calldata}, block, rpc_url=rpc_url)

    if result is None or result == "0x":
        return None

    return decode_function_result(abi, function_name, result)
