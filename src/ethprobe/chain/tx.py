"""
Transaction Builder - Build, sign, verify and broadcast transactions.

Uses eth-account for signing and the httpx JSON-RPC client for sending.
The bytes handed to ``eth_sendRawTransaction`` are always the exact signed
payload whose hash is reported back to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from eth_account import Account
from eth_utils import to_checksum_address, to_hex

from ..errors import BroadcastMismatchError, SigningError
from ..keys import get_account
from ..utils import hex_to_int
from .rpc import estimate_gas, send_raw_transaction, wait_for_receipt

TRANSFER_GAS_LIMIT = 21_000


@dataclass(frozen=True)
class SignedTx:
    raw: str
    hash: str
    sender: str
    nonce: int


@dataclass(frozen=True)
class SentTx:
    tx_hash: str
    from_address: str
    nonce: int
    receipt: Optional[dict] = None

    @property
    def status(self) -> Optional[int]:
        if self.receipt is None:
            return None
        return hex_to_int(self.receipt.get("status", "0x0"))


def build_transfer_tx(
    *,
    nonce: int,
    to: str,
    value_wei: int,
    gas_price_wei: int,
    chain_id: int,
    gas_limit: int = TRANSFER_GAS_LIMIT,
) -> dict[str, Any]:
    """Build an unsigned legacy (EIP-155) native-currency transfer."""
    return {
        "nonce": nonce,
        "to": to_checksum_address(to),
        "value": value_wei,
        "gas": gas_limit,
        "gasPrice": gas_price_wei,
        "data": b"",
        "chainId": chain_id,
    }


def build_contract_tx(
    *,
    contract_address: str,
    calldata: str,
    sender: str,
    nonce: int,
    gas_price_wei: int,
    chain_id: int,
    value_wei: int = 0,
    gas_limit: Optional[int] = None,
    rpc_url: Optional[str] = None,
) -> dict[str, Any]:
    """
    Build an unsigned contract call transaction.

    Gas is estimated with eth_estimateGas when ``gas_limit`` is not given,
    then padded so small state changes between estimate and inclusion do not
    run out of gas.
    """
    to_addr = to_checksum_address(contract_address)
    if gas_limit is None:
        gas_est = estimate_gas(
            {
                "from": sender,
                "to": to_addr,
                "value": hex(value_wei),
                "data": calldata,
            },
            rpc_url=rpc_url,
        )
        gas_limit = int(max(gas_est + 20_000, int(gas_est * 1.2)))

    return {
        "nonce": nonce,
        "to": to_addr,
        "value": value_wei,
        "gas": gas_limit,
        "gasPrice": gas_price_wei,
        "data": calldata,
        "chainId": chain_id,
    }


def recover_sender(raw_tx: str) -> str:
    """Recover the signer address from a signed raw transaction."""
    return Account.recover_transaction(raw_tx)


def sign_transaction(tx: dict[str, Any], private_key: str) -> SignedTx:
    """
    Sign a transaction and verify the signature recovers to the signer.

    Raises:
        SigningError: If the recovered sender differs from the key's address
    """
    account = get_account(private_key)
    signed = account.sign_transaction(tx)
    raw = to_hex(signed.raw_transaction)

    recovered = recover_sender(raw)
    if recovered.lower() != account.address.lower():
        raise SigningError(
            f"Signature recovers to {recovered}, expected {account.address}"
        )

    return SignedTx(
        raw=raw,
        hash=to_hex(signed.hash),
        sender=account.address,
        nonce=int(tx["nonce"]),
    )


def broadcast(signed: SignedTx, rpc_url: Optional[str] = None) -> str:
    """
    Submit a signed transaction.

    Raises:
        BroadcastMismatchError: If the node reports a different hash than
            the one we signed
    """
    node_hash = send_raw_transaction(signed.raw, rpc_url=rpc_url)
    if not node_hash or str(node_hash).lower() != signed.hash.lower():
        raise BroadcastMismatchError(
            f"Node accepted {node_hash}, but signed transaction is {signed.hash}"
        )
    return signed.hash


def sign_and_send(
    tx: dict[str, Any],
    private_key: str,
    *,
    wait: bool = True,
    timeout: float = 120,
    poll_interval: float = 2.0,
    rpc_url: Optional[str] = None,
) -> SentTx:
    """
    Sign a transaction, broadcast it and optionally wait for the receipt.

    Args:
        tx: Unsigned transaction dict
        private_key: 0x-prefixed hex private key
        wait: Whether to wait for the receipt
        timeout: Receipt wait timeout in seconds; 0 waits indefinitely
    """
    signed = sign_transaction(tx, private_key)
    tx_hash = broadcast(signed, rpc_url=rpc_url)

    receipt = None
    if wait:
        receipt = wait_for_receipt(
            tx_hash, timeout=timeout, poll_interval=poll_interval, rpc_url=rpc_url
        )

    return SentTx(
        tx_hash=tx_hash,
        from_address=signed.sender,
        nonce=signed.nonce,
        receipt=receipt,
    )
