"""
The three ethprobe routines.

Each routine runs its stages in order and returns an ``Outcome``: the first
``ProbeError`` raised by a stage stops that routine and is carried in the
outcome instead of terminating the process.
"""

from __future__ import annotations

from typing import Optional

from eth_utils import to_checksum_address

from .chain import rpc
from .chain.counter import Counter, KeyedTransactor
from .chain.tx import broadcast, build_transfer_tx, sign_transaction
from .config import (
    DEFAULT_BLOCK_NUMBER,
    DEFAULT_COUNTER_ADDRESS,
    DEFAULT_GAS_LIMIT,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_RECEIPT_TIMEOUT,
    DEFAULT_RECIPIENT,
    DEFAULT_VALUE_WEI,
    ProbeConfig,
)
from .errors import BlockNotFoundError, ConfigError, KeyMissingError, ProbeError
from .keys import generate_eoa, get_account
from .models import BlockSummary, CounterResult, Outcome, TransferResult
from .utils import hex_to_int

BLOCK = "block"
TRANSFER = "transfer"
COUNTER = "counter"


def _checksum(address: str, label: str) -> str:
    try:
        return to_checksum_address(address)
    except ValueError as exc:
        raise ConfigError(f"Invalid {label} address: {address!r}") from exc


def query_block(
    block_number: int = DEFAULT_BLOCK_NUMBER,
    rpc_url: Optional[str] = None,
) -> Outcome[BlockSummary]:
    """Fetch a block by number and summarise it."""
    try:
        payload = rpc.get_block_by_number(block_number, full_txs=False, rpc_url=rpc_url)
        if payload is None:
            raise BlockNotFoundError(f"Block {block_number} not found")
        return Outcome(BLOCK, value=BlockSummary.from_rpc(payload))
    except ProbeError as exc:
        return Outcome(BLOCK, error=exc)


def transfer_value(
    recipient: str = DEFAULT_RECIPIENT,
    value_wei: int = DEFAULT_VALUE_WEI,
    gas_limit: int = DEFAULT_GAS_LIMIT,
    private_key: Optional[str] = None,
    rpc_url: Optional[str] = None,
) -> Outcome[TransferResult]:
    """
    Send a native-currency transfer.

    Without ``private_key`` a throwaway key is generated for this call only.
    The signed transaction is the one broadcast; its hash is returned.
    """
    try:
        to_addr = _checksum(recipient, "recipient")
        if private_key is None:
            private_key, _ = generate_eoa()
        sender = get_account(private_key).address

        balance = rpc.get_balance(sender, rpc_url=rpc_url)
        nonce = rpc.get_nonce(sender, "pending", rpc_url=rpc_url)
        gas_price = rpc.get_gas_price(rpc_url=rpc_url)
        chain_id = rpc.get_chain_id(rpc_url=rpc_url)

        tx = build_transfer_tx(
            nonce=nonce,
            to=to_addr,
            value_wei=value_wei,
            gas_price_wei=gas_price,
            chain_id=chain_id,
            gas_limit=gas_limit,
        )
        signed = sign_transaction(tx, private_key)
        tx_hash = broadcast(signed, rpc_url=rpc_url)

        return Outcome(
            TRANSFER,
            value=TransferResult(
                sender=sender,
                recipient=to_addr,
                value_wei=value_wei,
                balance_wei=balance,
                nonce=nonce,
                gas_price_wei=gas_price,
                gas_limit=gas_limit,
                chain_id=chain_id,
                tx_hash=tx_hash,
            ),
        )
    except ProbeError as exc:
        return Outcome(TRANSFER, error=exc)


def call_counter(
    private_key: str,
    contract_address: str = DEFAULT_COUNTER_ADDRESS,
    gas_limit: Optional[int] = None,
    timeout: float = DEFAULT_RECEIPT_TIMEOUT,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    rpc_url: Optional[str] = None,
) -> Outcome[CounterResult]:
    """
    Increment the Counter contract and read the new value back.

    A reverted receipt does not fail the routine; it is reported through
    ``CounterResult.reverted``.
    """
    try:
        if not private_key or not private_key.strip():
            raise KeyMissingError("PRIVATE_KEY is empty; the counter call needs a funded key")
        # malformed or out-of-range keys fail before any RPC
        get_account(private_key)

        address = _checksum(contract_address, "counter")
        counter = Counter(address, rpc_url=rpc_url)

        chain_id = rpc.get_chain_id(rpc_url=rpc_url)
        transactor = KeyedTransactor.from_key(private_key, chain_id)

        previous = counter.get_count()
        sent = counter.add(
            transactor,
            gas_limit=gas_limit,
            wait=True,
            timeout=timeout,
            poll_interval=poll_interval,
        )
        receipt = sent.receipt or {}

        current = counter.get_count()
        return Outcome(
            COUNTER,
            value=CounterResult(
                contract=address,
                tx_hash=sent.tx_hash,
                block_number=hex_to_int(receipt.get("blockNumber", "0x0")),
                status=sent.status or 0,
                previous_count=previous,
                count=current,
            ),
        )
    except ProbeError as exc:
        return Outcome(COUNTER, error=exc)


def run_all(config: ProbeConfig) -> list[Outcome]:
    """Run block query, transfer and counter call in sequence."""
    return [
        query_block(config.block_number, rpc_url=config.rpc_url),
        transfer_value(
            recipient=config.recipient,
            value_wei=config.value_wei,
            gas_limit=config.gas_limit,
            rpc_url=config.rpc_url,
        ),
        call_counter(
            config.private_key,
            contract_address=config.counter_address,
            timeout=config.receipt_timeout,
            poll_interval=config.poll_interval,
            rpc_url=config.rpc_url,
        ),
    ]
