"""
Shared fixtures: an in-memory Ethereum node standing in for the RPC endpoint.

The fake node replaces ``ethprobe.chain.rpc._rpc_call``, so every module that
goes through the RPC helpers talks to it.  Broadcast transactions are decoded
with rlp and the Counter contract is simulated.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional
from unittest.mock import patch

import pytest
import rlp
from eth_abi import encode
from eth_account import Account
from eth_utils import keccak

from ethprobe.errors import RpcError, RpcTransportError

COUNTER_ADDRESS = "0xBc78860D20775E4cbbA1D6Ad5e434094bF9f72ef"
ADD_SELECTOR = keccak(text="add()")[:4]
GET_COUNT_SELECTOR = keccak(text="getCount()")[:4]
SEPOLIA_CHAIN_ID = 11155111

SAMPLE_BLOCK: dict[str, Any] = {
    "number": hex(9899209),
    "hash": "0x" + "ab" * 32,
    "parentHash": "0x" + "cd" * 32,
    "timestamp": hex(1764000000),
    "miner": "0x" + "00" * 20,
    "gasUsed": "0x5208",
    "baseFeePerGas": "0x3b9aca00",
    "transactions": ["0x" + "01" * 32, "0x" + "02" * 32, "0x" + "03" * 32],
}


class FakeNode:
    def __init__(self) -> None:
        self.chain_id = SEPOLIA_CHAIN_ID
        self.gas_price = 2 * 10**9
        self.head = 9_900_000
        self.blocks: dict[int, dict[str, Any]] = {9899209: SAMPLE_BLOCK}
        self.balances: dict[str, int] = {}
        self.nonces: dict[str, int] = {}
        self.count = 0
        self.revert_add = False
        self.mine = True
        self.hash_override: Optional[str] = None
        self.fail_on: set[str] = set()
        self.reject_send: Optional[str] = None
        self.calls: list[tuple[str, list]] = []
        self.sent_raw: list[str] = []
        self.receipts: dict[str, dict[str, Any]] = {}

    @property
    def methods(self) -> list[str]:
        return [method for method, _ in self.calls]

    def handle(self, method: str, params: list, rpc_url: Optional[str] = None) -> Any:
        self.calls.append((method, params))
        if method in self.fail_on:
            raise RpcTransportError(f"{method} failed: connection reset")
        handler = getattr(self, "_" + method, None)
        if handler is None:
            raise RpcError(method, "the method does not exist", code=-32601)
        return handler(*params)

    def _eth_chainId(self) -> str:
        return hex(self.chain_id)

    def _eth_gasPrice(self) -> str:
        return hex(self.gas_price)

    def _eth_getBlockByNumber(self, number: str, full: bool) -> Optional[dict]:
        return self.blocks.get(int(number, 16))

    def _eth_getBalance(self, address: str, block: str) -> str:
        return hex(self.balances.get(address.lower(), 0))

    def _eth_getTransactionCount(self, address: str, block: str) -> str:
        return hex(self.nonces.get(address.lower(), 0))

    def _eth_estimateGas(self, tx: dict) -> str:
        return hex(26_000)

    def _eth_call(self, tx: dict, block: str) -> str:
        data = bytes.fromhex(tx["data"][2:])
        if tx["to"].lower() == COUNTER_ADDRESS.lower() and data[:4] == GET_COUNT_SELECTOR:
            return "0x" + encode(["uint256"], [self.count]).hex()
        return "0x"

    def _eth_sendRawTransaction(self, raw_hex: str) -> str:
        if self.reject_send:
            raise RpcError("eth_sendRawTransaction", self.reject_send, code=-32000)
        self.sent_raw.append(raw_hex)
        raw = bytes.fromhex(raw_hex[2:])
        fields = rlp.decode(raw)
        to = "0x" + fields[3].hex()
        data = fields[5]
        sender = Account.recover_transaction(raw_hex)
        tx_hash = "0x" + keccak(raw).hex()

        status = 1
        if to.lower() == COUNTER_ADDRESS.lower() and data[:4] == ADD_SELECTOR:
            if self.revert_add:
                status = 0
            else:
                self.count += 1
        self.nonces[sender.lower()] = self.nonces.get(sender.lower(), 0) + 1

        if self.mine:
            self.head += 1
            self.receipts[tx_hash] = {
                "transactionHash": tx_hash,
                "blockNumber": hex(self.head),
                "from": sender,
                "to": to,
                "status": hex(status),
            }
        return self.hash_override or tx_hash

    def _eth_getTransactionReceipt(self, tx_hash: str) -> Optional[dict]:
        return self.receipts.get(tx_hash)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the user's ~/.ethprobe/.env and shell variables out of tests."""
    env_path = tmp_path / ".ethprobe" / ".env"
    monkeypatch.setattr("ethprobe.config.ETHPROBE_ENV", env_path)
    for key in list(os.environ):
        if key.startswith("ETHPROBE_") or key in ("PRIVATE_KEY", "COUNTER_ADDRESS"):
            monkeypatch.delenv(key, raising=False)
    return env_path


@pytest.fixture()
def fake_node():
    node = FakeNode()
    with patch("ethprobe.chain.rpc._rpc_call", side_effect=node.handle):
        yield node


@pytest.fixture()
def funded_key() -> tuple[str, str]:
    """A fixed test key and its address."""
    private_key = "0x" + "4c" * 32
    return private_key, Account.from_key(private_key).address
