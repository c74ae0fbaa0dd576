from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from .errors import ProbeError
from .utils import hex_to_int, optional_hex_to_int

T = TypeVar("T")


@dataclass(frozen=True)
class BlockSummary:
    number: int
    hash: str
    timestamp: int
    transactions: tuple[str, ...]
    parent_hash: str = ""
    miner: str = ""
    gas_used: int = 0
    base_fee_per_gas: Optional[int] = None

    @property
    def tx_count(self) -> int:
        return len(self.transactions)

    @classmethod
    def from_rpc(cls, payload: dict[str, Any]) -> "BlockSummary":
        txs = []
        for tx in payload.get("transactions") or []:
            # Full transaction objects carry their own hash.
            txs.append(tx["hash"] if isinstance(tx, dict) else tx)
        return cls(
            number=hex_to_int(payload["number"]),
            hash=payload["hash"],
            timestamp=hex_to_int(payload["timestamp"]),
            transactions=tuple(txs),
            parent_hash=payload.get("parentHash", ""),
            miner=payload.get("miner", ""),
            gas_used=hex_to_int(payload.get("gasUsed", "0x0")),
            base_fee_per_gas=optional_hex_to_int(payload.get("baseFeePerGas")),
        )


@dataclass(frozen=True)
class TransferResult:
    sender: str
    recipient: str
    value_wei: int
    balance_wei: int
    nonce: int
    gas_price_wei: int
    gas_limit: int
    chain_id: int
    tx_hash: str


@dataclass(frozen=True)
class CounterResult:
    contract: str
    tx_hash: str
    block_number: int
    status: int
    previous_count: int
    count: int

    @property
    def reverted(self) -> bool:
        return self.status != 1

    @property
    def delta(self) -> int:
        return self.count - self.previous_count


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one routine: either a value or the error that stopped it."""

    routine: str
    value: Optional[T] = None
    error: Optional[ProbeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.error is None else self.error.exit_code


__all__ = [
    "BlockSummary",
    "CounterResult",
    "Outcome",
    "TransferResult",
]
