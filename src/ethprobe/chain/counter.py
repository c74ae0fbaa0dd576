"""
Counter binding.

Typed wrapper around the deployed ``Counter`` contract: ``add()`` sends a
state-changing transaction, ``get_count()`` is a read-only eth_call.  The
wrapper only encodes/decodes calls from the ABI; it holds no chain state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from eth_utils import to_checksum_address

from ..errors import ContractError
from ..keys import get_account, normalize_private_key
from .abi import counter_abi
from .rpc import encode_function_call, get_gas_price, get_nonce, read_contract
from .tx import SentTx, build_contract_tx, sign_and_send


@dataclass(frozen=True)
class KeyedTransactor:
    """Signing options for state-changing calls: a key bound to a chain id."""

    private_key: str = field(repr=False)
    chain_id: int
    address: str

    @classmethod
    def from_key(cls, private_key: str, chain_id: int) -> "KeyedTransactor":
        key = normalize_private_key(private_key)
        return cls(private_key=key, chain_id=chain_id, address=get_account(key).address)


class Counter:
    def __init__(
        self,
        address: str,
        rpc_url: Optional[str] = None,
        abi: Optional[list[dict[str, Any]]] = None,
    ):
        self.address = to_checksum_address(address)
        self.rpc_url = rpc_url
        self.abi = abi if abi is not None else counter_abi()

    def __repr__(self) -> str:
        return f"Counter({self.address})"

    def get_count(self, block: str = "latest") -> int:
        """
        Current counter value.

        Raises:
            ContractError: If the call returns no data (no code at the address)
        """
        value = read_contract(
            self.address, "getCount", self.abi, block=block, rpc_url=self.rpc_url
        )
        if value is None:
            raise ContractError(f"no contract code at given address {self.address}")
        return int(value)

    def add(
        self,
        transactor: KeyedTransactor,
        *,
        gas_limit: Optional[int] = None,
        wait: bool = False,
        timeout: float = 120,
        poll_interval: float = 2.0,
    ) -> SentTx:
        """
        Increment the counter.

        Args:
            transactor: Signer bound to the target chain
            gas_limit: Explicit gas limit (default: estimated)
            wait: Block until the transaction is mined
            timeout: Receipt wait timeout in seconds; 0 waits indefinitely

        Returns:
            SentTx with the signed transaction hash (and receipt when waited)
        """
        calldata = encode_function_call(self.abi, "add")
        tx = build_contract_tx(
            contract_address=self.address,
            calldata=calldata,
            sender=transactor.address,
            nonce=get_nonce(transactor.address, rpc_url=self.rpc_url),
            gas_price_wei=get_gas_price(rpc_url=self.rpc_url),
            chain_id=transactor.chain_id,
            gas_limit=gas_limit,
            rpc_url=self.rpc_url,
        )
        return sign_and_send(
            tx,
            transactor.private_key,
            wait=wait,
            timeout=timeout,
            poll_interval=poll_interval,
            rpc_url=self.rpc_url,
        )
