"""Routines: stage ordering, error outcomes and the tour."""

from __future__ import annotations

from ethprobe.config import ProbeConfig
from ethprobe.errors import (
    BlockNotFoundError,
    ConfigError,
    ContractError,
    InvalidKeyError,
    KeyMissingError,
    ReceiptTimeoutError,
    RpcError,
    RpcTransportError,
)
from ethprobe.routines import call_counter, query_block, run_all, transfer_value

from conftest import COUNTER_ADDRESS, SAMPLE_BLOCK


class TestQueryBlock:
    def test_summary(self, fake_node) -> None:
        outcome = query_block(9899209)
        assert outcome.ok
        summary = outcome.value
        assert summary.number == 9899209
        assert summary.hash == SAMPLE_BLOCK["hash"]
        assert summary.timestamp == 1764000000
        assert summary.tx_count == 3

    def test_missing_block(self, fake_node) -> None:
        outcome = query_block(10**9)
        assert not outcome.ok
        assert isinstance(outcome.error, BlockNotFoundError)
        assert outcome.exit_code == 4

    def test_network_error(self, fake_node) -> None:
        fake_node.fail_on.add("eth_getBlockByNumber")
        outcome = query_block(9899209)
        assert isinstance(outcome.error, RpcTransportError)
        assert outcome.value is None


class TestTransferValue:
    def test_stage_order(self, fake_node) -> None:
        outcome = transfer_value()
        assert outcome.ok, outcome.error
        assert fake_node.methods == [
            "eth_getBalance",
            "eth_getTransactionCount",
            "eth_gasPrice",
            "eth_chainId",
            "eth_sendRawTransaction",
        ]

    def test_reported_hash_is_the_broadcast_transaction(self, fake_node) -> None:
        outcome = transfer_value()
        result = outcome.value
        assert len(fake_node.sent_raw) == 1
        assert result.tx_hash in fake_node.receipts
        assert fake_node.receipts[result.tx_hash]["from"] == result.sender

    def test_generates_a_fresh_key_each_run(self, fake_node) -> None:
        first = transfer_value().value
        second = transfer_value().value
        assert first.sender != second.sender

    def test_uses_supplied_key(self, fake_node, funded_key) -> None:
        private_key, address = funded_key
        fake_node.balances[address.lower()] = 5 * 10**17
        result = transfer_value(private_key=private_key).value
        assert result.sender == address
        assert result.balance_wei == 5 * 10**17
        assert result.chain_id == 11155111
        assert result.gas_limit == 21_000

    def test_network_error_stops_later_stages(self, fake_node) -> None:
        fake_node.fail_on.add("eth_gasPrice")
        outcome = transfer_value()
        assert isinstance(outcome.error, RpcTransportError)
        assert "eth_chainId" not in fake_node.methods
        assert "eth_sendRawTransaction" not in fake_node.methods

    def test_node_rejection(self, fake_node) -> None:
        fake_node.reject_send = "insufficient funds for gas * price + value"
        outcome = transfer_value()
        assert isinstance(outcome.error, RpcError)
        assert outcome.exit_code == 3

    def test_null_balance_is_an_error_outcome(self, fake_node) -> None:
        fake_node._eth_getBalance = lambda address, block: None
        outcome = transfer_value()
        assert isinstance(outcome.error, RpcError)
        assert outcome.error.method == "eth_getBalance"
        assert "eth_sendRawTransaction" not in fake_node.methods

    def test_invalid_recipient(self, fake_node) -> None:
        outcome = transfer_value(recipient="0xnot-an-address")
        assert isinstance(outcome.error, ConfigError)
        assert fake_node.calls == []


class TestCallCounter:
    def test_increments_and_reads_back(self, fake_node, funded_key) -> None:
        private_key, _ = funded_key
        fake_node.count = 7
        outcome = call_counter(private_key, poll_interval=0)
        assert outcome.ok, outcome.error
        result = outcome.value
        assert result.previous_count == 7
        assert result.count == 8
        assert result.delta == 1
        assert not result.reverted
        assert result.block_number == fake_node.head

    def test_revert_is_reported_not_fatal(self, fake_node, funded_key) -> None:
        private_key, _ = funded_key
        fake_node.revert_add = True
        outcome = call_counter(private_key, poll_interval=0)
        assert outcome.ok
        assert outcome.value.reverted
        assert outcome.value.delta == 0
        assert fake_node.methods.count("eth_call") == 2

    def test_empty_key(self, fake_node) -> None:
        outcome = call_counter("")
        assert isinstance(outcome.error, KeyMissingError)
        assert outcome.exit_code == 5
        assert fake_node.calls == []

    def test_malformed_key_fails_before_any_rpc(self, fake_node) -> None:
        fake_node.fail_on.add("eth_chainId")
        outcome = call_counter("0x1234")
        assert isinstance(outcome.error, InvalidKeyError)
        assert outcome.exit_code == 5
        assert fake_node.calls == []

    def test_codeless_address_is_an_error(self, fake_node, funded_key) -> None:
        private_key, _ = funded_key
        outcome = call_counter(private_key, contract_address="0x" + "12" * 20)
        assert isinstance(outcome.error, ContractError)
        assert outcome.exit_code == 8
        assert fake_node.sent_raw == []

    def test_null_quantity_is_an_rpc_error(self, fake_node, funded_key) -> None:
        private_key, _ = funded_key
        fake_node._eth_chainId = lambda: None
        outcome = call_counter(private_key)
        assert isinstance(outcome.error, RpcError)
        assert fake_node.sent_raw == []

    def test_receipt_timeout_skips_read_back(self, fake_node, funded_key) -> None:
        private_key, _ = funded_key
        fake_node.mine = False
        outcome = call_counter(private_key, timeout=0.05, poll_interval=0.01)
        assert isinstance(outcome.error, ReceiptTimeoutError)
        # only the read before add()
        assert fake_node.methods.count("eth_call") == 1

    def test_chain_id_failure_stops_before_sending(self, fake_node, funded_key) -> None:
        private_key, _ = funded_key
        fake_node.fail_on.add("eth_chainId")
        outcome = call_counter(private_key)
        assert isinstance(outcome.error, RpcTransportError)
        assert fake_node.sent_raw == []


class TestRunAll:
    def test_runs_all_three(self, fake_node, funded_key) -> None:
        config = ProbeConfig(private_key=funded_key[0], poll_interval=0)
        outcomes = run_all(config)
        assert [o.routine for o in outcomes] == ["block", "transfer", "counter"]
        assert all(o.ok for o in outcomes)

    def test_failure_does_not_stop_later_routines(self, fake_node) -> None:
        config = ProbeConfig(block_number=10**9, counter_address=COUNTER_ADDRESS)
        outcomes = run_all(config)
        block, transfer, counter = outcomes
        assert isinstance(block.error, BlockNotFoundError)
        assert transfer.ok
        # shipped configuration has no counter key
        assert isinstance(counter.error, KeyMissingError)
