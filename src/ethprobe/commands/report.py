"""Console rendering of routine outcomes."""

from __future__ import annotations

import click

from ..models import BlockSummary, CounterResult, Outcome, TransferResult
from ..utils import format_ether, format_gwei, timestamp_to_rfc3339


def echo_block(summary: BlockSummary, show_txs: bool = False) -> None:
    click.echo(f"  Block #{summary.number}")
    click.echo("  ─────────────────────────────")
    click.echo(f"  Hash:             {summary.hash}")
    click.echo(f"  Timestamp:        {summary.timestamp} ({timestamp_to_rfc3339(summary.timestamp)})")
    click.echo(f"  Transactions:     {summary.tx_count}")
    if summary.base_fee_per_gas is not None:
        click.echo(f"  Base fee:         {format_gwei(summary.base_fee_per_gas)}")
    if show_txs:
        for tx_hash in summary.transactions:
            click.echo(f"    {tx_hash}")


def echo_transfer(result: TransferResult) -> None:
    click.echo(f"  Sender:           {result.sender}")
    click.echo(f"  Balance:          {format_ether(result.balance_wei)}")
    click.echo(f"  Recipient:        {result.recipient}")
    click.echo(f"  Amount:           {format_ether(result.value_wei)}")
    click.echo(f"  Nonce:            {result.nonce}")
    click.echo(f"  Gas:              {result.gas_limit} @ {format_gwei(result.gas_price_wei)}")
    click.echo(f"  Chain ID:         {result.chain_id}")
    click.secho(f"  TX: {result.tx_hash}", fg="green")


def echo_counter(result: CounterResult) -> None:
    click.echo(f"  Contract:         {result.contract}")
    click.echo(f"  TX:               {result.tx_hash}")
    click.echo(f"  Block:            {result.block_number}")
    if result.reverted:
        click.secho("  WARNING: add() reverted", fg="yellow", bold=True)
    click.echo(f"  Previous count:   {result.previous_count}")
    click.secho(f"  New count:        {result.count}", fg="green")


def echo_outcome(outcome: Outcome, show_txs: bool = False) -> None:
    if outcome.error is not None:
        click.secho(f"ERROR: {outcome.error}", fg="red")
        return
    value = outcome.value
    if isinstance(value, BlockSummary):
        echo_block(value, show_txs=show_txs)
    elif isinstance(value, TransferResult):
        echo_transfer(value)
    elif isinstance(value, CounterResult):
        echo_counter(value)
