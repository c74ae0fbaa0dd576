"""
Block - Query a block by number.

Prints the block hash, timestamp and transaction count.
"""

from __future__ import annotations

import sys

import click

from ..config import DEFAULT_BLOCK_NUMBER, DEFAULT_RPC_URL
from ..routines import query_block
from .report import echo_outcome


@click.command()
@click.option(
    "--number",
    "block_number",
    envvar="ETHPROBE_BLOCK_NUMBER",
    default=DEFAULT_BLOCK_NUMBER,
    type=click.IntRange(min=0),
    help="Block number to fetch",
)
@click.option("--show-txs", is_flag=True, help="List transaction hashes")
@click.option(
    "--rpc-url",
    envvar="ETHPROBE_RPC_URL",
    default=DEFAULT_RPC_URL,
    help="Ethereum JSON-RPC URL",
)
def block(block_number: int, show_txs: bool, rpc_url: str) -> None:
    """Query a block and show its hash, timestamp and transactions."""
    click.echo("=== ethprobe Block ===")
    click.echo("")

    outcome = query_block(block_number, rpc_url=rpc_url)
    echo_outcome(outcome, show_txs=show_txs)
    if not outcome.ok:
        sys.exit(outcome.exit_code)

    click.echo("")
    click.echo("=== Block Complete ===")
