"""
Counter - Call the Counter contract.

Sends add(), waits for the receipt, then reads getCount().
A reverted receipt is reported as a warning, not an error.
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from ..config import (
    DEFAULT_COUNTER_ADDRESS,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_RECEIPT_TIMEOUT,
    DEFAULT_RPC_URL,
)
from ..routines import call_counter
from .report import echo_outcome


@click.command()
@click.option(
    "--contract",
    envvar="COUNTER_ADDRESS",
    default=DEFAULT_COUNTER_ADDRESS,
    help="Counter contract address",
)
@click.option(
    "--private-key",
    envvar="PRIVATE_KEY",
    default="",
    show_default=False,
    help="Signing key (prefer the PRIVATE_KEY env var)",
)
@click.option(
    "--gas-limit",
    default=None,
    type=click.IntRange(min=0),
    help="Gas limit (default: estimated)",
)
@click.option(
    "--timeout",
    envvar="ETHPROBE_RECEIPT_TIMEOUT",
    default=DEFAULT_RECEIPT_TIMEOUT,
    type=click.IntRange(min=0),
    help="Seconds to wait for the receipt (0 = no limit)",
)
@click.option(
    "--poll-interval",
    default=DEFAULT_POLL_INTERVAL,
    type=float,
    help="Seconds between receipt polls",
)
@click.option(
    "--rpc-url",
    envvar="ETHPROBE_RPC_URL",
    default=DEFAULT_RPC_URL,
    help="Ethereum JSON-RPC URL",
)
def counter(
    contract: str,
    private_key: str,
    gas_limit: Optional[int],
    timeout: int,
    poll_interval: float,
    rpc_url: str,
) -> None:
    """Increment the Counter contract and print the new value."""
    click.echo("=== ethprobe Counter ===")
    click.echo("")

    outcome = call_counter(
        private_key,
        contract_address=contract,
        gas_limit=gas_limit,
        timeout=timeout,
        poll_interval=poll_interval,
        rpc_url=rpc_url,
    )
    echo_outcome(outcome)
    if not outcome.ok:
        sys.exit(outcome.exit_code)

    click.echo("")
    click.echo("=== Counter Complete ===")
