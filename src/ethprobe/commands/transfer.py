"""
Transfer - Sign and broadcast a native-currency transfer.

Flow:
1. Generate a throwaway key (or use PRIVATE_KEY with --from-wallet)
2. Read balance, pending nonce, gas price and chain id
3. Build and sign a legacy EIP-155 transaction
4. Broadcast the signed bytes and check the node-reported hash
"""

from __future__ import annotations

import sys

import click

from ..config import (
    DEFAULT_GAS_LIMIT,
    DEFAULT_RECIPIENT,
    DEFAULT_RPC_URL,
    DEFAULT_VALUE_WEI,
)
from ..errors import ProbeError
from ..keys import load_private_key
from ..routines import transfer_value
from .report import echo_outcome


@click.command()
@click.option(
    "--to",
    "recipient",
    envvar="ETHPROBE_RECIPIENT",
    default=DEFAULT_RECIPIENT,
    help="Recipient address",
)
@click.option(
    "--value",
    "value_wei",
    envvar="ETHPROBE_VALUE_WEI",
    default=DEFAULT_VALUE_WEI,
    type=click.IntRange(min=0),
    help="Amount in wei",
)
@click.option(
    "--gas-limit",
    envvar="ETHPROBE_GAS_LIMIT",
    default=DEFAULT_GAS_LIMIT,
    type=click.IntRange(min=0),
    help="Gas limit",
)
@click.option(
    "--from-wallet",
    is_flag=True,
    help="Sign with PRIVATE_KEY instead of a freshly generated key",
)
@click.option(
    "--rpc-url",
    envvar="ETHPROBE_RPC_URL",
    default=DEFAULT_RPC_URL,
    help="Ethereum JSON-RPC URL",
)
def transfer(
    recipient: str,
    value_wei: int,
    gas_limit: int,
    from_wallet: bool,
    rpc_url: str,
) -> None:
    """
    Send a value transfer.

    By default the sender is a key generated for this run only; it is
    neither printed nor saved, so an unfunded transfer is rejected by the
    node.
    """
    click.echo("=== ethprobe Transfer ===")
    click.echo("")

    private_key = None
    if from_wallet:
        try:
            private_key = load_private_key()
        except ProbeError as exc:
            click.secho(f"ERROR: {exc}", fg="red")
            sys.exit(exc.exit_code)
    else:
        click.echo("  Using a freshly generated sender key")

    outcome = transfer_value(
        recipient=recipient,
        value_wei=value_wei,
        gas_limit=gas_limit,
        private_key=private_key,
        rpc_url=rpc_url,
    )
    echo_outcome(outcome)
    if not outcome.ok:
        sys.exit(outcome.exit_code)

    click.echo("")
    click.echo("=== Transfer Complete ===")
