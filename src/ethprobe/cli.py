"""
ethprobe CLI

Exercises an Ethereum JSON-RPC stack against a public test network.

Commands:
  block     - Query a block by number
  transfer  - Sign and broadcast a value transfer
  counter   - Increment the Counter contract and read it back
  tour      - Run block, transfer and counter in sequence
  whoami    - Show the address of the configured PRIVATE_KEY
  info      - Show resolved configuration
"""

from __future__ import annotations

import sys

import click

from .config import ETHPROBE_ENV, ProbeConfig, load_env_file
from .errors import ProbeError
from .keys import get_address, load_private_key


# ============ Constants ============

VERSION = "0.1.0"


# ============ Banner ============


def _print_banner() -> None:
    click.echo(
        click.style("  ◆ ", fg="cyan")
        + click.style("E T H P R O B E", fg="bright_white", bold=True)
        + click.style(f"  v{VERSION}", dim=True)
    )
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="ethprobe")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """ethprobe: Ethereum JSON-RPC walkthrough."""
    # Subcommand options read their envvars after this runs.
    load_env_file()
    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .commands.block import block
from .commands.transfer import transfer
from .commands.counter import counter
from .commands.tour import tour

cli.add_command(block)
cli.add_command(transfer)
cli.add_command(counter)
cli.add_command(tour)


# ============ Identity ============


@cli.command()
def whoami() -> None:
    """Show the address of the configured PRIVATE_KEY."""
    try:
        address = get_address(load_private_key())
    except ProbeError as exc:
        click.echo(f"No usable key: {exc}")
        sys.exit(exc.exit_code)
    click.echo(f"Address: {address}")


# ============ Info ============


@cli.command()
def info() -> None:
    """Show resolved configuration."""
    _print_banner()

    try:
        config = ProbeConfig.from_env()
    except ProbeError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(exc.exit_code)

    rows = [
        ("RPC URL:     ", config.rpc_url),
        ("Block:       ", str(config.block_number)),
        ("Recipient:   ", config.recipient),
        ("Amount:      ", f"{config.value_wei} wei"),
        ("Gas limit:   ", str(config.gas_limit)),
        ("Counter:     ", config.counter_address),
        ("Env file:    ", str(ETHPROBE_ENV)),
    ]
    for label, value in rows:
        click.echo(click.style(f"  {label}", dim=True) + click.style(value, fg="bright_white"))

    key_state = (
        click.style("set", fg="green")
        if config.private_key
        else click.style("not set", fg="yellow")
    )
    click.echo(click.style("  PRIVATE_KEY: ", dim=True) + key_state)
    click.echo()


# ============ Entry Points ============


def main() -> None:
    """ethprobe CLI entry point."""
    # Ensure UTF-8 output on Windows (for box-drawing symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass
    cli()


if __name__ == "__main__":
    main()
