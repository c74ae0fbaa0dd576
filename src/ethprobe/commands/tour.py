"""
Tour - Run block query, transfer and counter call in sequence.

A failing routine does not stop the ones after it.  The exit code is that
of the first failed routine.
"""

from __future__ import annotations

import sys
from dataclasses import replace
from typing import Optional

import click

from ..config import ProbeConfig
from ..errors import ConfigError
from ..routines import run_all
from .report import echo_outcome


@click.command()
@click.option("--show-txs", is_flag=True, help="List the block's transaction hashes")
@click.option("--rpc-url", default=None, help="Override ETHPROBE_RPC_URL")
def tour(show_txs: bool, rpc_url: Optional[str]) -> None:
    """Run all three routines against the configured network."""
    try:
        config = ProbeConfig.from_env()
    except ConfigError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(exc.exit_code)
    if rpc_url:
        config = replace(config, rpc_url=rpc_url)

    click.echo("=== ethprobe Tour ===")
    click.echo(f"  RPC: {config.rpc_url}")

    outcomes = run_all(config)
    exit_code = 0
    for outcome in outcomes:
        click.echo("")
        click.secho(f"── {outcome.routine} ──", fg="cyan")
        echo_outcome(outcome, show_txs=show_txs)
        if not outcome.ok and exit_code == 0:
            exit_code = outcome.exit_code

    click.echo("")
    if exit_code:
        click.secho("=== Tour finished with errors ===", fg="red")
        sys.exit(exit_code)
    click.echo("=== Tour Complete ===")
