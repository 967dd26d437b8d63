"""
excuses.client.__main__
=======================

Command-line entry point for the TUI client.

Example
-------
    python -m excuses.client --server localhost:1234
"""
import asyncio
import logging
import sys
from typing import Optional

import typer

from excuses.client.rpc import QuoteClient, RPCError
from excuses.config.logging_setup import setup_logging
from excuses.config.settings import CLIENT_CONFIG, CLIENT_ENV, ConfigError, load_config
from excuses.tui.app import ExcusesApp

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="A terminal user interface that displays excuses from https://cyber.excusesecu.fr/. "
    "Needs an interactive terminal: stdin must be a TTY.",
)

async def run_client(address: str) -> None:
    async with QuoteClient(address) as client:
        await ExcusesApp(client).run(interactive=True)

@app.command()
def browse(
    server: Optional[str] = typer.Option(None, "--server", help="RPC server address [default: localhost:1234]"),
    config: Optional[str] = typer.Option(None, "--config", help="Config file (default is ./excuses-client.yml)"),
) -> None:
    """
    A TUI for cyber security excuses.

    Needs an interactive terminal: stdin must be a TTY.
    """
    if not sys.stdin.isatty():
        typer.echo("excuses-client needs an interactive terminal (stdin is not a TTY)", err=True)
        raise typer.Exit(code=1)

    try:
        cfg, used = load_config(
            "excuses-client",
            CLIENT_CONFIG,
            CLIENT_ENV,
            config_file=config,
            overrides={"server": server},
        )
    except ConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=1)

    if used is not None:
        typer.echo(f"Using config file: {used}")

    try:
        setup_logging(cfg["log_dir"], cfg["log_file"], console=False)
    except OSError as e:
        typer.echo(f"Could not set up logging in {cfg['log_dir']!r}: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        asyncio.run(run_client(cfg["server"]))
    except RPCError as e:
        logger.error(f"Connection error: {e}")
        typer.echo(f"Connection error: {e}", err=True)
        raise typer.Exit(code=1)

def main() -> None:
    app()

if __name__ == "__main__":  # pragma: no cover
    main()
