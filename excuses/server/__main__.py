"""
excuses.server.__main__
=======================

Command-line entry point for the quote server.

Example
-------
    python -m excuses.server --port 1234 --debug
"""
import logging
from typing import Optional

import typer
import uvicorn

from excuses.api.main import create_app
from excuses.config.logging_setup import setup_logging
from excuses.config.settings import SERVER_CONFIG, SERVER_ENV, ConfigError, load_config

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)

@app.command()
def serve(
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on [default: 1234]"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
    config: Optional[str] = typer.Option(None, "--config", help="Config file (default is ./excuses-server.yml)"),
) -> None:
    """
    Start the quote server.
    """
    try:
        cfg, used = load_config(
            "excuses-server",
            SERVER_CONFIG,
            SERVER_ENV,
            config_file=config,
            overrides={"port": port, "debug": True if debug else None},
        )
    except ConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        log_path = setup_logging(cfg["log_dir"], cfg["log_file"], debug=cfg["debug"])
    except OSError as e:
        typer.echo(f"Could not set up logging in {cfg['log_dir']!r}: {e}", err=True)
        raise typer.Exit(code=1)

    if used is None:
        logger.warning("No config file found, using defaults")
    else:
        logger.info(f"Using config file {used}")
    if cfg["debug"]:
        logger.debug(f"Debug logging enabled log_file={log_path}")

    logger.info(f"Server listening port={cfg['port']}")
    # uvicorn exits with status 1 on its own if the port cannot be bound
    uvicorn.run(create_app(cfg), host="0.0.0.0", port=cfg["port"], log_config=None)

def main() -> None:
    app()

if __name__ == "__main__":  # pragma: no cover
    main()
