"""CLI entrypoint for the Vilkas harness: command registration and helpers."""
from typing import Optional

import typer

from vilkas_harness.client import HarnessError, VilkasClient
from vilkas_harness.utils.logging import configure_logging, get_logger

logger = get_logger("cli")

# Create the CLI app
app = typer.Typer(help="Vilkas harness: exercise a Vilkas recommendation service over HTTP")


def setup_logging(log_level: str, log_file: Optional[str] = None) -> None:
    """Configure logging for a command invocation."""
    configure_logging(level=log_level, log_file=log_file)


def fail(exc: HarnessError) -> None:
    """Report a harness error on stderr and exit with code 1."""
    typer.echo(f"Error: {exc.detail}", err=True)
    raise typer.Exit(code=1) from exc


def make_client(host: str, timeout: Optional[float]) -> VilkasClient:
    """Build a client for single-call commands."""
    return VilkasClient(host, timeout=timeout)


# Import command modules (they register with the global `app`)
from vilkas_harness.cli.run import run  # noqa: E402,F401
from vilkas_harness.cli.calls import delete_item, item, model, train  # noqa: E402,F401

__all__ = [
    "app",
    "fail",
    "make_client",
    "setup_logging",
    "run",
    "item",
    "delete_item",
    "train",
    "model",
]
