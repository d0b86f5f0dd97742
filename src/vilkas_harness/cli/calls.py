"""Single-call commands for the Vilkas harness CLI."""
import json
from typing import Optional

import typer

from vilkas_harness.cli import app, fail, make_client, setup_logging
from vilkas_harness.client import HarnessError

DEFAULT_HOST = "http://localhost:3000"


@app.command()
def item(
    part: str = typer.Argument(..., help="Partition name"),
    id: str = typer.Argument(..., help="Item id"),
    host: str = typer.Option(DEFAULT_HOST, help="Base URL of the service"),
    timeout: Optional[float] = typer.Option(None, help="Request timeout in seconds"),
    log_level: str = typer.Option("warning", help="Log level"),
) -> None:
    """Fetch an item and print it as JSON."""
    setup_logging(log_level)
    with make_client(host, timeout) as client:
        try:
            found = client.get_item(part, id)
        except HarnessError as exc:
            fail(exc)
            return
    typer.echo(found.model_dump_json(indent=2, exclude_none=True))


@app.command(name="delete-item")
def delete_item(
    part: str = typer.Argument(..., help="Partition name"),
    id: str = typer.Argument(..., help="Item id"),
    host: str = typer.Option(DEFAULT_HOST, help="Base URL of the service"),
    timeout: Optional[float] = typer.Option(None, help="Request timeout in seconds"),
    log_level: str = typer.Option("warning", help="Log level"),
) -> None:
    """Delete an item."""
    setup_logging(log_level)
    with make_client(host, timeout) as client:
        try:
            client.delete_item(part, id)
        except HarnessError as exc:
            fail(exc)
            return
    typer.echo(f"Deleted item {id} from {part}")


@app.command()
def train(
    part: str = typer.Argument(..., help="Partition name"),
    host: str = typer.Option(DEFAULT_HOST, help="Base URL of the service"),
    timeout: Optional[float] = typer.Option(None, help="Request timeout in seconds"),
    log_level: str = typer.Option("warning", help="Log level"),
) -> None:
    """Trigger model training for a partition."""
    setup_logging(log_level)
    with make_client(host, timeout) as client:
        try:
            response = client.train(part)
        except HarnessError as exc:
            fail(exc)
            return
    typer.echo(f"Training triggered for {part} (status {response.status_code})")


@app.command()
def model(
    part: str = typer.Argument(..., help="Partition name"),
    host: str = typer.Option(DEFAULT_HOST, help="Base URL of the service"),
    timeout: Optional[float] = typer.Option(None, help="Request timeout in seconds"),
    log_level: str = typer.Option("warning", help="Log level"),
) -> None:
    """Print the feature weights of the model trained for a partition."""
    setup_logging(log_level)
    with make_client(host, timeout) as client:
        try:
            info = client.get_model(part)
        except HarnessError as exc:
            fail(exc)
            return
    typer.echo(json.dumps(info.weights, indent=2, sort_keys=True))
