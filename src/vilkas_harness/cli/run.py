"""Workflow command for the Vilkas harness CLI."""
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from vilkas_harness.cli import app, fail, setup_logging
from vilkas_harness.client import HarnessError, VilkasClient
from vilkas_harness.config import Preset, SelectionStrategy, load_config
from vilkas_harness.workflow import HarnessRunner, RunReport


def _summary(report: RunReport) -> str:
    lines = [
        f"Partition:      {report.partition}",
        f"Seed item:      {report.seed_item.id}",
        f"Items created:  {len(report.created_items)}",
        f"Rounds:         {len(report.rounds)}",
        f"Train status:   {report.train_status}",
        f"Model weights:  {len(report.model.weights) if report.model else 0}",
        f"Calls issued:   {report.call_count}",
    ]
    if report.last_recommendation is not None:
        lines.append(
            f"Last result:    {report.last_recommendation.id} "
            f"({len(report.last_recommendation.items)} items)"
        )
    return "\n".join(lines)


@app.command()
def run(
    preset: Optional[Preset] = typer.Option(None, help="Named parameter set"),
    config_file: Optional[Path] = typer.Option(None, help="JSON file with harness settings"),
    host: Optional[str] = typer.Option(None, help="Base URL of the service"),
    partition: Optional[str] = typer.Option(None, help="Partition to work in"),
    user: Optional[str] = typer.Option(None, help="User id for views and recommendations"),
    seed_item_id: Optional[str] = typer.Option(None, help="Id of the seed item"),
    seed_views: Optional[int] = typer.Option(None, help="Initial view count of the seed item"),
    item_count: Optional[int] = typer.Option(None, help="Items created after the seed"),
    views_per_item: Optional[int] = typer.Option(None, help="Views recorded per created item"),
    rounds: Optional[int] = typer.Option(None, help="Recommend/view rounds"),
    recommend_count: Optional[int] = typer.Option(None, help="Items requested per recommendation"),
    selection_strategy: Optional[SelectionStrategy] = typer.Option(
        None, help="How the next current item is picked"
    ),
    timeout: Optional[float] = typer.Option(None, help="Request timeout in seconds"),
    as_json: bool = typer.Option(False, "--json", help="Print the run report as JSON"),
    log_level: str = typer.Option("info", help="Log level"),
    log_file: Optional[Path] = typer.Option(None, help="Also write logs to this file"),
) -> None:
    """Run the scripted create/view/recommend/train workflow."""
    setup_logging(log_level, str(log_file) if log_file else None)

    try:
        config = load_config(
            preset=preset,
            config_file=config_file,
            host=host,
            partition=partition,
            user=user,
            seed_item_id=seed_item_id,
            seed_views=seed_views,
            item_count=item_count,
            views_per_item=views_per_item,
            rounds=rounds,
            recommend_count=recommend_count,
            selection_strategy=selection_strategy,
            timeout=timeout,
        )
    except (OSError, ValueError, ValidationError) as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    with VilkasClient(config.host, timeout=config.timeout) as client:
        try:
            report = HarnessRunner(config, client=client).run()
        except HarnessError as exc:
            fail(exc)
            return

    if as_json:
        typer.echo(report.model_dump_json(indent=2))
    else:
        typer.echo(_summary(report))
