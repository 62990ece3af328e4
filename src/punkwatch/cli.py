import asyncio
from pathlib import Path

import click
from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.table import Table

from punkwatch.abi_events import make_event_registry_from_abi
from punkwatch.core.config import load_config
from punkwatch.decoding.registries import make_cryptopunks_registry
from punkwatch.decoding.specs import iter_registry_specs
from punkwatch.errors import ConfigError, SubscriptionError
from punkwatch.orchestration.orchestrator import run_watch

console = Console()
err_console = Console(stderr=True)


@click.group()
def cli() -> None:
    """punkwatch: forward CryptoPunks market events to a chat webhook."""


@cli.command("watch")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="dotenv file to load before reading the environment (default: ./.env if present)",
)
def watch_cmd(env_file: Path | None) -> None:
    """Subscribe to the contract's logs and post every event to the webhook.

    Settings come from the environment: INFURA_PROJECT_ID and
    DISCORD_WEBHOOK_URL are required; CONTRACT_ADDRESS, WATCH_MODE
    ("all" | "single") and WATCH_PUNK_INDEX are optional.
    """
    load_dotenv(env_file or find_dotenv(usecwd=True), override=False)
    try:
        config = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    try:
        outcome = asyncio.run(run_watch(config, console=console, err_console=err_console))
    except SubscriptionError as e:
        raise click.ClickException(str(e)) from e

    stats = outcome.stats
    err_console.print(
        f"[bold]stopped[/] ({outcome.stop_reason}): "
        f"received={stats.received}  "
        f"[green]delivered[/]={stats.delivered}  "
        f"[red]delivery_failed[/]={stats.delivery_failed}  "
        f"[yellow]unrecognized[/]={stats.unrecognized}"
    )


@cli.command("selectors")
@click.option(
    "--abi",
    "abi_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Build the registry from an ABI JSON file instead of the built-in signatures",
)
def selectors_cmd(abi_path: Path | None) -> None:
    """Print the decode registry: priority, event, topic0 and canonical signature."""
    registry = make_event_registry_from_abi(abi_path) if abi_path else make_cryptopunks_registry()

    table = Table(title="Event registry")
    table.add_column("#", justify="right")
    table.add_column("event", style="bold")
    table.add_column("topic0", no_wrap=True)
    table.add_column("signature")
    for i, spec in enumerate(iter_registry_specs(registry), start=1):
        table.add_row(str(i), spec.name, spec.topic0, spec.signature)
    console.print(table)


if __name__ == "__main__":
    cli()
