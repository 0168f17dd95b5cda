"""CLI for the pairwise ranker."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from pairwise_ranker import __version__
from pairwise_ranker.core.config import RankerConfig, load_config
from pairwise_ranker.core.errors import (
    ConfigurationError,
    InvalidItemCountError,
    RankingError,
)
from pairwise_ranker.ranking import ALGORITHMS
from pairwise_ranker.services.pairing import round_robin_pairs, total_comparisons
from pairwise_ranker.services.reporting import standing_headers, standing_rows
from pairwise_ranker.services.storage import SessionStore
from pairwise_ranker.session import RatingSession

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

app = typer.Typer(
    name="pairwise-ranker",
    help="Pairwise Ranker - Rank items by choosing the better of two, again and again",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"pairwise-ranker v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """Pairwise Ranker CLI."""


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def _load_config(
    config_path: Path | None,
    algorithm: str | None,
    topic: str | None,
    output_dir: Path | None,
    shuffle: bool | None,
) -> RankerConfig:
    config = load_config(config_path) if config_path else RankerConfig()
    if algorithm is not None:
        config.ranking.algorithm = algorithm  # type: ignore[assignment]
    if topic is not None:
        config.topic = topic
    if output_dir is not None:
        config.output_dir = str(output_dir)
    if shuffle is not None:
        config.shuffle_pairs = shuffle
    return config


def _prompt_items(config: RankerConfig) -> list[str]:
    count = typer.prompt("How many items are there?", type=int)
    if not 2 <= count <= config.max_items:
        raise InvalidItemCountError(count, config.max_items)
    return [typer.prompt(f"Enter name of item {i}", type=str) for i in range(1, count + 1)]


def _run_comparisons(session: RatingSession, config: RankerConfig) -> None:
    pairs = round_robin_pairs(session.size, shuffle=config.shuffle_pairs, seed=config.seed)
    console.print(
        f"\n[bold]--- Pairwise Comparisons ({total_comparisons(session.size)}) ---[/bold]"
    )
    for first, second in pairs:
        a, b = session.items[first].name, session.items[second].name
        choice = typer.prompt(f"Which is better? 1. {a} or 2. {b} (s to skip)", type=str)
        choice = choice.strip().lower()
        if choice == "1":
            session.record_vote(first, second)
        elif choice == "2":
            session.record_vote(second, first)
        else:
            console.print("[yellow]No choice made. No points awarded.[/yellow]")
            session.skip(first, second)


def _print_standings(session: RatingSession) -> None:
    standings = session.standings()
    table = Table(title=f"Final Rankings ({session.algorithm.label}): {session.topic}")
    for header in standing_headers(session.algorithm):
        table.add_column(header)
    for row in standing_rows(standings, session.algorithm):
        table.add_row(*row)
    console.print(table)


@app.command()
def rank(
    items: Annotated[
        list[str] | None, typer.Argument(help="Item names (prompted for if omitted)")
    ] = None,
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to config YAML file")
    ] = None,
    algorithm: Annotated[
        str | None,
        typer.Option("--algorithm", "-a", help=f"Rating algorithm: {', '.join(ALGORITHMS)}"),
    ] = None,
    topic: Annotated[str | None, typer.Option("--topic", help="What is being compared")] = None,
    output_dir: Annotated[
        Path | None, typer.Option("--output-dir", help="Where sessions are saved")
    ] = None,
    shuffle: Annotated[
        bool | None, typer.Option("--shuffle/--no-shuffle", help="Randomize pair order")
    ] = None,
    save: Annotated[bool, typer.Option("--save/--no-save", help="Save the session")] = True,
    report: Annotated[
        bool, typer.Option("--report", help="Also write markdown and CSV leaderboards")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")] = False,
) -> None:
    """Compare every pair of items and print the resulting ranking.

    Args:
        items: Item names. Falls back to the config, then to prompts.
        config_path: Path to YAML configuration file.
        algorithm: Override the configured rating algorithm.
        topic: Override the configured topic.
        output_dir: Override where sessions are written.
        shuffle: Override whether pairs are shown in random order.
        save: Persist the finished session.
        report: Write markdown and CSV leaderboards next to the session.
        verbose: Enable verbose logging.
    """
    _configure_logging(verbose)
    store: SessionStore | None = None
    try:
        config = _load_config(config_path, algorithm, topic, output_dir, shuffle)
        names = list(items or config.items) or _prompt_items(config)

        store = SessionStore(config)
        session = store.new_session(names)
        _run_comparisons(session, config)
        session.finalize()
        _print_standings(session)

        if save:
            path = store.save(session)
            console.print(f"Session {session.session_id} saved to: {path}")
        if report:
            md_path, csv_path = store.save_report(session)
            console.print(f"Reports saved to: {md_path}, {csv_path}")

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except (RankingError, ConfigurationError) as e:
        console.print(f"[red]{escape(str(e))}")
        raise typer.Exit(1) from e
    except ValidationError as e:
        console.print(f"[red]Validation error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    finally:
        if store is not None:
            store.close()


@app.command()
def show(
    session_ref: Annotated[str, typer.Argument(help="Session id or path to a session JSON file")],
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to config YAML file")
    ] = None,
    output_dir: Annotated[
        Path | None, typer.Option("--output-dir", help="Where sessions are saved")
    ] = None,
    replay: Annotated[
        bool, typer.Option("--replay", help="Recompute scores from the recorded votes")
    ] = False,
) -> None:
    """Print the ranking of a saved session.

    Args:
        session_ref: Session id, or a path to its JSON record.
        config_path: Path to YAML configuration file.
        output_dir: Override where sessions are looked up.
        replay: Recompute scores from votes instead of trusting stored ones.
    """
    store: SessionStore | None = None
    try:
        config = _load_config(config_path, None, None, output_dir, None)
        store = SessionStore(config)
        path = Path(session_ref)
        if not path.is_file():
            path = store.find(session_ref)
        session = store.load(path)
        if replay:
            session.replay()
        console.print(
            f"Session {session.session_id}: {session.matrix.total} votes, "
            f"{session.skipped} skipped"
        )
        _print_standings(session)

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except (RankingError, ConfigurationError) as e:
        console.print(f"[red]{escape(str(e))}")
        raise typer.Exit(1) from e
    except ValidationError as e:
        console.print(f"[red]Validation error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    finally:
        if store is not None:
            store.close()


@app.command(name="list")
def list_sessions(
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to config YAML file")
    ] = None,
    output_dir: Annotated[
        Path | None, typer.Option("--output-dir", help="Where sessions are saved")
    ] = None,
) -> None:
    """List saved sessions."""
    try:
        config = _load_config(config_path, None, None, output_dir, None)
    except (FileNotFoundError, ConfigurationError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except ValidationError as e:
        console.print(f"[red]Validation error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    store = SessionStore(config)
    try:
        records = store.list_records()
    finally:
        store.close()

    if not records:
        console.print("No saved sessions.")
        return

    table = Table(title="Saved Sessions")
    for header in ("ID", "Topic", "Algorithm", "Items", "Votes", "Created"):
        table.add_column(header)
    for record in records:
        table.add_row(
            record.session_id,
            record.topic,
            record.algorithm,
            str(len(record.items)),
            str(sum(map(sum, record.votes))),
            record.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


@app.command()
def validate(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
) -> None:
    """Validate a configuration file without running.

    Args:
        config_path: Path to YAML configuration file.
    """
    try:
        config = load_config(config_path)
        console.print("[green]Configuration is valid![/green]")
        console.print(f"  Topic: {config.topic}")
        console.print(f"  Items: {len(config.items)}")
        console.print(f"  Max items: {config.max_items}")
        console.print(f"  Ranking algorithm: {config.ranking.algorithm}")
        console.print(f"  Output dir: {config.output_dir}")

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]{escape(str(e))}")
        raise typer.Exit(1) from e
    except ValueError as e:
        console.print(f"[red]Validation error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


@app.command()
def info() -> None:
    """Show tool information and example commands."""
    console.print("[bold]Pairwise Ranker[/bold]")
    console.print(f"Version: {__version__}\n")

    console.print("[bold]Algorithms:[/bold] " + ", ".join(ALGORITHMS) + "\n")

    console.print("[bold]Example Commands:[/bold]")
    console.print("  # Rank three items with Elo")
    console.print("  pairwise-ranker rank tea coffee cocoa\n")

    console.print("  # Use Glicko and shuffle the pairs")
    console.print("  pairwise-ranker rank tea coffee cocoa --algorithm glicko --shuffle\n")

    console.print("  # Items and settings from a config file")
    console.print("  pairwise-ranker rank --config config.yaml --report\n")

    console.print("  # Show a saved session")
    console.print("  pairwise-ranker show 1\n")

    console.print("  # Validate config")
    console.print("  pairwise-ranker validate config.yaml")


if __name__ == "__main__":
    app()
