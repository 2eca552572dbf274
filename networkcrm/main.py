"""
Network CRM Analytics CLI

Command-line interface for analyzing a contact export.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from networkcrm.models.entities import Contact, RelationshipStrength

# Initialize console for rich output
console = Console()

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]

GRADE_STYLES = {
    "A+": "bold green",
    "A": "green",
    "B+": "cyan",
    "B": "cyan",
    "C+": "yellow",
    "C": "yellow",
    "D+": "red",
    "D": "red",
    "F": "bold red",
}


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure logging with rich handler."""
    handlers = [RichHandler(console=console, show_path=False)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(message)s",
        handlers=handlers,
        force=True,
    )


def _make_clock(now: Optional[datetime]):
    from networkcrm.utils.clock import FixedClock, SystemClock

    return FixedClock(now) if now else SystemClock()


def _format_date(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d") if value else "-"


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool) -> None:
    """Network CRM Analytics - relationship health and follow-up insights."""
    from networkcrm.utils.config import load_config

    ctx.ensure_object(dict)

    try:
        config = load_config()
    except Exception as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        sys.exit(1)
    ctx.obj["config"] = config

    if verbose:
        ctx.obj["log_level"] = "DEBUG"
    elif quiet:
        ctx.obj["log_level"] = "WARNING"
    else:
        ctx.obj["log_level"] = config.logging.level

    setup_logging(ctx.obj["log_level"], config.logging.file)


@cli.command()
@click.option(
    "--input", "-i",
    "input_file",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
    help="Contact export (CSV or JSON)",
)
@click.option(
    "--output", "-o",
    "output_dir",
    default=None,
    type=click.Path(file_okay=False, dir_okay=True),
    help="Output directory for reports",
)
@click.option(
    "--format", "-f",
    "formats",
    multiple=True,
    type=click.Choice(["json", "markdown", "csv"]),
    help="Output formats to generate",
)
@click.option(
    "--now",
    type=click.DateTime(formats=DATE_FORMATS),
    default=None,
    help="Reference date for the analysis (default: current time)",
)
@click.option(
    "--parallel/--sequential",
    default=None,
    help="Run aggregators concurrently",
)
@click.option(
    "--no-files",
    is_flag=True,
    help="Print the report without writing files",
)
@click.pass_context
def report(
    ctx: click.Context,
    input_file: str,
    output_dir: Optional[str],
    formats: tuple[str, ...],
    now: Optional[datetime],
    parallel: Optional[bool],
    no_files: bool,
) -> None:
    """Analyze a contact export and generate a networking report."""
    from networkcrm.pipeline.ingest import load_contacts
    from networkcrm.pipeline.analyze import NetworkAnalyzer
    from networkcrm.pipeline.outputs import generate_outputs

    config = ctx.obj["config"]

    console.print("\n[bold blue]Network CRM Analytics[/bold blue]")
    console.print("=" * 50)

    try:
        snapshot = load_contacts(input_file)
    except Exception as e:
        console.print(f"  [red]✗[/red] Failed to load contacts: {e}")
        sys.exit(1)
    console.print(f"  [green]✓[/green] Loaded {snapshot.total_contacts} contacts")

    analyzer = NetworkAnalyzer(config=config, clock=_make_clock(now))
    result = analyzer.analyze(snapshot, parallel=parallel)

    style = GRADE_STYLES.get(result.grade, "bold")
    console.print(
        f"\n[bold]Networking score:[/bold] {result.score.total}/100 "
        f"[{style}]{result.grade}[/{style}]"
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("Component")
    table.add_column("Points", justify="right")
    table.add_row("Contact quantity", str(result.score.quantity))
    table.add_row("Weekly activity", str(result.score.activity))
    table.add_row("Relationship health", str(result.score.health))
    table.add_row("Follow-up completion", str(result.score.follow_up))
    console.print(table)

    console.print("\n[bold]Relationship Health:[/bold]")
    table = Table(show_header=True, header_style="bold")
    table.add_column("Strength")
    table.add_column("Contacts", justify="right")
    for strength in RelationshipStrength:
        table.add_row(
            f"[{strength.color}]{strength.label}[/{strength.color}]",
            str(result.health.count_for(strength)),
        )
    console.print(table)

    if result.stats.top_companies:
        console.print("\n[bold]Top Companies in Network:[/bold]")
        table = Table(show_header=True, header_style="bold")
        table.add_column("Company")
        table.add_column("Contacts", justify="right")
        for entry in result.stats.top_companies:
            table.add_row(entry.company, str(entry.count))
        console.print(table)

    console.print("\n[bold]Follow-Ups by Week:[/bold]")
    table = Table(show_header=True, header_style="bold")
    table.add_column("Week of")
    table.add_column("Follow-ups", justify="right")
    for bucket in result.follow_up.follow_ups_by_week:
        table.add_row(bucket.label, str(bucket.count))
    console.print(table)

    if result.insights:
        console.print("\n[bold]Insights:[/bold]")
        for insight in result.insights:
            console.print(f"  • {insight}")

    if not no_files:
        output_files = generate_outputs(
            result,
            output_dir=output_dir or config.output.directory,
            formats=list(formats) or config.output.formats,
            timestamp_filenames=config.output.timestamp_filenames,
        )
        console.print("\n[bold]Reports Generated:[/bold]")
        for fmt, path in output_files.items():
            console.print(f"  • {fmt}: [cyan]{path}[/cyan]")

    console.print()


def _follow_up_table(contacts: list[Contact], classify) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Company")
    table.add_column("Follow-up", justify="right")
    table.add_column("Last contact", justify="right")
    table.add_column("Strength")

    for contact in contacts:
        strength = classify(contact)
        table.add_row(
            contact.display_name,
            contact.company or "Unknown",
            _format_date(contact.next_follow_up),
            _format_date(contact.last_contact),
            f"[{strength.color}]{strength.label}[/{strength.color}]",
        )
    return table


@cli.command("follow-ups")
@click.option(
    "--input", "-i",
    "input_file",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
    help="Contact export (CSV or JSON)",
)
@click.option(
    "--days",
    default=None,
    type=int,
    help="Horizon for upcoming follow-ups (default from config)",
)
@click.option(
    "--now",
    type=click.DateTime(formats=DATE_FORMATS),
    default=None,
    help="Reference date (default: current time)",
)
@click.pass_context
def follow_ups(
    ctx: click.Context,
    input_file: str,
    days: Optional[int],
    now: Optional[datetime],
) -> None:
    """List overdue and upcoming follow-ups."""
    from networkcrm.pipeline.ingest import load_contacts
    from networkcrm.models.relationship import RelationshipClassifier

    config = ctx.obj["config"]
    days = days if days is not None else config.follow_up.upcoming_days

    try:
        snapshot = load_contacts(input_file)
    except Exception as e:
        console.print(f"[red]Error loading contacts: {e}[/red]")
        sys.exit(1)

    reference = _make_clock(now).now()
    classifier = RelationshipClassifier(
        strong_days=config.relationship.strong_days,
        moderate_days=config.relationship.moderate_days,
        dormant_days=config.relationship.dormant_days,
    )

    def classify(contact: Contact) -> RelationshipStrength:
        return classifier.classify(contact, reference)

    overdue = snapshot.get_overdue_follow_ups(reference)
    upcoming = snapshot.get_upcoming_follow_ups(reference, days=days)

    if overdue:
        console.print(f"\n[bold red]Overdue ({len(overdue)}):[/bold red]")
        console.print(_follow_up_table(overdue, classify))
    else:
        console.print("\n[green]No overdue follow-ups.[/green]")

    if upcoming:
        console.print(f"\n[bold]Upcoming in the next {days} days ({len(upcoming)}):[/bold]")
        console.print(_follow_up_table(upcoming, classify))
    else:
        console.print(f"\n[dim]Nothing scheduled in the next {days} days.[/dim]")

    console.print()


@cli.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from networkcrm import __version__

    console.print(f"Network CRM Analytics v{__version__}")


def main() -> None:
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
