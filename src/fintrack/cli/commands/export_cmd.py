"""CSV export command."""

from pathlib import Path

import click

from fintrack.cli.date_filters import resolve_cli_date_range
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.csv_export import EXPORT_KINDS, CSVExportService, write_export
from fintrack.domain.errors import DomainError


@click.command("export")
@click.option(
    "--what",
    "kind",
    type=click.Choice(EXPORT_KINDS, case_sensitive=False),
    default="transactions",
    help="What to export (default: transactions)",
)
@click.option("--start-date", help="Only transactions on or after this date")
@click.option("--end-date", help="Only transactions on or before this date")
@click.option(
    "--output",
    type=click.Path(file_okay=False, writable=True),
    default=".",
    help="Directory to write the file to (default: current directory)",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the CSV instead of writing a file")
@click.pass_context
def export_csv(ctx, kind: str, start_date: str, end_date: str, output: str, to_stdout: bool):
    """Export transactions and/or categories to a CSV file."""
    db = ctx.obj["db"]
    service = CSVExportService(db)

    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)

    try:
        filename, content = service.export(kind.lower(), start_date=start, end_date=end)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if to_stdout:
        click.echo(content)
        return

    out_dir = Path(output)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = write_export(out_dir / filename, content)
    click.echo(f"Exported to {path}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_csv)
