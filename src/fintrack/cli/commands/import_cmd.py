"""CSV import command."""

import click

from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.csv_format import ColumnMapping, LogicalField
from fintrack.domain.csv_import import CSVImportService
from fintrack.domain.errors import DomainError


def parse_map_options(base: ColumnMapping, options: tuple[str, ...]) -> ColumnMapping:
    """Apply ``FIELD=COLUMN`` overrides on top of a mapping.

    An empty column (``notes=``) unmaps the field.

    Raises:
        ValueError: If an option is not of the form FIELD=COLUMN
    """
    values = base.to_dict()
    for option in options:
        field, sep, column = option.partition("=")
        if not sep:
            raise ValueError(f"Invalid --map value '{option}'. Expected FIELD=COLUMN")
        values[field.strip().lower()] = column.strip()
    return ColumnMapping.from_dict(values)


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option(
    "--map",
    "map_options",
    multiple=True,
    metavar="FIELD=COLUMN",
    help=(
        "Map a transaction field to a CSV column, e.g. --map date='Posted Date'. "
        f"Fields: {', '.join(f.value for f in LogicalField)}. "
        "Unmapped fields are guessed from the header names."
    ),
)
@click.option(
    "--create-missing/--no-create-missing",
    default=True,
    help="Create categories that do not exist yet (default) or reject the import",
)
@click.option("--dry-run", is_flag=True, help="Check the file without saving anything")
@click.pass_context
def import_csv(ctx, csv_file: str, map_options: tuple[str, ...], create_missing: bool, dry_run: bool):
    """Import transactions from a CSV file."""
    db = ctx.obj["db"]
    service = CSVImportService(db)

    try:
        table, suggested = service.preview(csv_file)
        mapping = parse_map_options(suggested, map_options)
        result = service.import_table(
            table,
            mapping=mapping,
            create_missing_categories=create_missing,
            dry_run=dry_run,
            source=csv_file,
        )
    except (DomainError, ValueError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)
        return

    for header in result["duplicate_headers"]:
        click.echo(
            f"Warning: column '{header}' appears more than once; only the last one is used",
            err=True,
        )

    click.echo("\nDry run complete:" if dry_run else "\nImport complete:")
    click.echo(f"  Imported: {result['imported']} transactions")
    if result["errors"]:
        click.echo(f"  Skipped: {len(result['errors'])} rows")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)
    if result["created_categories"]:
        click.echo(
            f"  Categories created: {len(result['created_categories'])} "
            f"({', '.join(result['created_categories'])})"
        )
    elif dry_run and result["missing_categories"]:
        names = [name or "(blank)" for name in result["missing_categories"]]
        click.echo(f"  Categories to create: {len(names)} ({', '.join(names)})")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
