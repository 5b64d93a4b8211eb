"""Transaction listing and removal commands."""

import click

from fintrack.cli.date_filters import resolve_cli_date_range
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.category import CategoryService
from fintrack.domain.csv_export import format_amount
from fintrack.domain.errors import DomainError, category_name_not_found
from fintrack.domain.transaction import TransactionService


@click.group()
def transaction_group():
    """View and remove transactions."""
    pass


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD, 'this month', ...)")
@click.option("--end-date", help="End date (YYYY-MM-DD, 'today', ...)")
@click.option("--category", help="Category name")
@click.pass_context
def list_transactions(ctx, start_date: str, end_date: str, category: str):
    """List transactions with optional filters."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    category_service = CategoryService(db)

    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)

    category_id = None
    if category:
        cat = category_service.get_category_by_name(category)
        if cat is None:
            click.echo(f"Error: {category_name_not_found(category)}", err=True)
            ctx.exit(1)
        category_id = cat.id

    transactions = service.list_transactions(
        start_date=start, end_date=end, category_id=category_id
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    names = {c.id: c.name for c in category_service.list_categories()}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo(f"{'Date':<12} {'Type':<8} {'Amount':>12}  {'Category':<20} Description")
    click.echo("-" * 80)
    for txn in transactions:
        sign = "+" if txn.type.value == "income" else "-"
        click.echo(
            f"{txn.date.strftime('%Y-%m-%d'):<12} {txn.type.value:<8} "
            f"{sign + format_amount(txn.amount):>12}  "
            f"{names.get(txn.category_id, 'Unknown')[:20]:<20} {txn.description}"
        )


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.pass_context
def delete_transaction(ctx, transaction_id: str):
    """Delete a transaction."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        service.delete_transaction(transaction_id)
        click.echo(f"Deleted transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
