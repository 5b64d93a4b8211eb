"""Initialize default categories."""

import click
from fintrack.domain.category import CategoryService
from fintrack.domain.errors import DomainError


# (name, type, color, icon)
INITIAL_CATEGORIES = [
    ("Salary", "income", "#10b981", "DollarSign"),
    ("Groceries", "expense", "#f59e0b", "ShoppingCart"),
    ("Utilities", "expense", "#ef4444", "Zap"),
    ("Entertainment", "expense", "#ec4899", "Film"),
    ("Dining Out", "expense", "#8b5cf6", "Utensils"),
    ("Transportation", "expense", "#06b6d4", "Car"),
]


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Create the default categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    if service.list_categories():
        click.echo("Categories already exist.")
        return

    created = 0
    errors = 0
    for name, category_type, color, icon in INITIAL_CATEGORIES:
        try:
            service.create_category(name=name, category_type=category_type, color=color, icon=icon)
            created += 1
        except DomainError as e:
            click.echo(f"Warning: Could not create category '{name}': {e}", err=True)
            errors += 1

    if errors == 0:
        click.echo(f"Successfully created {created} categories.")
    else:
        click.echo(f"Created {created} categories with {errors} errors.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
