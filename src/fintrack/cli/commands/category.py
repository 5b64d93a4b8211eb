"""Category management commands."""

import click

from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.category import CategoryService
from fintrack.domain.errors import DomainError

TYPE_CHOICE = click.Choice(["expense", "income"], case_sensitive=False)


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        icon = f" [{cat.icon}]" if cat.icon else ""
        click.echo(f"  {cat.name} ({cat.type.value}, {cat.color}){icon} (ID: {cat.id})")


@category_group.command("create")
@click.argument("name")
@click.option("--type", "category_type", type=TYPE_CHOICE, default="expense", help="Category type (default: expense)")
@click.option("--color", default="#6b7280", help="Hex color (default: #6b7280)")
@click.option("--icon", help="Icon name")
@click.pass_context
def create_category(ctx, name: str, category_type: str, color: str, icon: str):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(
            name=name, category_type=category_type.lower(), color=color, icon=icon
        )
        click.echo(f"Created category '{name}' (ID: {category_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("update")
@click.argument("category_id")
@click.option("--name", help="New name")
@click.option("--type", "category_type", type=TYPE_CHOICE, help="New type")
@click.option("--color", help="New hex color")
@click.option("--icon", help="New icon name")
@click.pass_context
def update_category(ctx, category_id: str, name: str, category_type: str, color: str, icon: str):
    """Update a category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    changes = {
        key: value
        for key, value in {
            "name": name,
            "type": category_type.lower() if category_type else None,
            "color": color,
            "icon": icon,
        }.items()
        if value is not None
    }
    if not changes:
        click.echo("Error: Nothing to update. Pass --name, --type, --color or --icon.", err=True)
        ctx.exit(1)

    try:
        service.update_category(category_id, **changes)
        click.echo(f"Updated category {category_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("delete")
@click.argument("category_id")
@click.pass_context
def delete_category(ctx, category_id: str):
    """Delete a category with no transactions."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        service.delete_category(category_id)
        click.echo(f"Deleted category {category_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
