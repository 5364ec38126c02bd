"""Category management commands."""

import click
from expense_tracker.cli.error_handling import handle_domain_error
from expense_tracker.domain.category import CategoryService
from expense_tracker.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List default categories and your own."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories(ctx.obj["user_id"])
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    click.echo("-" * 50)
    for cat in categories:
        marker = " (default)" if cat.is_default else ""
        click.echo(f"ID: {cat.id:3d} | {cat.color} | {cat.name}{marker}")


@category_group.command("create")
@click.argument("name")
@click.option("--color", default="#B0B0B0", help="Hex color like #FF6B6B (default: #B0B0B0)")
@click.pass_context
def create_category(ctx, name: str, color: str):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category = service.create_category(ctx.obj["user_id"], name=name, color=color)
        click.echo(f"Created category '{category.name}' (ID: {category.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("update")
@click.argument("category_id", type=int)
@click.option("--name", help="New name")
@click.option("--color", help="New hex color")
@click.pass_context
def update_category(ctx, category_id: int, name: str | None, color: str | None):
    """Update one of your categories. Default categories cannot be changed."""
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = CategoryService(db)

    try:
        current = service.get_category(category_id, user_id)
        category = service.update_category(
            category_id,
            user_id,
            name=name if name is not None else current.name,
            color=color if color is not None else current.color,
        )
        click.echo(f"Updated category '{category.name}' (ID: {category.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("delete")
@click.argument("category_id", type=int)
@click.pass_context
def delete_category(ctx, category_id: int):
    """Delete one of your categories.

    The category can only be deleted if no expenses use it.
    """
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        service.delete_category(category_id, ctx.obj["user_id"])
        click.echo(f"Deleted category {category_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
