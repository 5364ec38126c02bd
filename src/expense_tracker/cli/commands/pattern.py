"""Merchant pattern commands."""

import click
from expense_tracker.cli.error_handling import handle_domain_error
from expense_tracker.domain.category import CategoryService
from expense_tracker.domain.entities import MatchType, PatternPatch
from expense_tracker.domain.errors import DomainError
from expense_tracker.domain.pattern import PatternMatcher, PatternService
from expense_tracker.utils.category_resolver import resolve_category

MATCH_TYPES = [m.value for m in MatchType]


@click.group()
def pattern_group():
    """Manage merchant categorization patterns."""
    pass


@pattern_group.command("create")
@click.argument("merchant_name")
@click.option("--category", required=True, help="Category name or ID")
@click.option(
    "--match-type",
    type=click.Choice(MATCH_TYPES, case_sensitive=False),
    default=MatchType.CONTAINS.value,
    help="How the merchant name is compared (default: contains)",
)
@click.pass_context
def create_pattern(ctx, merchant_name: str, category: str, match_type: str):
    """Create a pattern that assigns a category to matching merchants.

    Examples:
        expense-tracker pattern create "uber" --category Transportation
        expense-tracker pattern create "UBER EATS" --category "Food & Dining" --match-type exact
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]

    try:
        category_id = resolve_category(CategoryService(db), user_id, category)
        pattern = PatternService(db).create_pattern(user_id, merchant_name, category_id, match_type)
        click.echo(f"Created {pattern.match_type.value} pattern '{pattern.merchant_name}' (ID: {pattern.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@pattern_group.command("list")
@click.option("--active/--inactive", "is_active", default=None, help="Only show active or inactive patterns")
@click.pass_context
def list_patterns(ctx, is_active: bool | None):
    """List merchant patterns, newest first."""
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]

    patterns = PatternService(db).list_patterns(user_id, is_active=is_active)
    if not patterns:
        click.echo("No patterns found.")
        return

    categories = {cat.id: cat.name for cat in CategoryService(db).list_categories(user_id)}

    click.echo("\nPatterns:")
    click.echo("-" * 90)
    click.echo(f"{'ID':<6} {'Merchant':<25} {'Type':<10} {'Category':<20} {'Active':<8} {'Uses':<6}")
    click.echo("-" * 90)
    for p in patterns:
        click.echo(
            f"{p.id:<6} {p.merchant_name[:25]:<25} {p.match_type.value:<10} "
            f"{categories.get(p.category_id, 'Unknown')[:20]:<20} {'yes' if p.is_active else 'no':<8} {p.use_count:<6}"
        )


@pattern_group.command("update")
@click.argument("pattern_id", type=int)
@click.option("--category", help="New category name or ID")
@click.option("--match-type", type=click.Choice(MATCH_TYPES, case_sensitive=False), help="New match type")
@click.option("--active/--inactive", "is_active", default=None, help="Enable or disable the pattern")
@click.pass_context
def update_pattern(ctx, pattern_id: int, category: str | None, match_type: str | None, is_active: bool | None):
    """Update a merchant pattern."""
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]

    try:
        patch = PatternPatch(
            category_id=resolve_category(CategoryService(db), user_id, category) if category is not None else None,
            match_type=MatchType(match_type.lower()) if match_type is not None else None,
            is_active=is_active,
        )
        pattern = PatternService(db).update_pattern(pattern_id, user_id, patch)
        state = "active" if pattern.is_active else "inactive"
        click.echo(f"Updated pattern '{pattern.merchant_name}' (ID: {pattern.id}, {pattern.match_type.value}, {state})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@pattern_group.command("delete")
@click.argument("pattern_id", type=int)
@click.pass_context
def delete_pattern(ctx, pattern_id: int):
    """Delete a merchant pattern."""
    db = ctx.obj["db"]

    try:
        PatternService(db).delete_pattern(pattern_id, ctx.obj["user_id"])
        click.echo(f"Deleted pattern {pattern_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@pattern_group.command("match")
@click.argument("merchant_name")
@click.pass_context
def match_merchant(ctx, merchant_name: str):
    """Show which pattern, if any, applies to a merchant name."""
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]

    try:
        result = PatternMatcher(db).match(user_id, merchant_name)
        if not result.matched:
            click.echo(f"No pattern matches '{merchant_name}'.")
            return

        pattern = result.pattern
        category = CategoryService(db).get_category(pattern.category_id, user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"'{merchant_name}' matches {pattern.match_type.value} pattern '{pattern.merchant_name}' "
        f"(ID: {pattern.id}) -> {category.name}"
    )


def register_commands(cli):
    """Register pattern commands with main CLI."""
    cli.add_command(pattern_group, name="pattern")
