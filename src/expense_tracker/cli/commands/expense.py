"""Expense commands."""

import click
from expense_tracker.cli.account_resolution import resolve_account_or_exit
from expense_tracker.cli.error_handling import handle_domain_error
from expense_tracker.domain.account import AccountService
from expense_tracker.domain.category import CategoryService
from expense_tracker.domain.entities import ExpensePatch
from expense_tracker.domain.errors import DomainError
from expense_tracker.domain.ledger import DEFAULT_PAGE_SIZE, LedgerService
from expense_tracker.domain.pattern import PatternMatcher
from expense_tracker.utils.amount_parser import parse_amount
from expense_tracker.utils.category_resolver import resolve_category
from expense_tracker.utils.date_parser import parse_date, parse_month


@click.group()
def expense_group():
    """Record and browse expenses."""
    pass


@expense_group.command("add")
@click.argument("amount")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--category", help="Category name or ID (guessed from --merchant when omitted)")
@click.option("--date", "date_str", default="today", help="Date (YYYY-MM-DD, 'today', 'yesterday', 'last friday')")
@click.option("--description", help="Description")
@click.option("--merchant", help="Merchant name")
@click.pass_context
def add_expense(
    ctx,
    amount: str,
    account: str,
    category: str | None,
    date_str: str,
    description: str | None,
    merchant: str | None,
):
    """Add an expense and charge it to an account.

    When --category is not given, the merchant name is matched against your
    active merchant patterns.

    Examples:
        expense-tracker expense add 50 --account Checking --category "Food & Dining"
        expense-tracker expense add 12.40 --account 1 --merchant "UBER EATS SF"
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]

    account_id = resolve_account_or_exit(ctx, AccountService(db), user_id, account)

    try:
        expense_amount = parse_amount(amount)
        expense_date = parse_date(date_str)

        if category is not None:
            category_id = resolve_category(CategoryService(db), user_id, category)
        elif merchant:
            result = PatternMatcher(db).match(user_id, merchant)
            if not result.matched:
                click.echo(f"Error: No pattern matches merchant '{merchant}'. Use --category.", err=True)
                ctx.exit(1)
            category_id = result.pattern.category_id
            click.echo(f"Matched pattern '{result.pattern.merchant_name}' ({result.pattern.match_type.value})")
        else:
            click.echo("Error: Either --category or --merchant is required.", err=True)
            ctx.exit(1)

        expense = LedgerService(db).create_expense(
            user_id=user_id,
            account_id=account_id,
            category_id=category_id,
            amount=expense_amount,
            date=expense_date,
            description=description,
            merchant_name=merchant,
        )
        click.echo(f"Added expense {expense.id}: ${expense.amount:,.2f} on {expense.date}")
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)


@expense_group.command("list")
@click.option("--account", help="Account name or ID")
@click.option("--month", help="Month to show (YYYY-MM)")
@click.option("--page", type=int, default=1, help="Page number (default: 1)")
@click.option("--limit", type=int, default=DEFAULT_PAGE_SIZE, help=f"Expenses per page (default: {DEFAULT_PAGE_SIZE})")
@click.pass_context
def list_expenses(ctx, account: str | None, month: str | None, page: int, limit: int):
    """List expenses, newest first."""
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), user_id, account)

    year = month_num = None
    if month:
        try:
            year, month_num = parse_month(month)
        except ValueError as e:
            click.echo(f"Error: Invalid month: {e}", err=True)
            ctx.exit(1)

    try:
        result = LedgerService(db).list_expenses(
            user_id, account_id=account_id, year=year, month=month_num, page=page, limit=limit
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not result.expenses:
        click.echo("No expenses found.")
        return

    accounts = {acc.id: acc.name for acc in AccountService(db).list_accounts(user_id)}
    categories = {cat.id: cat.name for cat in CategoryService(db).list_categories(user_id)}

    click.echo(f"\nFound {result.total_count} expense(s), page {result.current_page} of {result.total_pages}:")
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Date':<12} {'Amount':<12} {'Account':<20} {'Category':<20} {'Description':<30}")
    click.echo("-" * 100)

    for exp in result.expenses:
        amount_str = f"${exp.amount:,.2f}"
        description = (exp.description or exp.merchant_name or "")[:30]
        click.echo(
            f"{exp.id:<6} {str(exp.date):<12} {amount_str:<12} {accounts.get(exp.account_id, 'Unknown'):<20} "
            f"{categories.get(exp.category_id, 'Unknown'):<20} {description:<30}"
        )

    click.echo("-" * 100)
    click.echo(f"Page total: ${result.page_total:,.2f}")
    if result.has_more:
        click.echo(f"More results: use --page {result.current_page + 1}")


@expense_group.command("update")
@click.argument("expense_id", type=int)
@click.option("--amount", help="New amount")
@click.option("--category", help="New category name or ID")
@click.option("--description", help="New description")
@click.option("--verified/--unverified", default=None, help="Mark expense as verified or not")
@click.pass_context
def update_expense(
    ctx,
    expense_id: int,
    amount: str | None,
    category: str | None,
    description: str | None,
    verified: bool | None,
):
    """Update an expense. Amount changes are applied to the account balance."""
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]

    try:
        patch = ExpensePatch(
            amount=parse_amount(amount) if amount is not None else None,
            category_id=resolve_category(CategoryService(db), user_id, category) if category is not None else None,
            description=description,
            verified=verified,
        )
        expense = LedgerService(db).update_expense(expense_id, user_id, patch)
        click.echo(f"Updated expense {expense.id}: ${expense.amount:,.2f} on {expense.date}")
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)


@expense_group.command("delete")
@click.argument("expense_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_expense(ctx, expense_id: int, yes: bool):
    """Delete an expense and return its amount to the account."""
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = LedgerService(db)

    try:
        expense = service.get_expense(expense_id, user_id)
        if not yes and not click.confirm(
            f"Are you sure you want to delete expense {expense.id} (${expense.amount:,.2f} on {expense.date})?"
        ):
            click.echo("Deletion cancelled.")
            return
        service.delete_expense(expense_id, user_id)
        click.echo(f"Deleted expense {expense_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
