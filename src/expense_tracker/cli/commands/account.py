"""Account management commands."""

import click
from expense_tracker.cli.account_resolution import resolve_account_or_exit
from expense_tracker.cli.error_handling import handle_domain_error
from expense_tracker.domain.account import AccountService
from expense_tracker.domain.errors import DomainError
from expense_tracker.utils.amount_parser import parse_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--balance", default="0", help="Initial balance (default: 0)")
@click.pass_context
def create_account(ctx, name: str, balance: str):
    """Create a new account.

    Examples:
        expense-tracker account create "Checking" --balance 1000
        expense-tracker account create "Cash"
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        initial_balance = parse_amount(balance)
        account = service.create_account(ctx.obj["user_id"], name=name, initial_balance=initial_balance)
        click.echo(f"Created account '{account.name}' (ID: {account.id}) with balance ${account.current_balance:,.2f}")
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts(ctx.obj["user_id"])
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | Initial: ${acc.initial_balance:>10,.2f} | "
            f"Current: ${acc.current_balance:>10,.2f} | Spent: ${acc.total_spent:>10,.2f}"
        )


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--balance", help="New initial balance")
@click.pass_context
def update_account(ctx, account: str, name: str | None, balance: str | None) -> None:
    """Rename an account and/or change its initial balance.

    ACCOUNT can be an account name or ID. Changing the initial balance moves
    the current balance by the same amount.

    Examples:
        expense-tracker account update "Checking" --name "Main Checking"
        expense-tracker account update 1 --balance 1500
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = AccountService(db)

    if name is None and balance is None:
        click.echo("Error: Nothing to update. Use --name and/or --balance.", err=True)
        ctx.exit(1)

    account_id = resolve_account_or_exit(ctx, service, user_id, account)

    try:
        current = service.get_account(account_id, user_id)
        initial_balance = parse_amount(balance) if balance is not None else current.initial_balance
        updated = service.update_account(
            account_id,
            user_id,
            name=name if name is not None else current.name,
            initial_balance=initial_balance,
        )
        click.echo(f"Updated account '{updated.name}' (ID: {updated.id})")
        click.echo(f"  Initial balance: ${updated.initial_balance:,.2f}")
        click.echo(f"  Current balance: ${updated.current_balance:,.2f}")
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if it has no expenses. Use
    'expense delete' to remove them first.

    Examples:
        expense-tracker account delete "Checking"
        expense-tracker account delete 1 --yes
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, user_id, account)
    try:
        account_obj = service.get_account(account_id, user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    # Confirm deletion
    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id, user_id)
        click.echo(f"Deleted account '{account_obj.name}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("summary")
@click.pass_context
def account_summary(ctx):
    """Show totals across all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    summary = service.get_summary(ctx.obj["user_id"])
    click.echo(f"\nAccounts: {summary.account_count}")
    click.echo("-" * 40)
    click.echo(f"Total initial balance: ${summary.total_initial_balance:>12,.2f}")
    click.echo(f"Total current balance: ${summary.total_current_balance:>12,.2f}")
    click.echo(f"Total spent:           ${summary.total_spent:>12,.2f}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
