"""Tests for the command-line interface."""

from decimal import Decimal

import click

from expense_tracker.cli.error_handling import handle_domain_error
from expense_tracker.cli.main import cli
from expense_tracker.domain.errors import StorageError
from expense_tracker.domain.pattern import PatternMatcher


def invoke(cli_runner, temp_db, *args, user=None):
    """Run a CLI command against the temporary database."""
    base = ["--db-path", temp_db.database_path]
    if user is not None:
        base += ["--user", str(user)]
    return cli_runner.invoke(cli, base + list(args))


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "account" in result.output
    assert "pattern" in result.output


def test_account_create_and_list(cli_runner, temp_db):
    result = invoke(cli_runner, temp_db, "account", "create", "Checking", "--balance", "1,000")

    assert result.exit_code == 0
    assert "Created account 'Checking'" in result.output
    assert "$1,000.00" in result.output

    result = invoke(cli_runner, temp_db, "account", "list")
    assert result.exit_code == 0
    assert "Checking" in result.output


def test_account_list_empty(cli_runner, temp_db):
    result = invoke(cli_runner, temp_db, "account", "list")

    assert result.exit_code == 0
    assert "No accounts found" in result.output


def test_account_create_negative_balance(cli_runner, temp_db):
    result = invoke(cli_runner, temp_db, "account", "create", "Checking", "--balance", "-5")

    assert result.exit_code == 1
    assert "must not be negative" in result.output


def test_expense_lifecycle_keeps_balance(cli_runner, temp_db):
    """Add, update and delete an expense and watch the account follow."""
    invoke(cli_runner, temp_db, "account", "create", "Checking", "--balance", "1000")

    result = invoke(
        cli_runner, temp_db,
        "expense", "add", "50", "--account", "Checking", "--category", "Food & Dining", "--date", "2024-03-01",
    )
    assert result.exit_code == 0
    assert "Added expense" in result.output
    expense_id = temp_db.list_expenses(user_id=1)[0].id

    result = invoke(cli_runner, temp_db, "expense", "update", str(expense_id), "--amount", "30")
    assert result.exit_code == 0

    result = invoke(cli_runner, temp_db, "account", "summary")
    assert result.exit_code == 0
    assert "Accounts: 1" in result.output
    account = temp_db.list_accounts(1)[0]
    assert account.current_balance == Decimal("970.00")
    assert account.total_spent == Decimal("30.00")

    result = invoke(cli_runner, temp_db, "expense", "delete", str(expense_id), "--yes")
    assert result.exit_code == 0
    assert temp_db.list_accounts(1)[0].current_balance == temp_db.list_accounts(1)[0].initial_balance


def test_expense_add_uses_matching_pattern(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "account", "create", "Checking", "--balance", "100")
    result = invoke(cli_runner, temp_db, "pattern", "create", "uber", "--category", "Transportation")
    assert result.exit_code == 0

    result = invoke(cli_runner, temp_db, "expense", "add", "12.40", "--account", "Checking", "--merchant", "UBER TRIP")

    assert result.exit_code == 0
    assert "Matched pattern 'uber' (contains)" in result.output
    expense = temp_db.list_expenses(user_id=1)[0]
    assert temp_db.get_category(expense.category_id).name == "Transportation"
    assert expense.merchant_name == "UBER TRIP"


def test_expense_add_without_category_or_match(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "account", "create", "Checking")

    result = invoke(cli_runner, temp_db, "expense", "add", "5", "--account", "Checking", "--merchant", "Nowhere")

    assert result.exit_code == 1
    assert "No pattern matches merchant 'Nowhere'" in result.output


def test_expense_add_rejects_zero(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "account", "create", "Checking")

    result = invoke(cli_runner, temp_db, "expense", "add", "0", "--account", "Checking", "--category", "Other")

    assert result.exit_code == 1
    assert "greater than zero" in result.output


def test_expense_list(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "account", "create", "Checking", "--balance", "100")
    invoke(cli_runner, temp_db, "expense", "add", "7.25", "--account", "Checking", "--category", "Other",
           "--date", "2024-02-10", "--description", "Coffee beans")

    result = invoke(cli_runner, temp_db, "expense", "list", "--month", "2024-02")

    assert result.exit_code == 0
    assert "Coffee beans" in result.output
    assert "Page total: $7.25" in result.output

    result = invoke(cli_runner, temp_db, "expense", "list", "--month", "2023-01")
    assert "No expenses found" in result.output


def test_expense_update_empty_patch(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "account", "create", "Checking", "--balance", "100")
    invoke(cli_runner, temp_db, "expense", "add", "5", "--account", "Checking", "--category", "Other")
    expense_id = temp_db.list_expenses(user_id=1)[0].id

    result = invoke(cli_runner, temp_db, "expense", "update", str(expense_id))

    assert result.exit_code == 1
    assert "No fields to update" in result.output


def test_other_user_cannot_touch_expense(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "account", "create", "Checking", "--balance", "100")
    invoke(cli_runner, temp_db, "expense", "add", "5", "--account", "Checking", "--category", "Other")
    expense_id = temp_db.list_expenses(user_id=1)[0].id

    result = invoke(cli_runner, temp_db, "expense", "delete", str(expense_id), "--yes", user=2)

    assert result.exit_code == 1
    assert f"Permission denied for expense {expense_id}" in result.output


def test_account_update_reconciles(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "account", "create", "Checking", "--balance", "1000")
    invoke(cli_runner, temp_db, "expense", "add", "30", "--account", "Checking", "--category", "Other")

    result = invoke(cli_runner, temp_db, "account", "update", "Checking", "--balance", "1500")

    assert result.exit_code == 0
    assert "Current balance: $1,470.00" in result.output


def test_account_delete_blocked_by_expenses(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "account", "create", "Checking", "--balance", "100")
    invoke(cli_runner, temp_db, "expense", "add", "5", "--account", "Checking", "--category", "Other")

    result = invoke(cli_runner, temp_db, "account", "delete", "Checking", "--yes")

    assert result.exit_code == 1
    assert "Cannot delete account" in result.output


def test_account_delete_cancelled(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "account", "create", "Checking")

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "delete", "Checking"], input="n\n"
    )

    assert result.exit_code == 0
    assert "Deletion cancelled" in result.output
    assert len(temp_db.list_accounts(1)) == 1


def test_category_commands(cli_runner, temp_db):
    result = invoke(cli_runner, temp_db, "category", "list")
    assert result.exit_code == 0
    assert "Food & Dining (default)" in result.output

    result = invoke(cli_runner, temp_db, "category", "create", "Pets", "--color", "#A1B2C3")
    assert result.exit_code == 0
    category_id = next(c.id for c in temp_db.list_categories(1) if c.name == "Pets")

    result = invoke(cli_runner, temp_db, "category", "update", str(category_id), "--name", "Pet Care")
    assert result.exit_code == 0
    assert "Pet Care" in result.output

    result = invoke(cli_runner, temp_db, "category", "delete", str(category_id))
    assert result.exit_code == 0


def test_default_category_is_read_only(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "category", "list")
    food_id = next(c.id for c in temp_db.list_categories(1) if c.name == "Food & Dining")

    result = invoke(cli_runner, temp_db, "category", "delete", str(food_id))

    assert result.exit_code == 1
    assert "Default categories cannot be modified" in result.output


def test_pattern_commands(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "pattern", "create", "uber", "--category", "Transportation")
    result = invoke(
        cli_runner, temp_db, "pattern", "create", "Uber Eats", "--category", "Food & Dining", "--match-type", "exact"
    )
    assert result.exit_code == 0

    result = invoke(cli_runner, temp_db, "pattern", "match", "UBER EATS")
    assert result.exit_code == 0
    assert "exact pattern 'Uber Eats'" in result.output
    assert "Food & Dining" in result.output

    result = invoke(cli_runner, temp_db, "pattern", "create", "uber", "--category", "Other")
    assert result.exit_code == 1
    assert "Pattern already exists" in result.output

    pattern_id = next(p.id for p in temp_db.list_patterns(1) if p.merchant_name == "Uber Eats")
    result = invoke(cli_runner, temp_db, "pattern", "update", str(pattern_id), "--inactive")
    assert result.exit_code == 0
    assert "inactive" in result.output

    result = invoke(cli_runner, temp_db, "pattern", "list", "--active")
    assert "uber" in result.output
    assert "Uber Eats" not in result.output

    result = invoke(cli_runner, temp_db, "pattern", "delete", str(pattern_id))
    assert result.exit_code == 0

    result = invoke(cli_runner, temp_db, "pattern", "match", "Lyft")
    assert "No pattern matches 'Lyft'" in result.output


def test_pattern_match_reports_storage_failure(cli_runner, temp_db, monkeypatch):
    def failing_match(self, user_id, merchant_name):
        raise StorageError("Database operation failed: disk I/O error")

    monkeypatch.setattr(PatternMatcher, "match", failing_match)

    result = invoke(cli_runner, temp_db, "pattern", "match", "Uber")

    assert result.exit_code == 1
    assert "Error: Database operation failed: disk I/O error" in result.output


def test_category_delete_blocked_by_pattern(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "category", "create", "Pets", "--color", "#A1B2C3")
    category_id = next(c.id for c in temp_db.list_categories(1) if c.name == "Pets")
    invoke(cli_runner, temp_db, "pattern", "create", "petco", "--category", "Pets")

    result = invoke(cli_runner, temp_db, "category", "delete", str(category_id))

    assert result.exit_code == 1
    assert "1 merchant pattern" in result.output


def test_handle_domain_error_exits_with_message(cli_runner):
    @click.command()
    @click.pass_context
    def failing(ctx):
        handle_domain_error(ctx, StorageError("disk full"))

    result = cli_runner.invoke(failing)

    assert result.exit_code == 1
    assert "Error: disk full" in result.output
