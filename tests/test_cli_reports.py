"""Tests for budget, import and reporting commands."""

import json
from datetime import date
from decimal import Decimal

import pytest

from finrecon.cli.main import cli


def _invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


@pytest.fixture
def food_month(transaction_service, budget_service):
    """January 2024 with a Food budget, two Food expenses and a salary."""
    budget_service.create_budget(category="Food", type="expense", amount=Decimal("1000"))
    budget_service.create_budget(category="Salary", type="income", amount=Decimal("5000"))
    transaction_service.create_transaction(
        type="debit", amount=Decimal("500"), category="Food", date=date(2024, 1, 5)
    )
    transaction_service.create_transaction(
        type="debit", amount=Decimal("300"), category="Food", date=date(2024, 1, 12)
    )
    transaction_service.create_transaction(
        type="credit", amount=Decimal("4500"), category="Salary", date=date(2024, 1, 31)
    )


JANUARY = ("--start-date", "2024-01-01", "--end-date", "2024-01-31")


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("add", "list", "delete", "budget", "import", "compare", "report", "trend"):
        assert command in result.output


def test_budget_add_list_delete(cli_runner, temp_db):
    added = _invoke(
        cli_runner, temp_db, "budget", "add", "--category", "Food", "--amount", "1,000",
        "--period", "monthly",
    )
    listed = _invoke(cli_runner, temp_db, "budget", "list")
    deleted = _invoke(cli_runner, temp_db, "budget", "delete", "1")
    empty = _invoke(cli_runner, temp_db, "budget", "list")

    assert added.exit_code == 0, added.output
    assert "Created expense budget 1" in added.output
    assert "Period: Monthly" in added.output
    assert "1,000.00" in listed.output
    assert "Monthly" in listed.output
    assert deleted.exit_code == 0
    assert "No budgets found." in empty.output


def test_budget_add_rejects_negative_amount(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "budget", "add", "--category", "Food", "--amount", "-1")

    assert result.exit_code == 1
    assert "Error: Amount must not be negative" in result.output


def test_budget_delete_missing(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "budget", "delete", "42")

    assert result.exit_code == 1
    assert "Budget 42 not found" in result.output


def test_compare_command(cli_runner, temp_db, food_month):
    result = _invoke(cli_runner, temp_db, "compare", *JANUARY)

    assert result.exit_code == 0, result.output
    assert "Expense Budgets:" in result.output
    assert "Income Goals:" in result.output
    food_line = next(line for line in result.output.splitlines() if line.startswith("Food"))
    assert "1,000.00" in food_line
    assert "800.00" in food_line
    assert "200.00" in food_line
    assert "Within budget" in food_line
    salary_line = next(line for line in result.output.splitlines() if line.startswith("Salary"))
    assert "-500.00" in salary_line
    assert "Goal shortfall" in salary_line


def test_compare_reports_no_data_per_type(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "compare", "--type", "income", *JANUARY)

    assert result.exit_code == 0
    assert "No income budgets or matching transactions" in result.output


def test_compare_rejects_inverted_range(cli_runner, temp_db):
    result = _invoke(
        cli_runner, temp_db, "compare", "--start-date", "2024-02-01", "--end-date", "2024-01-01"
    )

    assert result.exit_code == 1
    assert "precedes start date" in result.output


def test_report_command(cli_runner, temp_db, food_month):
    result = _invoke(cli_runner, temp_db, "report", "--type", "expense", "--bucket", "week", *JANUARY)

    assert result.exit_code == 0, result.output
    assert "Category Breakdown:" in result.output
    assert "100.00%" in result.output
    assert "Trend by week:" in result.output
    assert "2024-01-01" in result.output
    assert "2024-01-08" in result.output
    assert "Grand total" in result.output
    assert "Top category" in result.output


def test_report_command_both_types_splits_breakdown_and_trend(cli_runner, temp_db, food_month):
    result = _invoke(cli_runner, temp_db, "report", "--bucket", "month", *JANUARY)

    assert result.exit_code == 0, result.output
    assert "Expense Breakdown:" in result.output
    assert "Income Breakdown:" in result.output
    assert "Category Breakdown:" not in result.output
    assert result.output.count("100.00%") == 2
    assert "Expense trend by month:" in result.output
    assert "Income trend by month:" in result.output

def test_report_command_no_data(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "report", *JANUARY)

    assert result.exit_code == 0
    assert "No budgets or matching transactions for the requested window" in result.output


def test_report_rejects_conflicting_periods(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "report", "--this-month", "--last-quarter")

    assert result.exit_code == 1
    assert "Only one period option" in result.output


def test_trend_command(cli_runner, temp_db, food_month):
    result = _invoke(cli_runner, temp_db, "trend", "--bucket", "month", *JANUARY)

    assert result.exit_code == 0, result.output
    assert "Trend by month:" in result.output
    line = next(line for line in result.output.splitlines() if line.startswith("2024-01-01"))
    assert "800.00" in line


def test_import_command(cli_runner, temp_db, tmp_path, transaction_service, budget_service):
    payload = {
        "transactions": [
            {
                "_id": "65a1",
                "type": "debit",
                "amount": 300,
                "date": "2024-01-05",
                "source": "billscan",
                "subCategories": [
                    {"category": "Food", "categoryTotal": 200},
                    {"category": "Transport", "categoryTotal": 100},
                ],
            },
            {"type": "debit", "amount": "oops", "date": "2024-01-06"},
        ],
        "budgets": [{"category": "Food", "type": "expense", "amount": 250}],
    }
    json_file = tmp_path / "export.json"
    json_file.write_text(json.dumps(payload))

    result = _invoke(cli_runner, temp_db, "import", str(json_file))

    assert result.exit_code == 0, result.output
    assert "Imported: 1 transactions" in result.output
    assert "Imported: 1 budgets" in result.output
    assert "Transaction 2:" in result.output
    (txn,) = transaction_service.list_transactions().items
    assert len(txn.sub_categories) == 2
    assert [b.amount for b in budget_service.list_budgets()] == [Decimal("250")]


def test_import_command_rejects_invalid_json(cli_runner, temp_db, tmp_path):
    json_file = tmp_path / "broken.json"
    json_file.write_text("{not json")

    result = _invoke(cli_runner, temp_db, "import", str(json_file))

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_invalid_log_level(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--log-level", "chatty", "list"]
    )

    assert result.exit_code == 1
    assert "Unknown log level" in result.output
