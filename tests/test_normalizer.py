"""Tests for transaction normalization."""

import logging
from datetime import date
from decimal import Decimal

from builders import make_split, make_transaction
from finrecon.domain.entities import (
    TransactionSource,
    TransactionStatus,
    TransactionType,
    WarningKind,
)
from finrecon.domain.normalizer import normalize_transactions


def _pairs(result):
    return [(entry.category, entry.amount) for entry in result.entries]


def test_simple_transaction_yields_one_entry():
    txn = make_transaction(id=7, amount="42.50", category="Food", on=date(2024, 1, 3))

    result = normalize_transactions([txn])

    assert len(result.entries) == 1
    entry = result.entries[0]
    assert entry.category == "Food"
    assert entry.category_key == "food"
    assert entry.amount == Decimal("42.50")
    assert entry.date == date(2024, 1, 3)
    assert entry.type == TransactionType.DEBIT
    assert entry.source == TransactionSource.MANUAL
    assert entry.transaction_id == 7
    assert result.warnings == ()


def test_well_formed_subcategories_are_split():
    txn = make_transaction(
        amount="100",
        category="Shopping",
        source=TransactionSource.SCAN,
        sub_categories=(make_split("Food", "60"), make_split("Household", "40")),
    )

    result = normalize_transactions([txn])

    assert _pairs(result) == [("Food", Decimal("60")), ("Household", Decimal("40"))]
    assert all(entry.source == TransactionSource.SCAN for entry in result.entries)
    assert result.warnings == ()


def test_subcategory_mismatch_keeps_slices_and_warns():
    txn = make_transaction(
        id=3,
        amount="100",
        sub_categories=(make_split("Food", "60"), make_split("Household", "30")),
    )

    result = normalize_transactions([txn])

    assert _pairs(result) == [("Food", Decimal("60")), ("Household", Decimal("30"))]
    assert [w.kind for w in result.warnings] == [WarningKind.SUBCATEGORY_MISMATCH]
    assert result.warnings[0].transaction_id == 3


def test_subcategory_rounding_within_tolerance_is_accepted():
    txn = make_transaction(
        amount="100.00",
        sub_categories=(make_split("Food", "33.33"), make_split("Household", "66.66")),
    )

    result = normalize_transactions([txn])

    assert result.warnings == ()


def test_malformed_subcategories_fall_back_to_parent_category():
    txn = make_transaction(
        id=9,
        amount="80",
        category="Groceries",
        sub_categories=(make_split("Food", "50"), make_split(None, "30")),
    )

    result = normalize_transactions([txn])

    assert _pairs(result) == [("Groceries", Decimal("80"))]
    assert [w.kind for w in result.warnings] == [WarningKind.MALFORMED_SUBCATEGORIES]


def test_missing_category_becomes_uncategorized_without_warning():
    result = normalize_transactions(
        [make_transaction(id=1, category=None), make_transaction(id=2, category="   ")]
    )

    assert [entry.category for entry in result.entries] == ["Uncategorized", "Uncategorized"]
    assert result.warnings == ()


def test_non_string_category_warns():
    result = normalize_transactions([make_transaction(category=42)])

    assert result.entries[0].category == "Uncategorized"
    assert [w.kind for w in result.warnings] == [WarningKind.UNPARSEABLE_CATEGORY]


def test_negative_amount_contributes_zero_and_warns():
    result = normalize_transactions([make_transaction(amount="-25")])

    assert result.entries[0].amount == Decimal("0")
    assert [w.kind for w in result.warnings] == [WarningKind.NEGATIVE_AMOUNT]


def test_missing_amount_contributes_zero_and_warns():
    result = normalize_transactions([make_transaction(amount=None)])

    assert result.entries[0].amount == Decimal("0")
    assert [w.kind for w in result.warnings] == [WarningKind.INVALID_AMOUNT]


def test_non_completed_transactions_are_skipped():
    result = normalize_transactions(
        [
            make_transaction(id=1, status=TransactionStatus.PENDING),
            make_transaction(id=2, status=TransactionStatus.FAILED),
            make_transaction(id=3),
        ]
    )

    assert [entry.transaction_id for entry in result.entries] == [3]


def test_entry_amounts_conserve_transaction_totals():
    transactions = [
        make_transaction(id=1, amount="10"),
        make_transaction(
            id=2,
            amount="90",
            sub_categories=(make_split("A", "45"), make_split("B", "45")),
        ),
        make_transaction(id=3, amount="5", category=None),
    ]

    result = normalize_transactions(transactions)

    assert sum(entry.amount for entry in result.entries) == Decimal("105")


def test_input_is_not_mutated_and_results_are_repeatable():
    transactions = [
        make_transaction(id=1, sub_categories=(make_split("Food", "100"),)),
        make_transaction(id=2, amount="-1"),
    ]
    snapshot = list(transactions)

    first = normalize_transactions(transactions)
    second = normalize_transactions(transactions)

    assert transactions == snapshot
    assert first == second


def test_warnings_are_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="finrecon"):
        normalize_transactions([make_transaction(id=5, amount="-3")])

    assert "Transaction 5 has negative amount" in caplog.text
