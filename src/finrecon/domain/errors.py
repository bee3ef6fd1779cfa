"""Shared domain error messages and error types."""

from datetime import date
from typing import Iterable


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


def end_before_start(start_date: date, end_date: date) -> str:
    """Return message for an inverted date range."""
    return f"End date {end_date.isoformat()} precedes start date {start_date.isoformat()}"


def invalid_date_bound(field: str, value: object) -> str:
    """Return message for a date bound that is not a calendar date."""
    return f"{field} must be a date, got {value!r}"


def invalid_category(value: object) -> str:
    """Return message for a category filter that is not a label."""
    return f"Category must be a string or None, got {value!r}"


def invalid_page(page: object) -> str:
    """Return message for a page number that is not an integer."""
    return f"Page must be an integer, got {page!r}"


def non_positive_page_size(page_size: int) -> str:
    """Return message for an invalid page size."""
    return f"Page size must be a positive integer, got {page_size}"


def negative_total_count(total_count: int) -> str:
    """Return message for an invalid item count."""
    return f"Total count must not be negative, got {total_count}"


def invalid_choice(field: str, value: object, choices: Iterable[str]) -> str:
    """Return message for a value outside an enumerated set."""
    return f"Invalid {field} '{value}'. Must be one of: {', '.join(choices)}"


def non_positive_amount(amount: object) -> str:
    """Return message for an amount that must be strictly positive."""
    return f"Amount must be a positive number, got {amount}"


def negative_amount(amount: object) -> str:
    """Return message for an amount that must not be negative."""
    return f"Amount must not be negative, got {amount}"


def empty_category() -> str:
    """Return message for a missing category."""
    return "Category must be a non-empty string"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def budget_not_found(budget_id: int) -> str:
    """Return message for missing budget."""
    return f"Budget {budget_id} not found"
