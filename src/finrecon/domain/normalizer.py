"""Transaction normalization into atomic category contributions."""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Sequence

from finrecon.domain.categories import UNCATEGORIZED, category_key, clean_label
from finrecon.domain.entities import (
    AtomicEntry,
    DataIntegrityWarning,
    SubCategory,
    Transaction,
    TransactionStatus,
    WarningKind,
)

logger = logging.getLogger(__name__)

# Largest sub-category/parent discrepancy accepted as rounding noise.
SUBCATEGORY_TOLERANCE = Decimal("0.01")

ZERO = Decimal("0")


@dataclass(frozen=True)
class NormalizationResult:
    """Atomic entries plus the integrity warnings raised producing them."""

    entries: tuple[AtomicEntry, ...]
    warnings: tuple[DataIntegrityWarning, ...]


def _as_decimal(value: object) -> Optional[Decimal]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            return None
        return amount if amount.is_finite() else None
    return None


def _is_well_formed(sub_categories: Sequence[SubCategory]) -> bool:
    return all(
        clean_label(sub.category) is not None and _as_decimal(sub.amount) is not None
        for sub in sub_categories
    )


class TransactionNormalizer:
    """Flatten transactions into AtomicEntry contributions.

    One instance collects entries and warnings for a single call; use
    normalize_transactions() unless entries are fed incrementally.
    """

    def __init__(self):
        self._entries: list[AtomicEntry] = []
        self._warnings: list[DataIntegrityWarning] = []

    def add(self, txn: Transaction) -> None:
        """Normalize one transaction, appending its entries and warnings."""
        if txn.status != TransactionStatus.COMPLETED:
            logger.debug("Skipping %s transaction %s", txn.status.value, txn.id)
            return

        sub_categories = txn.sub_categories or ()
        if sub_categories:
            if _is_well_formed(sub_categories):
                self._add_split(txn, sub_categories)
                return
            self._warn(
                WarningKind.MALFORMED_SUBCATEGORIES,
                txn.id,
                f"Transaction {txn.id} has malformed sub-categories; "
                "using its top-level category instead",
            )

        label = clean_label(txn.category)
        if label is None:
            if txn.category is not None and not isinstance(txn.category, str):
                self._warn(
                    WarningKind.UNPARSEABLE_CATEGORY,
                    txn.id,
                    f"Transaction {txn.id} has unparseable category {txn.category!r}",
                )
            label = UNCATEGORIZED

        amount = self._clamp(txn, _as_decimal(txn.amount), label)
        self._emit(txn, label, amount)

    def result(self) -> NormalizationResult:
        """Return everything collected so far."""
        return NormalizationResult(entries=tuple(self._entries), warnings=tuple(self._warnings))

    def _add_split(self, txn: Transaction, sub_categories: Sequence[SubCategory]) -> None:
        declared_total = ZERO
        for sub in sub_categories:
            label = clean_label(sub.category)
            raw_amount = _as_decimal(sub.amount)
            declared_total += raw_amount
            self._emit(txn, label, self._clamp(txn, raw_amount, label))

        parent_amount = _as_decimal(txn.amount)
        if parent_amount is None or abs(declared_total - parent_amount) > SUBCATEGORY_TOLERANCE:
            self._warn(
                WarningKind.SUBCATEGORY_MISMATCH,
                txn.id,
                f"Transaction {txn.id} sub-categories sum to {declared_total} "
                f"but the transaction amount is {txn.amount}",
            )

    def _clamp(self, txn: Transaction, amount: Optional[Decimal], label: str) -> Decimal:
        if amount is None:
            self._warn(
                WarningKind.INVALID_AMOUNT,
                txn.id,
                f"Transaction {txn.id} has no usable amount for '{label}'; counted as 0",
            )
            return ZERO
        if amount < 0:
            self._warn(
                WarningKind.NEGATIVE_AMOUNT,
                txn.id,
                f"Transaction {txn.id} has negative amount {amount} for '{label}'; counted as 0",
            )
            return ZERO
        return amount

    def _emit(self, txn: Transaction, label: str, amount: Decimal) -> None:
        self._entries.append(
            AtomicEntry(
                category=label,
                category_key=category_key(label),
                amount=amount,
                date=txn.date,
                type=txn.type,
                source=txn.source,
                transaction_id=txn.id,
            )
        )

    def _warn(self, kind: WarningKind, transaction_id: Optional[int], message: str) -> None:
        logger.warning(message)
        self._warnings.append(
            DataIntegrityWarning(kind=kind, transaction_id=transaction_id, message=message)
        )


def normalize_transactions(transactions: Iterable[Transaction]) -> NormalizationResult:
    """Flatten transactions into atomic entries.

    Scan-derived transactions with well-formed sub-categories yield one entry
    per sub-category; everything else yields a single entry under its
    top-level category (or "Uncategorized"). Problems are reported as
    DataIntegrityWarning objects and never abort normalization.

    Args:
        transactions: Transaction entities, in any order

    Returns:
        NormalizationResult with entries in input order
    """
    normalizer = TransactionNormalizer()
    for txn in transactions:
        normalizer.add(txn)
    return normalizer.result()
