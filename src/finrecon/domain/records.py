"""Parsing of raw transaction and budget records.

Records use the dashboard's JSON field names (``accountRef``,
``subCategories``, ``createdAt``); snake_case spellings are accepted too.
Required fields are validated strictly, while sub-category slices are kept
as received so the normalizer can flag malformed ones instead of losing them.
"""

from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Any, Mapping, Optional

from finrecon.domain import errors
from finrecon.domain.categories import clean_label
from finrecon.domain.entities import (
    Budget,
    BudgetType,
    SubCategory,
    Transaction,
    TransactionSource,
    TransactionStatus,
    TransactionType,
)
from finrecon.domain.periods import parse_budget_period
from finrecon.utils.amount_parser import parse_amount
from finrecon.utils.date_parser import parse_date

# Bill-scan uploads are tagged "billscan" in exported records.
SOURCE_ALIASES = {"billscan": TransactionSource.SCAN}


def _field(record: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    for name in names:
        if name in record:
            return record[name]
    return default


def _enum(enum_cls, value: Any, field: str, aliases: Optional[dict] = None):
    text = str(value).strip().lower()
    if aliases and text in aliases:
        return aliases[text]
    try:
        return enum_cls(text)
    except ValueError:
        raise errors.ValidationError(
            errors.invalid_choice(field, value, [member.value for member in enum_cls])
        )


def _amount(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise errors.ValidationError(f"Could not parse amount '{value}'")
    if isinstance(value, (int, float, Decimal)):
        return Decimal(str(value))
    try:
        return parse_amount(str(value) if value is not None else "")
    except ValueError as e:
        raise errors.ValidationError(str(e))


def _date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            pass
    try:
        return parse_date(str(value) if value is not None else "")
    except ValueError as e:
        raise errors.ValidationError(str(e))


def _record_id(value: Any, default_id: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default_id


def _sub_amount(value: Any) -> Optional[Decimal]:
    try:
        return _amount(value)
    except errors.ValidationError:
        return None


def _sub_categories(value: Any) -> Optional[tuple[SubCategory, ...]]:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        # Kept as a single unusable slice so the normalizer reports it.
        return (SubCategory(category=None, amount=None),)
    slices = []
    for item in value:
        if not isinstance(item, Mapping):
            slices.append(SubCategory(category=None, amount=None))
            continue
        category = _field(item, "category")
        slices.append(
            SubCategory(
                category=category if isinstance(category, str) else None,
                amount=_sub_amount(_field(item, "amount", "categoryTotal", "category_total")),
            )
        )
    return tuple(slices)


def transaction_from_record(record: Mapping[str, Any], default_id: int = 0) -> Transaction:
    """Build a Transaction from a raw record.

    Args:
        record: Mapping with type, amount and date, and optionally id,
            accountRef, category, description, source, status, subCategories
        default_id: Id used when the record has none

    Raises:
        ValidationError: If a required field is missing or malformed
    """
    for required in ("type", "amount", "date"):
        if _field(record, required) is None:
            raise errors.ValidationError(f"Transaction record is missing '{required}'")

    category = _field(record, "category")
    description = _field(record, "description")
    return Transaction(
        id=_record_id(_field(record, "id"), default_id),
        account_ref=str(_field(record, "accountRef", "account_ref", "account", default="")),
        type=_enum(TransactionType, record["type"], "transaction type"),
        amount=_amount(record["amount"]),
        category=clean_label(category) if isinstance(category, str) else category,
        date=_date(record["date"]),
        description=description if description else None,
        source=_enum(
            TransactionSource,
            _field(record, "source", default="import"),
            "source",
            aliases=SOURCE_ALIASES,
        ),
        sub_categories=_sub_categories(_field(record, "subCategories", "sub_categories", "categories")),
        status=_enum(
            TransactionStatus, _field(record, "status", default="completed"), "status"
        ),
    )


def budget_from_record(record: Mapping[str, Any], default_id: int = 0) -> Budget:
    """Build a Budget from a raw record.

    Raises:
        ValidationError: If a required field is missing or malformed
    """
    category = clean_label(_field(record, "category"))
    if category is None:
        raise errors.ValidationError(errors.empty_category())
    if _field(record, "amount") is None:
        raise errors.ValidationError("Budget record is missing 'amount'")
    amount = _amount(record["amount"])
    if amount < 0:
        raise errors.ValidationError(errors.negative_amount(amount))

    created_at = _field(record, "createdAt", "created_at")
    if created_at is None:
        created = datetime.now(UTC)
    elif isinstance(created_at, datetime):
        created = created_at
    else:
        created = datetime.combine(_date(created_at), datetime.min.time())

    return Budget(
        id=_record_id(_field(record, "id"), default_id),
        category=category,
        type=_enum(BudgetType, _field(record, "type", default="expense"), "budget type"),
        amount=amount,
        created_at=created,
        period=parse_budget_period(_field(record, "period")),
    )
