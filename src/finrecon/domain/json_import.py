"""JSON import domain service."""

import json
import logging
from pathlib import Path
from typing import Any

from finrecon.database.base import Database
from finrecon.domain.errors import DomainError
from finrecon.domain.records import budget_from_record, transaction_from_record
from finrecon.domain.transaction import TransactionService

logger = logging.getLogger(__name__)


class JSONImportService:
    """Service for importing transactions and budgets from JSON exports."""

    def __init__(self, db: Database):
        """Initialize JSON import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transaction_service = TransactionService(db)

    def import_json(self, json_file_path: str) -> dict[str, Any]:
        """Import records from a JSON file.

        The file holds either a list of transaction records or an object with
        "transactions" and/or "budgets" lists.

        Args:
            json_file_path: Path to JSON file

        Returns:
            Dict with import statistics:
            - transactions: number of transactions imported
            - budgets: number of budgets imported
            - errors: list of error messages for rejected records

        Raises:
            ValueError: If the file is not valid JSON or has the wrong shape
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(json_file_path)
        if not path.exists():
            raise FileNotFoundError(f"JSON file not found: {json_file_path}")

        with open(path, "r", encoding="utf-8-sig") as f:
            try:
                payload = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {json_file_path}: {e}")

        if isinstance(payload, list):
            payload = {"transactions": payload}
        if not isinstance(payload, dict):
            raise ValueError("JSON file must contain a list or an object")

        transaction_records = payload.get("transactions") or []
        budget_records = payload.get("budgets") or []
        if not isinstance(transaction_records, list) or not isinstance(budget_records, list):
            raise ValueError("'transactions' and 'budgets' must be lists")

        imported_transactions = 0
        imported_budgets = 0
        errors = []

        for index, record in enumerate(transaction_records, start=1):
            if not isinstance(record, dict):
                errors.append(f"Transaction {index}: Record is not an object")
                continue
            try:
                txn = transaction_from_record(record, default_id=index)
            except DomainError as e:
                errors.append(f"Transaction {index}: {e}")
                continue
            self.transaction_service.import_transaction(txn)
            imported_transactions += 1

        for index, record in enumerate(budget_records, start=1):
            if not isinstance(record, dict):
                errors.append(f"Budget {index}: Record is not an object")
                continue
            try:
                budget = budget_from_record(record, default_id=index)
            except DomainError as e:
                errors.append(f"Budget {index}: {e}")
                continue
            self.db.create_budget(
                category=budget.category,
                type=budget.type,
                amount=budget.amount,
                period=budget.period,
                created_at=budget.created_at,
            )
            imported_budgets += 1

        logger.info(
            "Imported %d transactions and %d budgets from %s (%d rejected)",
            imported_transactions,
            imported_budgets,
            json_file_path,
            len(errors),
        )
        return {
            "transactions": imported_transactions,
            "budgets": imported_budgets,
            "errors": errors,
        }
