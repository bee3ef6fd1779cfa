"""Store layer for finrecon application."""

from finrecon.database.base import Database, TransactionPage, TransactionQuery
from finrecon.database.factories import create_sqlite_database

__all__ = ["Database", "TransactionPage", "TransactionQuery", "create_sqlite_database"]
