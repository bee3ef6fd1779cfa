"""Shared pytest fixtures for finrecon tests."""

import logging
import os
import tempfile

import pytest

from finrecon.database.factories import create_sqlite_database
from finrecon.domain.budget import BudgetService
from finrecon.domain.reporting import ReportService
from finrecon.domain.transaction import TransactionService
from finrecon.logging_setup import PACKAGE_LOGGER_NAME


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture(autouse=True)
def reset_package_logging():
    """Drop handlers the CLI attaches so later tests don't log to closed streams."""
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
    logger.setLevel(level)
