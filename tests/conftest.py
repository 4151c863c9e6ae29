"""Shared pytest fixtures for DRE engine tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from dre_engine.database.factories import create_sqlite_database
from dre_engine.domain.chart import ChartService
from dre_engine.domain.entities import CalculationContext, EntryKind
from dre_engine.domain.report import DreReportService
from dre_engine.domain.resolver import AccountResolver


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def resolver(temp_db):
    """Create an AccountResolver with a fresh cache."""
    return AccountResolver(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a DreReportService with a temporary database."""
    return DreReportService(temp_db)


@pytest.fixture
def chart_service(temp_db):
    """Create a ChartService with a temporary database."""
    return ChartService(temp_db)


@pytest.fixture
def company_id(temp_db):
    """Create a sample company and return its ID."""
    return temp_db.create_company(name="Acme Ltda")


@pytest.fixture
def context(company_id):
    """Calculation context for March 2024."""
    return CalculationContext(company_id=company_id, month=3, year=2024)


@pytest.fixture
def add_entry(temp_db, company_id):
    """Return a helper that records a ledger entry for the sample company."""

    def _add_entry(
        amount,
        kind=EntryKind.INFLOW,
        category_id=None,
        indicator_id=None,
        month=3,
        year=2024,
        company=None,
    ):
        return temp_db.create_ledger_entry(
            company_id=company if company is not None else company_id,
            month=month,
            year=year,
            kind=kind,
            amount=Decimal(amount),
            category_id=category_id,
            indicator_id=indicator_id,
        )

    return _add_entry


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

