"""Pytest configuration and fixtures."""

import shutil
import sqlite3
import tempfile

import pytest

from activity_ledger.ledger import ActivityLedger


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    temp_path = tempfile.mkdtemp()
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def clock():
    """Mutable wall clock; set clock[0] to move time."""
    return [1000]


@pytest.fixture
def ledger(clock):
    """In-memory ledger driven by the ``clock`` fixture."""
    ledger = ActivityLedger(sqlite3.connect(":memory:"), clock=lambda: clock[0])
    ledger.initialize()
    yield ledger
    ledger.close()


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "unit: mark test as unit test")
