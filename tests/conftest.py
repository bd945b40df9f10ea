"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For builders of centers and profiles, see tests/fixtures/center_fixtures.py
"""

import os

# Must be set before anything imports database.database
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime

import pytest

from core.scoring.models import Coordinate


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def seoul_city_hall():
    return Coordinate(latitude=37.5665, longitude=126.9780)


@pytest.fixture
def monday_morning():
    """Monday 2026-03-02 10:00, local operating time."""
    return datetime(2026, 3, 2, 10, 0)
