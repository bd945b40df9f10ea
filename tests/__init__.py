#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Run only tests that do not touch a database
    python -m pytest tests/ -v -m "not db"

Database tests use an in-memory SQLite database and need no external service.
Redis is always mocked.

Shared builders live in tests/fixtures, collaborator doubles in tests/mocks.
"""
