"""Daybook Test Suite

This package contains all tests for the Daybook schedule and habit services.

Test organization:
- unit/: Unit tests for individual modules
  - schedule/: Schedule engine tests (models, store, optimizer, advisor)
  - habits/: Habit engine tests (streaks, clustering, analytics, ledger)
  - providers/: Collaborator tests (HTTP clients, cache, call wrappers)
  - storage/: SQLite store tests
- fakes.py: In-memory collaborators shared by the tests

Running tests:
    # All tests
    pytest

    # Specific module
    pytest tests/unit/schedule/

    # Excluding slow tests
    pytest -m "not slow"
"""
