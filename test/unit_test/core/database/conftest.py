"""Test configuration for repository unit tests."""

from __future__ import annotations

import pytest

from sassify.core.database.repositories import SqlRepoBundle, build_sql_repos


@pytest.fixture
def repos(session) -> SqlRepoBundle:
    """Every repository bound to the test session."""
    return build_sql_repos(session)
