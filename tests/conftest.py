"""Pytest configuration and fixtures."""

import os

import pytest

from tests.fixtures_events import empty_snapshot, ready_snapshot


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["SUPABASE_URL"] = "https://test.supabase.co"
    os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-key"
    os.environ["EVENT_OPS_ENV"] = "test"


@pytest.fixture
def snapshot():
    """Event snapshot on which every go/no-go check passes."""
    return ready_snapshot()


@pytest.fixture
def bare_snapshot():
    """Event snapshot with no participants, vendors, tasks, visits or budget lines."""
    return empty_snapshot()
