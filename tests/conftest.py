"""Pytest configuration and shared fixtures."""

import pytest

from paper_catalog.catalog.query_state import QueryState
from tests.helpers.catalog import PAGE_SIZE, ScriptedListClient

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


@pytest.fixture
def initial_state() -> QueryState:
    return QueryState.initial(PAGE_SIZE)


@pytest.fixture
def scripted_client() -> ScriptedListClient:
    return ScriptedListClient()
