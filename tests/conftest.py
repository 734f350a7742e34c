"""
Shared pytest fixtures and configuration for pagerflow tests.

This module provides in-memory data sources and a paginator factory that
closes every paginator it created at teardown.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
import pytest_asyncio

from pagerflow import ActivityGate, Paginator, PaginatorOptions
from tests.helpers.sources import ListDataSource


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with in-memory data sources")
    config.addinivalue_line("markers", "integration: End-to-end tests with real timing")


@pytest.fixture
def sample_items() -> list[str]:
    """45 items: two full pages of 20 and a last page of 5."""
    return [f"item-{i}" for i in range(45)]


@pytest.fixture
def source(sample_items: list[str]) -> ListDataSource:
    return ListDataSource(sample_items)


@pytest.fixture
def large_source() -> ListDataSource:
    """300 items, enough to fill every page up to the default maximum."""
    return ListDataSource([f"row-{i}" for i in range(300)])


@pytest_asyncio.fixture
async def make_paginator() -> AsyncGenerator[Callable[..., Paginator[Any]], None]:
    """
    Factory creating paginators on the test's event loop.

    Every paginator is closed after the test so no task outlives it.
    """
    created: list[Paginator[Any]] = []

    def _make(
        data_source: Any,
        options: PaginatorOptions | None = None,
        gate: ActivityGate | None = None,
    ) -> Paginator[Any]:
        paginator: Paginator[Any] = Paginator(data_source, options=options, gate=gate)
        created.append(paginator)
        return paginator

    yield _make

    for paginator in created:
        await paginator.aclose()
