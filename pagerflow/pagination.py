"""
Data source contract for pagerflow.

This module defines what a Paginator consumes: an object able to fetch one
page of items at a time, and the PageResult it builds from each answer.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class DataSource(Protocol[T_co]):
    """
    Fetches data in a paginated manner.

    Usage:
        class MovieSource:
            def __init__(self, repository: MovieRepository) -> None:
                self.repository = repository

            # Failures may be handled here too.
            async def fetch(self, page: int, page_size: int) -> list[Movie]:
                return await self.repository.list_movies(page=page, page_size=page_size)
    """

    async def fetch(self, page: int, page_size: int) -> Sequence[T_co]:
        """
        Fetches the items of one page.

        Args:
            page: Page index to fetch (0-indexed)
            page_size: Number of items to fetch per page

        Returns:
            The items of the page, empty when there is nothing left
        """
        ...


class CallableDataSource(Generic[T]):
    """Adapts a bare coroutine function to the DataSource protocol."""

    def __init__(self, fetch_fn: Callable[[int, int], Awaitable[Sequence[T]]]) -> None:
        self.fetch_fn = fetch_fn

    async def fetch(self, page: int, page_size: int) -> Sequence[T]:
        return await self.fetch_fn(page, page_size)


@dataclass
class PageResult(Generic[T]):
    """
    Represents a single page returned by a data source.

    Attributes:
        page: Page index that was fetched
        page_size: Page size that was requested
        items: Items of this page
    """

    page: int
    page_size: int
    items: list[T]

    @property
    def count(self) -> int:
        """Number of items in this page."""
        return len(self.items)

    @property
    def has_more(self) -> bool:
        """Returns True if the page was full, so a following page may hold items."""
        return self.count >= self.page_size
