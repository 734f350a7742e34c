from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from ._logging import describe_error


class PaginatorError(Exception):
    """Base exception for all pagerflow errors."""

    def __init__(self, message: str, original_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class DataSourceError(PaginatorError):
    """Raised when the data source fails to deliver a page."""

    def __init__(
        self,
        message: str,
        page: int,
        page_size: int,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.page = page
        self.page_size = page_size


class InvalidOptionsError(PaginatorError):
    """Raised for paginator options that can never work."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.field = field
        self.value = value


class PaginatorStateError(PaginatorError):
    """Raised when the paginator is used outside of its lifecycle (e.g. no event loop)."""

    def __init__(self, message: str, original_error: BaseException | None = None) -> None:
        super().__init__(message, original_error)


@contextmanager
def handle_fetch_errors(page: int, page_size: int) -> Generator[None, None, None]:
    """
    Context manager that catches any failure raised by a data source
    and raises a DataSourceError carrying the page that failed.

    Cancellation is not an Exception and passes through untouched.

    Args:
        page: Page index being fetched
        page_size: Page size requested

    Usage:
        with handle_fetch_errors(page=3, page_size=20):
            items = await source.fetch(3, 20)
    """
    try:
        yield
    except DataSourceError:
        raise
    except Exception as e:
        raise DataSourceError(
            message=describe_error(e), page=page, page_size=page_size, original_error=e
        ) from e
