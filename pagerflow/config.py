from dataclasses import dataclass

from .exceptions import InvalidOptionsError

# Page loaded on start.
DEFAULT_PAGE = 0

# Number of items requested per page.
DEFAULT_PAGE_SIZE = 20

# Pages at or past this index are never fetched.
MAX_PAGE = 10


@dataclass(frozen=True)
class PaginatorOptions:
    """
    Paging policy of a Paginator.

    Validated on creation so a misconfigured paginator fails
    before it dispatches its first fetch.
    """

    default_page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    max_page: int = MAX_PAGE

    def __post_init__(self) -> None:
        if self.default_page < 0:
            raise InvalidOptionsError(
                "default_page must not be negative", field="default_page", value=self.default_page
            )
        if self.page_size < 1:
            raise InvalidOptionsError(
                "page_size must be at least 1", field="page_size", value=self.page_size
            )
        if self.max_page < self.default_page:
            raise InvalidOptionsError(
                "max_page must not be lower than default_page",
                field="max_page",
                value=self.max_page,
            )

    def is_beyond_max(self, page: int) -> bool:
        """
        Check if a page index is past the configured bound.

        Args:
            page: Page index to check

        Returns:
            True if the page must not be fetched, False otherwise
        """
        return self.max_page <= page

    def can_advance_from(self, page: int) -> bool:
        """
        Check if the cursor may move past the given page.

        Args:
            page: Last loaded page index

        Returns:
            True if advancing is allowed, False otherwise
        """
        return page <= self.max_page
