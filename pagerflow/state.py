from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class PaginatorPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"
    MAXIMUM_REACHED = "maximum_reached"


class PaginatorState(BaseModel, Generic[T]):
    """
    Immutable snapshot of a paginator.

    A paginator never mutates a snapshot; every transition produces a new one
    through model_copy(update=...).

    Attributes:
        is_loading: True while a fetch is in flight
        items: Every item loaded so far, in page order
        error: Message of the last failed load, None otherwise
        maximum_reached: True once the page cursor met the configured maximum
        current_page: Last page whose load completed
    """

    model_config = ConfigDict(frozen=True)

    is_loading: bool = False
    items: tuple[T, ...] = ()
    error: str | None = None
    maximum_reached: bool = False
    current_page: int = 0

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def phase(self) -> PaginatorPhase:
        """Coarse state machine position derived from the flags."""
        if self.maximum_reached:
            return PaginatorPhase.MAXIMUM_REACHED
        if self.is_loading:
            return PaginatorPhase.LOADING
        if self.error is not None:
            return PaginatorPhase.ERRORED
        if self.items:
            return PaginatorPhase.LOADED
        return PaginatorPhase.IDLE
