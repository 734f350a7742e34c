from .config import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE, PaginatorOptions
from .events import SingleEvent, StateStream, Subscription
from .exceptions import (
    DataSourceError,
    InvalidOptionsError,
    PaginatorError,
    PaginatorStateError,
)
from .lifecycle import ActivityGate
from .pagination import CallableDataSource, DataSource, PageResult
from .paginator import Paginator
from .state import PaginatorPhase, PaginatorState

__all__ = [
    "Paginator",
    "PaginatorState",
    "PaginatorPhase",
    "PaginatorOptions",
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE",
    # Data sources
    "DataSource",
    "CallableDataSource",
    "PageResult",
    # Observables
    "StateStream",
    "Subscription",
    "SingleEvent",
    "ActivityGate",
    # Exceptions
    "PaginatorError",
    "DataSourceError",
    "InvalidOptionsError",
    "PaginatorStateError",
]
