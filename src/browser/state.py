from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from src.browser.listing import filter_countries
from src.transforms.countries import Country


@dataclass(frozen=True)
class ListState:
    countries: tuple[Country, ...] = ()
    query: str = ""
    # True until the first fetch finishes, successfully or not.
    loading: bool = True
    refreshing: bool = False
    # Reason of the last failed fetch; cleared by the next success.
    error: str | None = None

    @property
    def visible(self) -> tuple[Country, ...]:
        return tuple(filter_countries(self.countries, self.query))

    @property
    def status(self) -> str:
        if self.loading:
            return "loading"
        if self.refreshing:
            return "refreshing"
        if not self.visible:
            return "empty"
        return "loaded"


@dataclass(frozen=True)
class FetchStarted:
    refresh: bool = False


@dataclass(frozen=True)
class FetchSucceeded:
    countries: tuple[Country, ...]


@dataclass(frozen=True)
class FetchFailed:
    reason: str = ""


@dataclass(frozen=True)
class QueryChanged:
    query: str


Action = Union[FetchStarted, FetchSucceeded, FetchFailed, QueryChanged]


def reduce(state: ListState, action: Action) -> ListState:
    """Pure state transition; returns a new ListState."""
    if isinstance(action, FetchStarted):
        if action.refresh:
            return replace(state, refreshing=True)
        return replace(state, loading=True)

    if isinstance(action, FetchSucceeded):
        return replace(state, countries=tuple(action.countries), loading=False, refreshing=False, error=None)

    if isinstance(action, FetchFailed):
        # Last known collection stays; first-load failure leaves it empty.
        return replace(state, loading=False, refreshing=False, error=action.reason or "fetch failed")

    if isinstance(action, QueryChanged):
        return replace(state, query=action.query)

    raise TypeError(f"Unknown action: {type(action).__name__}")
