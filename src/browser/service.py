from __future__ import annotations

from src.browser.listing import filter_countries, sort_countries
from src.browser.state import FetchFailed, FetchStarted, FetchSucceeded, ListState, QueryChanged, reduce
from src.collector.api_client import APIClient, FetchError
from src.transforms.countries import Country, transform_countries
from src.utils.collation import SortKey
from src.utils.config import APIConfig
from src.utils.logging import get_logger


logger = get_logger(component="country_list_service")

__all__ = ["CountryListService", "filter_countries"]


class CountryListService:
    """
    Owns the in-memory country collection and the list UI state.

    - fetch_all(): network + normalize + collate; raises FetchError
    - load()/refresh(): drive ListState through the reducer, never raise FetchError
    - one fetch at a time: triggers while a fetch is in flight are ignored
    """

    def __init__(self, *, client: APIClient, sort_key: SortKey | None = None) -> None:
        self._client = client
        self._sort_key = sort_key
        self._state = ListState()
        self._in_flight = False
        self._has_loaded = False

    @classmethod
    def from_config(cls, cfg: APIConfig, *, sort_key: SortKey | None = None) -> "CountryListService":
        client = APIClient(base_url=cfg.base_url, timeout_seconds=cfg.timeout_seconds, fields=cfg.fields)
        return cls(client=client, sort_key=sort_key)

    @property
    def state(self) -> ListState:
        return self._state

    @property
    def collection(self) -> tuple[Country, ...]:
        return self._state.countries

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_all(self) -> list[Country]:
        res = await self._client.get_all()
        countries = sort_countries(transform_countries(res.data), sort_key=self._sort_key)
        logger.info("countries_fetched", rows=len(countries))
        return countries

    async def load(self, *, refresh: bool = False) -> ListState:
        if self._in_flight:
            logger.info("countries_fetch_ignored_in_flight", refresh=refresh)
            return self._state

        self._in_flight = True
        settled = False
        self._dispatch(FetchStarted(refresh=refresh))
        try:
            countries = await self.fetch_all()
        except FetchError as e:
            logger.warning(
                "countries_fetch_failed",
                refresh=refresh,
                error_type=type(e).__name__,
                error=str(e),
                kept_rows=len(self._state.countries),
            )
            self._dispatch(FetchFailed(reason=str(e) or type(e).__name__))
            settled = True
        else:
            self._dispatch(FetchSucceeded(countries=tuple(countries)))
            settled = True
        finally:
            self._in_flight = False
            if settled:
                self._has_loaded = True
            else:
                # Cancelled or crashed mid-fetch: clear the loading flags, let the error propagate.
                logger.warning("countries_fetch_interrupted", refresh=refresh)
                self._dispatch(FetchFailed(reason="fetch interrupted"))

        return self._state

    async def refresh(self) -> ListState:
        return await self.load(refresh=True)

    async def ensure_loaded(self) -> ListState:
        if self._has_loaded or self._in_flight:
            return self._state
        return await self.load()

    def set_query(self, query: str) -> ListState:
        return self._dispatch(QueryChanged(query=query))

    def visible(self) -> list[Country]:
        return filter_countries(self._state.countries, self._state.query)

    def _dispatch(self, action) -> ListState:
        self._state = reduce(self._state, action)
        return self._state
