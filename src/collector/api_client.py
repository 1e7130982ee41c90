from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx


class FetchError(Exception):
    pass


class APITimeoutError(FetchError):
    pass


class APIServerError(FetchError):
    pass


class MalformedResponseError(FetchError):
    pass


class APIUnexpectedStatusError(FetchError):
    def __init__(self, status_code: int, body_text: str | None = None) -> None:
        super().__init__(f"Unexpected status code: {status_code}")
        self.status_code = status_code
        self.body_text = body_text


DEFAULT_FIELDS: tuple[str, ...] = ("name", "capital", "population", "region", "flags", "cca3")


@dataclass(frozen=True)
class APIResult:
    status_code: int
    data: Any


class APIClient:
    """
    REST Countries client
    - GET-only
    - No auth, fixed field selection for /all
    - Async httpx
    """

    def __init__(
        self,
        *,
        base_url: str = "https://restcountries.com/v3.1",
        timeout_seconds: float = 10.0,
        fields: tuple[str, ...] | list[str] = DEFAULT_FIELDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = float(timeout_seconds)
        self._fields = tuple(fields)

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_all(self) -> APIResult:
        return await self.get("/all", params={"fields": ",".join(self._fields)})

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> APIResult:
        # Ensure endpoint starts with /
        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"

        try:
            resp = await self._client.get(endpoint, params=params or {})
        except httpx.TimeoutException as e:
            raise APITimeoutError("Request timeout") from e
        except httpx.RequestError as e:
            raise FetchError(f"Request error: {e}") from e

        if resp.status_code == 200:
            try:
                data = resp.json()
            except ValueError as e:
                raise MalformedResponseError("Failed to parse JSON") from e
            return APIResult(status_code=200, data=data)

        if resp.status_code >= 500:
            raise APIServerError(f"API server error ({resp.status_code})")

        body_text: str | None
        try:
            body_text = resp.text
        except UnicodeDecodeError:
            body_text = None
        raise APIUnexpectedStatusError(resp.status_code, body_text=body_text)
