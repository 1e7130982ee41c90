from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse

from src.browser.formatting import list_view
from src.browser.service import CountryListService
from src.browser.state import QueryChanged, reduce
from src.utils.config import load_api_config
from src.utils.logging import get_logger


logger = get_logger(component="read_api")

_service: CountryListService | None = None


def get_service() -> CountryListService:
    """Process-wide service, built from config on first use."""
    global _service
    if _service is None:
        _service = CountryListService.from_config(load_api_config())
    return _service


@asynccontextmanager
async def _lifespan(_: FastAPI) -> AsyncIterator[None]:
    global _service
    yield
    if _service is not None:
        await _service.aclose()
        _service = None


app = FastAPI(title="countries-read-api", version="v1", lifespan=_lifespan)


@app.get("/v1/health")
async def health(service: CountryListService = Depends(get_service)) -> dict:
    state = service.state
    return {"ok": True, "status": state.status, "countries": len(state.countries)}


@app.get("/v1/countries")
async def countries(q: str = "", service: CountryListService = Depends(get_service)) -> dict[str, Any]:
    await service.ensure_loaded()
    # Per-request query: derive a view without touching the shared state.
    state = reduce(service.state, QueryChanged(query=q))
    return list_view(state)


@app.post("/v1/countries/refresh")
async def refresh(service: CountryListService = Depends(get_service)) -> JSONResponse:
    if service.in_flight:
        logger.info("refresh_ignored_in_flight")
        return JSONResponse(status_code=202, content={"ok": True, "ignored": True, **list_view(service.state)})

    state = await service.refresh()
    return JSONResponse(status_code=200, content={"ok": True, "ignored": False, **list_view(state)})
