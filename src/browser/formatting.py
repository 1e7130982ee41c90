from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from src.browser.state import ListState
from src.transforms.countries import Country

TITLE = "Countries of the World"
NO_CAPITAL = "No capital"
EMPTY_MESSAGE = "No countries found."


def _round_half_up(value: Decimal, places: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_population(n: int) -> str:
    """
    Compact population string.

    >= 1,000,000 -> "1.5M" (one decimal), >= 1,000 -> "12K" (no decimals),
    below that the plain number. Rounds half-up on the exact value, so
    999_999 renders as "1000K".
    """
    n = int(n)
    if n < 0:
        raise ValueError(f"population must be >= 0, got {n}")
    if n >= 1_000_000:
        return f"{_round_half_up(Decimal(n) / Decimal(1_000_000), 1)}M"
    if n >= 1_000:
        return f"{_round_half_up(Decimal(n) / Decimal(1_000), 0)}K"
    return str(n)


def country_card(country: Country) -> dict[str, Any]:
    return {
        "code": country.country_code,
        "name": country.common_name,
        "capital": country.primary_capital or NO_CAPITAL,
        "population": format_population(country.population),
        "population_raw": country.population,
        "region": country.region,
        "flag_url": country.flag_image_url,
    }


def list_view(state: ListState) -> dict[str, Any]:
    visible = state.visible
    return {
        "title": TITLE,
        # Subtitle counts the whole collection, not the filtered view.
        "subtitle": f"{len(state.countries)} countries",
        "status": state.status,
        "query": state.query,
        "count": len(visible),
        "items": [country_card(c) for c in visible],
        "empty_message": EMPTY_MESSAGE if not visible and not state.loading else None,
    }
