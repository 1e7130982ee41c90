from __future__ import annotations

import pytest

from src.browser.formatting import EMPTY_MESSAGE, NO_CAPITAL, country_card, format_population, list_view
from src.browser.state import ListState
from src.transforms.countries import Country


@pytest.mark.parametrize(
    ("n", "expected"),
    [
        (0, "0"),
        (999, "999"),
        (1_000, "1K"),
        (1_499, "1K"),
        (1_500, "2K"),
        (29_458, "29K"),
        (999_999, "1000K"),
        (1_000_000, "1.0M"),
        # Half-up on the exact decimal value; float toFixed-style rounding would give "1.1M" for 1_150_000.
        (1_150_000, "1.2M"),
        (1_250_000, "1.3M"),
        (1_500_000, "1.5M"),
        (1_402_112_000, "1402.1M"),
    ],
)
def test_format_population(n: int, expected: str) -> None:
    assert format_population(n) == expected


def test_format_population_rejects_negative() -> None:
    with pytest.raises(ValueError):
        format_population(-5)


ALAND = Country(
    common_name="Åland Islands",
    capital_names=("Mariehamn",),
    population=29458,
    region="Europe",
    flag_image_url="https://flagcdn.com/w320/ax.png",
    country_code="ALA",
)
ANTARCTICA = Country(
    common_name="Antarctica",
    capital_names=(),
    population=1000,
    region="Antarctic",
    flag_image_url="https://flagcdn.com/w320/aq.png",
    country_code="ATA",
)


def test_country_card() -> None:
    assert country_card(ALAND) == {
        "code": "ALA",
        "name": "Åland Islands",
        "capital": "Mariehamn",
        "population": "29K",
        "population_raw": 29458,
        "region": "Europe",
        "flag_url": "https://flagcdn.com/w320/ax.png",
    }


def test_country_card_without_capital() -> None:
    assert country_card(ANTARCTICA)["capital"] == NO_CAPITAL


def test_list_view_counts_whole_collection_in_subtitle() -> None:
    state = ListState(countries=(ALAND, ANTARCTICA), query="arct", loading=False)
    view = list_view(state)

    assert view["subtitle"] == "2 countries"
    assert view["count"] == 1
    assert [i["code"] for i in view["items"]] == ["ATA"]
    assert view["status"] == "loaded"
    assert view["empty_message"] is None


def test_list_view_empty_message_only_after_loading() -> None:
    assert list_view(ListState())["empty_message"] is None

    view = list_view(ListState(countries=(ALAND,), query="xyz", loading=False))
    assert view["items"] == []
    assert view["status"] == "empty"
    assert view["empty_message"] == EMPTY_MESSAGE
