from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.collector.api_client import FetchError, MalformedResponseError
from src.transforms.countries import Country, transform_countries


def _payload() -> list:
    p = Path(__file__).resolve().parents[1] / "fixtures" / "api_responses" / "countries_all.json"
    return json.loads(p.read_text(encoding="utf-8"))


def test_transform_countries_keeps_every_record_in_order() -> None:
    rows = transform_countries(_payload())
    assert [c.country_code for c in rows] == ["ZWE", "ALA", "ATA", "CUW", "ALB", "CIV", "CUB", "UMI"]


def test_transform_countries_normalizes_nested_shape() -> None:
    rows = transform_countries(_payload())
    assert rows[0] == Country(
        common_name="Zimbabwe",
        official_name="Republic of Zimbabwe",
        capital_names=("Harare",),
        population=14862927,
        region="Africa",
        flag_image_url="https://flagcdn.com/w320/zw.png",
        country_code="ZWE",
    )


def test_transform_countries_capital_absent_or_empty() -> None:
    by_code = {c.country_code: c for c in transform_countries(_payload())}
    assert by_code["UMI"].capital_names == ()
    assert by_code["UMI"].primary_capital is None
    assert by_code["ATA"].capital_names == ()
    assert by_code["ALA"].primary_capital == "Mariehamn"


def test_transform_countries_rejects_non_list() -> None:
    with pytest.raises(MalformedResponseError):
        transform_countries({"status": 404, "message": "Not Found"})


def test_transform_countries_rejects_negative_population() -> None:
    item = _payload()[0]
    item["population"] = -1
    with pytest.raises(MalformedResponseError):
        transform_countries([item])


def test_transform_countries_rejects_missing_name() -> None:
    item = _payload()[0]
    del item["name"]
    # MalformedResponseError is a FetchError: callers only handle one kind.
    with pytest.raises(FetchError):
        transform_countries([item])


def test_transform_countries_rejects_duplicate_code() -> None:
    item = _payload()[0]
    with pytest.raises(MalformedResponseError, match="ZWE"):
        transform_countries([item, dict(item)])


def test_transform_countries_empty_payload() -> None:
    assert transform_countries([]) == []
