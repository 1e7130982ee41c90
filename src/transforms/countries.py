from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from src.collector.api_client import MalformedResponseError


class CountryNameIn(BaseModel):
    common: str
    official: str | None = None


class FlagsIn(BaseModel):
    png: str


class CountryIn(BaseModel):
    name: CountryNameIn
    capital: list[str] | None = None
    population: int = Field(ge=0)
    region: str
    flags: FlagsIn
    cca3: str


@dataclass(frozen=True)
class Country:
    common_name: str
    capital_names: tuple[str, ...]
    population: int
    region: str
    flag_image_url: str
    country_code: str
    official_name: str | None = None

    @property
    def primary_capital(self) -> str | None:
        return self.capital_names[0] if self.capital_names else None


def transform_countries(payload: Any) -> list[Country]:
    """
    RAW /all payload -> Country records
    Key: cca3 (unique within one payload)
    """
    if not isinstance(payload, list):
        raise MalformedResponseError(f"Expected a JSON array, got {type(payload).__name__}")

    rows: list[Country] = []
    seen: set[str] = set()

    for item in payload:
        try:
            c = CountryIn.model_validate(item)
        except ValidationError as e:
            raise MalformedResponseError(f"Invalid country record: {e.error_count()} validation error(s)") from e

        if c.cca3 in seen:
            raise MalformedResponseError(f"Duplicate country code: {c.cca3}")
        seen.add(c.cca3)

        rows.append(
            Country(
                common_name=c.name.common,
                official_name=c.name.official,
                capital_names=tuple(c.capital or ()),
                population=c.population,
                region=c.region,
                flag_image_url=c.flags.png,
                country_code=c.cca3,
            )
        )

    return rows
