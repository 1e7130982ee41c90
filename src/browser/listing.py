from __future__ import annotations

from typing import Iterable, Sequence

from src.transforms.countries import Country
from src.utils.collation import SortKey, default_sort_key


def sort_countries(countries: Iterable[Country], *, sort_key: SortKey | None = None) -> list[Country]:
    """
    Ascending by common name under locale-aware collation.
    Equal collation keys fall back to the country code so the order is stable across fetches.
    """
    sk = sort_key or default_sort_key
    return sorted(countries, key=lambda c: (sk(c.common_name), c.country_code))


def filter_countries(countries: Sequence[Country], query: str) -> list[Country]:
    if not query:
        return list(countries)
    needle = query.casefold()
    return [c for c in countries if needle in c.common_name.casefold()]
