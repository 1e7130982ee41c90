from __future__ import annotations

from functools import lru_cache
from typing import Callable

from pyuca import Collator

SortKey = Callable[[str], tuple[int, ...]]


@lru_cache(maxsize=1)
def _root_collator() -> Collator:
    # Loading the DUCET table is slow; share one instance per process.
    return Collator()


def default_sort_key(text: str) -> tuple[int, ...]:
    """
    Unicode Collation Algorithm key (root locale / DUCET).

    Accented letters sort with their base letter ("Åland" next to "Albania"),
    case is a tertiary difference only.
    """
    return _root_collator().sort_key(text)
