from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from src.browser.formatting import country_card  # noqa: E402
from src.browser.service import CountryListService  # noqa: E402
from src.collector.api_client import APIClient  # noqa: E402
from src.utils.config import load_api_config  # noqa: E402
from src.utils.logging import setup_logging  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch countries from REST Countries and print them sorted by name.")
    p.add_argument("--query", "-q", default="", help="Case-insensitive name substring filter")
    p.add_argument("--limit", type=int, default=None, help="Print at most N countries")
    p.add_argument("--config", default=None, help="Path to api.yaml (default: config/api.yaml)")
    return p.parse_args(argv)


async def main(argv: list[str] | None = None, *, client: APIClient | None = None) -> int:
    args = _parse_args(argv)
    setup_logging(fmt="console")

    if client is None:
        try:
            cfg = load_api_config(args.config)
        except (OSError, ValueError) as e:
            print(f"❌ Config error: {e}")
            return 1
        service = CountryListService.from_config(cfg)
    else:
        service = CountryListService(client=client)

    try:
        state = await service.load()
    finally:
        await service.aclose()

    if state.error is not None:
        print(f"❌ Fetch failed: {state.error}")
        return 1

    state = service.set_query(args.query)
    visible = state.visible
    shown = visible if args.limit is None else visible[: max(0, args.limit)]

    for c in shown:
        card = country_card(c)
        print(f"{card['name']} | {card['capital']} | {card['population']} | {card['region']}")

    if not visible:
        print("No countries found.")
    print(f"✅ {len(visible)}/{len(state.countries)} countries")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
