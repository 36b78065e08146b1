"""Command-line access to the dashboards and the daily briefing.

Usage:
    python -m econdash.cli economy
    python -m econdash.cli housing --zip 43215 --bedrooms 3 --income 65000
    python -m econdash.cli briefing --generate
"""

import argparse
import asyncio
import logging
import sys

from econdash.api.deps import get_sources
from econdash.config import settings
from econdash.dashboards.briefing import BriefingService, BriefingUnavailable
from econdash.dashboards.economy import fetch_economic_summary
from econdash.dashboards.glance import fetch_glance
from econdash.dashboards.housing import fetch_housing
from econdash.dashboards.pipeline import AssemblyError
from econdash.dashboards.prices import fetch_prices
from econdash.dashboards.treasury import fetch_treasury
from econdash.data.cache import build_cache
from econdash.models.summary import Briefing

DASHBOARDS = {
    "economy": fetch_economic_summary,
    "glance": fetch_glance,
    "treasury": fetch_treasury,
    "prices": fetch_prices,
}


def print_briefing(briefing: Briefing) -> None:
    print(f"\n{'=' * 60}")
    print(f"  Economic Briefing: {briefing.date.isoformat()}")
    print(f"{'=' * 60}")
    print(f"  Generated: {briefing.generated_at:%Y-%m-%d %H:%M} UTC{' (cached)' if briefing.cached else ''}")
    print()
    print(briefing.briefing)
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Economic dashboard CLI")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level (default: from settings)")
    commands = parser.add_subparsers(dest="command", required=True)

    for name in DASHBOARDS:
        commands.add_parser(name, help=f"Print the {name} dashboard as JSON")

    housing = commands.add_parser("housing", help="Print the housing dashboard as JSON")
    housing.add_argument("--zip", dest="zip_code", help="5-digit ZIP code for HUD rents")
    housing.add_argument("--bedrooms", type=int, default=2, help="Bedroom count, 0-4 (default: 2)")
    housing.add_argument("--income", type=float, help="Annual household income (default: HUD median)")
    housing.add_argument("--home-price", type=float, help="Home price for the rent-vs-buy comparison")
    housing.add_argument("--down-payment", type=float, help="Down payment (default: 20%% of price)")

    briefing = commands.add_parser("briefing", help="Print today's AI briefing")
    briefing.add_argument("--generate", action="store_true", help="Regenerate and store today's briefing")
    return parser


async def run(args: argparse.Namespace) -> int:
    sources = get_sources()

    if args.command in DASHBOARDS:
        summary = await DASHBOARDS[args.command](sources)
        print(summary.model_dump_json(by_alias=True, indent=2))
        return 0

    if args.command == "housing":
        summary = await fetch_housing(
            sources,
            zip_code=args.zip_code,
            bedrooms=args.bedrooms,
            income=args.income,
            home_price=args.home_price,
            down_payment=args.down_payment,
        )
        print(summary.model_dump_json(by_alias=True, indent=2))
        return 0

    cache = build_cache(settings)
    try:
        service = BriefingService(cache, lambda: fetch_economic_summary(sources))
        briefing = await (service.regenerate() if args.generate else service.get())
        print_briefing(briefing)
    finally:
        close = getattr(cache, "close", None)
        if close is not None:
            await close()
    return 0


async def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        return await run(args)
    except ValueError as e:
        parser.error(str(e))
    except (AssemblyError, BriefingUnavailable) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
