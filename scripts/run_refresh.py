#!/usr/bin/env python3
"""Run one aggregation pass and print the result."""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from daily_dispatch.config.log import configure_logging
from daily_dispatch.config.sites import SiteStore, parse_sites
from daily_dispatch.pipeline.aggregator import run_aggregation
from daily_dispatch.storage.factory import get_article_cache


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--sites", help="Newline- or comma-separated sites (default: saved site list)")
    parser.add_argument("--save", action="store_true", help="Publish the result to the snapshot file")
    args = parser.parse_args()

    configure_logging()

    if args.sites:
        sites = parse_sites(args.sites.replace(",", "\n"))
    else:
        sites = SiteStore().load_sites()

    print("\n" + "=" * 50)
    print("DAILY DISPATCH REFRESH")
    print("=" * 50 + "\n")

    snapshot = asyncio.run(run_aggregation(sites))
    if snapshot is None:
        print("No sites configured. Set DD_SITES or save a site list first.")
        return 1

    if args.save:
        get_article_cache().publish(snapshot)

    print(f"ARTICLES ({len(snapshot.items)}):")
    for article in snapshot.items:
        print(f"  [{article.source}] {article.title}")
        if article.link:
            print(f"      {article.link}")

    if snapshot.errors:
        print(f"\nERRORS ({len(snapshot.errors)}):")
        for error in snapshot.errors:
            print(f"  {error.feed_url}: {error.message}")

    print(f"\nFETCHED AT: {snapshot.fetched_at.isoformat()}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
