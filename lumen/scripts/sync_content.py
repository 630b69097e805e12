"""
Full content sync from Contentful into the vector store.

Usage:
    python -m lumen.scripts.sync_content
    python -m lumen.scripts.sync_content --locale en-US --locale de-DE

Purpose:
- Sync every article of each locale
- Remove embeddings of articles deleted in Contentful
- Print a per-locale summary

Exits non-zero when any article failed or a locale could not be listed.

Dependencies: lumen.api.deps, lumen.core.content_processing
System role: Scheduled or manual batch ingestion entry point
"""

import argparse
import asyncio
import logging
import sys

from lumen.api.deps.dependencies import get_service_cache
from lumen.configs import get_settings
from lumen.core.content_processing import BatchSyncResult, get_pipeline_settings
from lumen.core.exceptions import ContentSourceError
from lumen.observability import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sync Contentful articles into the vector store")
    parser.add_argument(
        "--locale",
        action="append",
        dest="locales",
        help="Locale to sync (repeatable, defaults to SYNC_LOCALES)",
    )
    return parser.parse_args(argv)


def print_summary(batch: BatchSyncResult) -> None:
    print(f"\n{batch.locale}")
    print(f"  synced:  {batch.synced}")
    print(f"  skipped: {batch.skipped}")
    print(f"  failed:  {batch.failed}")
    print(f"  deleted: {batch.deleted}")
    for error in batch.errors:
        print(f"  error: {error}")
    for article_id in batch.reconciliation_failures:
        print(f"  not reconciled: {article_id}")


async def run(locales: list[str]) -> bool:
    """
    Sync each locale in turn.

    Args:
        locales: Locale tags to sync

    Returns:
        bool: True when every locale synced without failures
    """
    cache = get_service_cache()
    pipeline = cache.sync_pipeline
    ok = True

    try:
        for locale in locales:
            try:
                batch = await pipeline.sync_all_articles(locale)
            except ContentSourceError as e:
                logger.error(f"{__name__}:run - Could not list articles for {locale}: {e}")
                ok = False
                continue

            print_summary(batch)
            if batch.failed or batch.errors or batch.reconciliation_failures:
                ok = False
    finally:
        await cache.aclose()

    return ok


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = parse_args(argv)
    configure_logging(get_settings().log_level)

    locales = args.locales or get_pipeline_settings().locales
    logger.info(f"{__name__}:main - Syncing locales: {', '.join(locales)}")

    success = asyncio.run(run(locales))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
