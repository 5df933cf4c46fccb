"""
Seed script: loads pre-chunked curriculum data, embeds it and inserts
documents and chunks.

Usage:
    python -m curriculum_rag.scripts.seed_chunks data/semantic_chunks.json
    python -m curriculum_rag.scripts.seed_chunks data.json --subject Civics --language en

Dependencies: curriculum_rag.dependencies
System role: Initial corpus loading from the command line
"""

import argparse
import asyncio
import logging
import sys

from curriculum_rag.configs import get_settings
from curriculum_rag.core.document_processing.models import SeedRecord
from curriculum_rag.core.document_processing.seeding import (
    DEFAULT_LANGUAGE,
    DEFAULT_SUBJECT,
    load_seed_file,
)
from curriculum_rag.dependencies import ServiceContainer
from curriculum_rag.observability.logger import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Embed and insert pre-chunked curriculum records",
    )
    parser.add_argument("path", help="JSON array of pre-chunked records")
    parser.add_argument(
        "--subject",
        default=DEFAULT_SUBJECT,
        help=f"Subject for files without one (default: {DEFAULT_SUBJECT})",
    )
    parser.add_argument(
        "--language",
        default=DEFAULT_LANGUAGE,
        help=f"Language for files without one (default: {DEFAULT_LANGUAGE})",
    )
    return parser


async def _run(records: list[SeedRecord], subject: str, language: str) -> int:
    container = ServiceContainer()
    try:
        report = await container.seeder.seed(
            records,
            default_subject=subject,
            default_language=language,
        )
    finally:
        await container.dispose()

    logger.info(
        f"{__name__}:main - Seed complete: {report.documents_created} created, "
        f"{report.documents_skipped} skipped, {report.chunks_inserted} chunks, "
        f"{report.failed_batches} failed batches"
    )
    return 1 if report.failed_batches else 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)

    try:
        records = load_seed_file(args.path)
    except (OSError, ValueError) as e:
        logger.error(f"{__name__}:main - Cannot load seed file: {e}")
        sys.exit(2)
    logger.info(f"{__name__}:main - Loaded {len(records)} records from {args.path}")

    sys.exit(asyncio.run(_run(records, args.subject, args.language)))


if __name__ == "__main__":
    main()
