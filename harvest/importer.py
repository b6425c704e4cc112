import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import httpx
import orjson

from .catalog import ProductFile
from .config import get_settings
from .pipeline import ProductPipeline, build_pipeline
from .schema import Category, FinishedProduct

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    products: List[FinishedProduct] = field(default_factory=list)
    failures: List[Tuple[str, str]] = field(default_factory=list)


async def import_urls(urls: Iterable[str], pipeline: ProductPipeline, delay: float = 0.75,
                      category: Optional[str] = None) -> ImportReport:
    """Run URLs through the pipeline one at a time, pausing ``delay`` seconds between them."""
    report = ImportReport()
    urls = list(urls)
    for i, url in enumerate(urls):
        if i:
            await asyncio.sleep(delay)
        logger.info("[JOB] FETCH → %s", url)
        try:
            product = await pipeline.extract(url, category=category)
        except Exception as e:
            logger.error("[JOB] ERR  → %s | %s: %s", url, type(e).__name__, e)
            report.failures.append((url, str(e)))
            continue
        logger.info("[JOB] OK   → %s | %s | %s | %s", product.id, product.store.value, product.name, product.price)
        report.products.append(product)
    return report


def read_url_file(path: Path) -> List[str]:
    lines = path.read_text(encoding="utf-8").splitlines()
    return [ln.strip() for ln in lines if ln.strip() and not ln.strip().startswith("#")]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Extract product URLs into the deals product file.")
    parser.add_argument("urls", nargs="*", help="product URLs")
    parser.add_argument("--file", type=Path, help="text file with one URL per line")
    parser.add_argument("--output", type=Path, help="product file (defaults to PRODUCTS_FILE)")
    parser.add_argument("--category", choices=[c.value for c in Category], help="force a category")
    parser.add_argument("--delay", type=float, help="seconds between URLs (defaults to IMPORT_DELAY)")
    parser.add_argument("--dry-run", action="store_true", help="print records instead of saving")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    urls = list(args.urls)
    if args.file:
        urls += read_url_file(args.file)
    if not urls:
        logger.error("[INIT] No URLs given. Exiting.")
        return 2
    logger.info("[INIT] Importing %d URLs", len(urls))

    delay = args.delay if args.delay is not None else settings.import_delay
    async with httpx.AsyncClient() as client:
        pipeline = build_pipeline(client, settings)
        report = await import_urls(urls, pipeline, delay=delay, category=args.category)

    records = [p.to_record() for p in report.products]
    if args.dry_run:
        for record in records:
            print(orjson.dumps(record).decode())
    else:
        ProductFile(args.output or settings.products_file).merge(records)

    for url, reason in report.failures:
        logger.warning("[DONE] failed: %s (%s)", url, reason)
    logger.info("[DONE] %d extracted, %d failed", len(report.products), len(report.failures))
    return 1 if report.failures and not report.products else 0


def cli():
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
