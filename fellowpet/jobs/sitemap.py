"""CLI job writing the service sitemap."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from fellowpet.core.config import get_settings
from fellowpet.core.store import get_store
from fellowpet.seo.sitemap import build_sitemap

logger = logging.getLogger(__name__)


def run_sitemap_job(*, output: Optional[str], base_url: Optional[str] = None, store=None) -> str:
    settings = get_settings()
    xml = build_sitemap(store or get_store(), (base_url or settings.site_base_url).rstrip("/"))
    if output:
        Path(output).write_text(xml, encoding="utf-8")
        logger.info("Wrote sitemap to %s", output)
    else:
        sys.stdout.write(xml)
    return xml


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Write the service sitemap XML")
    parser.add_argument("--output", dest="output", help="File to write; stdout when omitted")
    parser.add_argument("--base-url", dest="base_url", help="Override SITE_BASE_URL")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args(argv)
    run_sitemap_job(output=args.output, base_url=args.base_url)


if __name__ == "__main__":
    main()
