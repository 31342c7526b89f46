"""XML sitemap over every service document."""

import logging
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional
from xml.sax.saxutils import escape

from fellowpet.core.models import service_record_from_document
from fellowpet.core.store import SERVICES_COLLECTION, DocumentStore
from fellowpet.presentation.cards import service_path
from fellowpet.vendors.firestore import Document

logger = logging.getLogger(__name__)


def sitemap_urls(documents: Iterable[Document], base_url: str) -> List[str]:
    return [f"{base_url}{service_path(service_record_from_document(doc))}" for doc in documents]


def render_sitemap(urls: Iterable[str], last_modified: Optional[date] = None) -> str:
    lastmod = (last_modified or datetime.now(timezone.utc).date()).isoformat()
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    for url in urls:
        lines.append(f"  <url><loc>{escape(url)}</loc><lastmod>{lastmod}</lastmod></url>")
    lines.append("</urlset>")
    return "\n".join(lines) + "\n"


def build_sitemap(store: DocumentStore, base_url: str, last_modified: Optional[date] = None) -> str:
    documents = store.list_all(SERVICES_COLLECTION)
    logger.info("Building sitemap for %d services", len(documents))
    return render_sitemap(sitemap_urls(documents, base_url), last_modified)
