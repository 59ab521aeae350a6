"""Product page scraping tools"""

from .field_extractors import ExtractedFields, extract_fields
from .markup_parser import SoupDocument, detect_challenge, ensure_not_challenge, parse_markup
from .product_page_scraper import (
    ProductPageScraper,
    scrape_product,
    scrape_product_with_retry,
)
from .request_dispatcher import build_headers, fetch_page
from .site_resolver import build_product_url, extract_identifier, resolve_site

__all__ = [
    "ProductPageScraper",
    "scrape_product",
    "scrape_product_with_retry",
    "extract_identifier",
    "resolve_site",
    "build_product_url",
    "build_headers",
    "fetch_page",
    "SoupDocument",
    "parse_markup",
    "detect_challenge",
    "ensure_not_challenge",
    "ExtractedFields",
    "extract_fields",
]
