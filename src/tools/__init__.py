"""
Tool modules - organized into sub-packages

Sub-packages:
- scrapers: Product page extraction (resolver, dispatcher, parser, extractors, retry)
"""

from .scrapers import ProductPageScraper, scrape_product, scrape_product_with_retry

__all__ = [
    "ProductPageScraper",
    "scrape_product",
    "scrape_product_with_retry",
]
