"""
Shared utilities for the product extractor.
"""

from .text_parsing import clean_text, parse_price, parse_rating, parse_review_count

__all__ = ["clean_text", "parse_price", "parse_rating", "parse_review_count"]
