"""
Field Extractors 테스트

테스트 대상: src/tools/scrapers/field_extractors.py
"""

import json

import pytest

from src.tools.scrapers.field_extractors import (
    ExtractedFields,
    extract_description,
    extract_fields,
    extract_images,
    extract_keywords,
    extract_price,
    extract_rating,
    extract_review_count,
    extract_title,
    infer_category,
)
from src.tools.scrapers.markup_parser import parse_markup


def doc(body: str):
    return parse_markup(f"<html><head><title>Test</title></head><body>{body}</body></html>")


# =============================================================================
# Title
# =============================================================================


class TestExtractTitle:
    def test_product_title(self, full_page_document):
        assert (
            extract_title(full_page_document)
            == "Instant Pot Duo Plus 9-in-1 Electric Pressure Cooker, Slow Cooker, Rice Cooker"
        )

    def test_falls_back_to_h1(self):
        assert extract_title(doc("<h1>  Plain \n Widget </h1>")) == "Plain Widget"

    def test_skips_empty_candidates(self):
        document = doc('<span id="productTitle">   </span><h1 class="product-title">Gadget</h1>')
        assert extract_title(document) == "Gadget"

    def test_missing(self):
        assert extract_title(doc("<p>nothing here</p>")) is None


# =============================================================================
# Description
# =============================================================================


class TestExtractDescription:
    def test_feature_bullets(self, full_page_document):
        description = extract_description(full_page_document)
        lines = description.split("\n")
        assert len(lines) == 2
        assert lines[0].startswith("9-IN-1 FUNCTIONALITY")
        assert "Short" not in description

    def test_prefers_first_sufficient_selector(self):
        document = doc(
            '<div id="feature-bullets"><ul><li><span>Tiny bullet ok</span></li></ul></div>'
            '<div id="productDescription"><p>A long description paragraph that clearly exceeds '
            "fifty characters in length.</p></div>"
        )
        assert extract_description(document).startswith("A long description paragraph")

    def test_short_result_used_when_nothing_longer(self):
        document = doc('<div id="productDescription"><p>Compact and light</p></div>')
        assert extract_description(document) == "Compact and light"

    def test_raw_bullet_fallback(self):
        document = doc('<div id="feature-bullets"><li>Tiny</li></div>')
        assert extract_description(document) == "Tiny"

    def test_missing(self):
        assert extract_description(doc("<p>x</p>")) is None


# =============================================================================
# Price
# =============================================================================


class TestExtractPrice:
    def test_offscreen_price(self, full_page_document):
        assert extract_price(full_page_document) == pytest.approx(89.99)

    def test_legacy_price_block(self):
        document = doc('<span id="priceblock_ourprice">$1,299.00</span>')
        assert extract_price(document) == pytest.approx(1299.0)

    def test_skips_unparseable_selector(self):
        document = doc(
            '<span class="a-price"><span class="a-offscreen">See price in cart</span></span>'
            '<span id="priceblock_dealprice">$15.00</span>'
        )
        assert extract_price(document) == pytest.approx(15.0)

    def test_page_scan_fallback(self):
        document = doc("<div><span>Only $24.50 today</span></div>")
        assert extract_price(document) == pytest.approx(24.5)

    def test_page_scan_rejects_large_amounts(self):
        document = doc("<div>Financing from $12,500.00</div>")
        assert extract_price(document) is None

    def test_indian_grouping_above_cap(self):
        # amazon.in: ₹1,23,456 은 123456 으로 상한 초과
        document = doc(
            '<span class="a-price"><span class="a-offscreen">₹1,23,456</span></span>'
        )
        assert extract_price(document) is None

    def test_indian_price(self):
        document = doc('<span class="a-price"><span class="a-offscreen">₹12,499.00</span></span>')
        assert extract_price(document) == pytest.approx(12499.0)

    def test_missing(self):
        assert extract_price(doc("<p>Currently unavailable.</p>")) is None


# =============================================================================
# Rating / Reviews
# =============================================================================


class TestExtractRating:
    def test_icon_alt(self, full_page_document):
        assert extract_rating(full_page_document) == pytest.approx(4.6)

    def test_aria_label(self):
        document = doc('<i class="a-icon-alt" aria-label="4.2 out of 5 stars"></i>')
        assert extract_rating(document) == pytest.approx(4.2)

    def test_data_hook(self):
        document = doc('<span data-hook="rating-out-of-text">3.9 out of 5</span>')
        assert extract_rating(document) == pytest.approx(3.9)

    def test_missing(self):
        assert extract_rating(doc("<p>Be the first to review</p>")) is None


class TestExtractReviewCount:
    def test_customer_review_text(self, full_page_document):
        assert extract_review_count(full_page_document) == 15420

    def test_data_hook(self):
        document = doc('<span data-hook="total-review-count">2,048 global ratings</span>')
        assert extract_review_count(document) == 2048

    def test_scan_fallback(self):
        document = doc('<a href="/product-reviews/B075CYMYK6">See all 321 reviews</a>')
        assert extract_review_count(document) == 321

    def test_scan_ignores_unrelated_numbers(self):
        document = doc("<span>Only 7 left in stock</span>")
        assert extract_review_count(document) is None

    def test_oversized_count_does_not_raise(self):
        document = doc(f'<span id="acrCustomerReviewText">{"9" * 5000} reviews</span>')
        assert extract_review_count(document) is None


# =============================================================================
# Images
# =============================================================================


class TestExtractImages:
    def test_full_page(self, full_page_document, us_site):
        assert extract_images(full_page_document, us_site) == [
            "https://m.media-amazon.com/images/I/71T1770jSML.jpg",
            "https://images-na.ssl-images-amazon.com/images/I/51Xq2bC4TL.jpg",
        ]

    def test_protocol_relative_and_dynamic_json(self, legacy_de_html, de_site):
        images = extract_images(parse_markup(legacy_de_html), de_site)
        assert images == [
            "https://m.media-amazon.com/images/I/81kQpZf9XL.jpg",
            "https://m.media-amazon.com/images/I/61rEl7ivE1L.jpg",
        ]

    def test_data_src_preferred(self, us_site):
        document = doc(
            '<img id="landingImage" data-src="https://m.media-amazon.com/images/I/lazy.jpg" '
            'src="https://m.media-amazon.com/images/I/placeholder.jpg">'
        )
        assert extract_images(document, us_site) == ["https://m.media-amazon.com/images/I/lazy.jpg"]

    def test_rejects_non_cdn_hosts(self, us_site):
        document = doc(
            '<div id="imageBlock">'
            '<img src="https://evil.example.com/images/I/x.jpg">'
            '<img src="/images/G/01/x-locale/spacer.gif">'
            "</div>"
        )
        assert extract_images(document, us_site) == []

    def test_cap_and_dedupe(self, us_site):
        tags = "".join(
            f'<img src="https://m.media-amazon.com/images/I/img{i}._AC_US40_.jpg">' for i in range(8)
        )
        tags += '<img src="https://m.media-amazon.com/images/I/img0._AC_SX679_.jpg">'
        images = extract_images(doc(f'<div id="imageBlock">{tags}</div>'), us_site)
        assert len(images) == 5
        assert len(set(images)) == 5
        assert images[0] == "https://m.media-amazon.com/images/I/img0.jpg"

    def test_invalid_dynamic_json_ignored(self, us_site):
        document = doc('<img class="a-dynamic-image" data-a-dynamic-image="{not json">')
        assert extract_images(document, us_site) == []

    def test_dynamic_json_keys(self, us_site):
        mapping = {"https://m.media-amazon.com/images/I/dyn._AC_SY355_.jpg": [355, 355]}
        document = doc(f"<img class='a-dynamic-image' data-a-dynamic-image='{json.dumps(mapping)}'>")
        assert extract_images(document, us_site) == ["https://m.media-amazon.com/images/I/dyn.jpg"]


# =============================================================================
# Category / Keywords
# =============================================================================


class TestInferCategory:
    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Wireless Phone Charger", "electronics"),
            ("Cotton T-Shirt for Men", "clothing"),
            ("Stainless Kitchen Knife Set", "home"),
            ("The Great Gatsby (Paperback Novel)", "books"),
            ("Adjustable Dumbbells for Home Gym", "home"),
            ("Yoga Mat for Fitness", "sports"),
            ("Vitamin C Skincare Serum", "beauty"),
            ("Car Phone Mount", "electronics"),
            ("Car Seat Cover", "automotive"),
            ("蓝牙耳机 电子产品", "electronics"),
            ("运动水壶", "sports"),
            ("Ceramic Coffee Mug", "general"),
        ],
    )
    def test_first_matching_category(self, title, expected):
        assert infer_category(title, "") == expected

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Samsung Galaxy Smartphone 128GB", "electronics"),
            ("Noise Cancelling Headphones", "electronics"),
            ("USB Microphone for Podcasts", "electronics"),
            ("Hooded Sweatshirt", "clothing"),
            ("Cars toy", "automotive"),
        ],
    )
    def test_substring_matching(self, title, expected):
        assert infer_category(title, None) == expected

    def test_substring_matching_inside_words(self):
        # "scarf" 안의 "car"
        assert infer_category("Wool Scarf", None) == "automotive"

    def test_uses_description(self):
        assert infer_category("Widget", "Fits any vehicle") == "automotive"

    def test_missing_inputs(self):
        assert infer_category(None, None) == "general"


class TestExtractKeywords:
    def test_basic(self):
        assert extract_keywords("Instant Pot Duo, 6-Quart!") == ["instant", "pot", "duo", "quart"]

    def test_length_window(self):
        keywords = extract_keywords("an ox ate supercalifragilisticexpialidocious cake")
        assert keywords == ["ate", "cake"]

    def test_dedupe_preserves_order(self):
        assert extract_keywords("cooker COOKER rice cooker") == ["cooker", "rice"]

    def test_cap(self):
        text = " ".join(f"word{i:02d}" for i in range(20))
        assert len(extract_keywords(text)) == 10

    def test_cjk_kept(self):
        assert extract_keywords("无线蓝牙耳机 wireless") == ["无线蓝牙耳机", "wireless"]

    def test_empty(self):
        assert extract_keywords("") == []
        assert extract_keywords(None) == []


# =============================================================================
# extract_fields
# =============================================================================


class TestExtractFields:
    def test_full_page(self, full_page_document, us_site):
        fields = extract_fields(full_page_document, us_site)

        assert isinstance(fields, ExtractedFields)
        assert fields.title.startswith("Instant Pot Duo Plus")
        assert fields.price == pytest.approx(89.99)
        assert fields.rating == pytest.approx(4.6)
        assert fields.reviews == 15420
        assert len(fields.images) == 2
        assert fields.category == "home"
        assert fields.keywords == [
            "instant",
            "pot",
            "duo",
            "plus",
            "electric",
            "pressure",
            "cooker",
            "slow",
            "rice",
            "functionality",
        ]
        assert fields.missing == []

    def test_legacy_de_page(self, legacy_de_html, de_site):
        fields = extract_fields(parse_markup(legacy_de_html), de_site)

        assert fields.title == "Kaffeemaschine Edelstahl"
        assert fields.description.startswith("Diese Kaffeemaschine")
        assert fields.price == pytest.approx(12.99)
        assert fields.rating == pytest.approx(4.5)
        assert fields.reviews == 1234
        assert fields.category == "general"

    def test_title_only_page(self, title_only_html, us_site):
        fields = extract_fields(parse_markup(title_only_html), us_site)

        assert fields.title == "Plain Widget"
        assert fields.description is None
        assert fields.price is None
        assert fields.images == []
        assert fields.keywords == ["plain", "widget"]
        assert set(fields.missing) == {"description", "price", "rating", "reviews", "images"}

    def test_is_frozen(self, us_site):
        fields = extract_fields(doc(""), us_site)
        with pytest.raises(AttributeError):
            fields.title = "x"
