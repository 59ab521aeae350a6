"""
Field Extractors
================
파싱된 상품 페이지에서 필드별 값을 추출하는 순수 함수 모음

각 필드는 우선순위 순의 (선택자, 파서) 전략 목록을 가지며,
처음으로 그럴듯한 값을 돌려주는 전략이 채택됩니다.
어떤 추출기도 예외를 던지지 않습니다. 값을 찾지 못하면 None(또는 빈 리스트)입니다.

Amazon은 A/B 테스트로 레이아웃이 자주 바뀌므로 선택자를 여러 세대에 걸쳐 유지합니다:
    - #productTitle, #feature-bullets  (데스크톱 기본)
    - #priceblock_ourprice              (구형 가격 블록)
    - .a-price .a-offscreen             (현행 가격 블록)
"""

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any
from urllib.parse import urlparse

from src.domain.interfaces.markup import MarkupDocument
from src.domain.value_objects.site_descriptor import SiteDescriptor
from src.shared.constants import (
    DEFAULT_CATEGORY,
    DESCRIPTION_FRAGMENT_MIN_LENGTH,
    DESCRIPTION_SUFFICIENT_LENGTH,
    KEYWORD_MAX_LENGTH,
    KEYWORD_MIN_LENGTH,
    MAX_IMAGES,
    MAX_KEYWORDS,
    PRICE_SCAN_MAX,
)
from src.shared.text_parsing import (
    clean_text,
    find_currency_amounts,
    parse_price,
    parse_rating,
    parse_review_count,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Selector Tables
# =============================================================================

TITLE_SELECTORS = (
    "#productTitle",
    '[data-automation-id="product-title"]',
    ".product-title",
    "h1",
)

DESCRIPTION_SELECTORS = (
    "#feature-bullets ul li span",
    ".a-unordered-list.a-vertical li span",
    "#productDescription p",
    ".product-description",
    ".aplus-v2 .celwidget",
)
DESCRIPTION_RAW_FALLBACK_SELECTOR = "#feature-bullets li"

PRICE_SELECTORS = (
    ".a-price .a-offscreen",
    ".a-price-whole",
    ".a-price-range .a-offscreen",
    "#priceblock_dealprice",
    "#priceblock_ourprice",
    ".a-price.a-text-price .a-offscreen",
    ".a-price-current .a-offscreen",
    'span[data-a-color="price"]',
    '.a-offscreen[aria-hidden="true"]',
)
PRICE_SCAN_SELECTOR = "span, div"

RATING_SELECTORS = (
    '[data-hook="average-star-rating"] .a-sr-only',
    ".a-icon-alt",
    ".reviewCountTextLinkedHistogram .a-sr-only",
    '[data-hook="rating-out-of-text"]',
    ".a-star-medium .a-sr-only",
    ".cr-widget-summary .a-sr-only",
)
# 텍스트가 비어 있는 아이콘 노드는 속성에 평점을 담고 있음
RATING_ATTRIBUTES = ("aria-label", "title")

REVIEW_COUNT_SELECTORS = (
    '[data-hook="total-review-count"]',
    "#acrCustomerReviewText",
    ".reviewCountTextLinkedHistogram",
    '[data-hook="total-review-count"] .a-sr-only',
    '.cr-widget-summary a[href*="reviews"]',
    'a[data-hook="see-all-reviews-link"]',
    'span[data-hook="total-review-count"]',
    '.a-link-normal[href*="#customerReviews"]',
)
REVIEW_SCAN_SELECTOR = "span, a"

IMAGE_SELECTORS = (
    "#landingImage",
    'img[data-a-image-name="landingImage"]',
    ".imgTagWrapper img",
    "#imageBlock img",
    ".a-dynamic-image",
    "img[data-old-hires]",
    'img[src*="images-amazon"]',
)
IMAGE_URL_ATTRIBUTES = ("data-src", "src", "data-old-hires")
IMAGE_DYNAMIC_ATTRIBUTE = "data-a-dynamic-image"
IMAGE_HOST_SUFFIXES = (
    "media-amazon.com",
    "images-amazon.com",
    "ssl-images-amazon.com",
)
# "._AC_SX300_SY300_." 같은 리사이즈 지시자 → 원본 해상도
IMAGE_RESIZE_SUFFIX = re.compile(r"\._[A-Z0-9,_]+_\.")

# 순서가 곧 우선순위 (첫 매치 채택)
CATEGORY_KEYWORDS: MappingProxyType = MappingProxyType(
    {
        "electronics": ("电子", "electronic", "phone", "computer"),
        "clothing": ("服装", "clothing", "shirt", "dress"),
        "home": ("家居", "home", "kitchen", "furniture"),
        "books": ("书", "book", "novel"),
        "sports": ("运动", "sport", "fitness", "gym"),
        "beauty": ("美容", "beauty", "cosmetic", "skincare"),
        "automotive": ("汽车", "automotive", "car", "vehicle"),
    }
)

_KEYWORD_STRIP = re.compile(r"[^\w\s\u4e00-\u9fff]")


# =============================================================================
# Helpers
# =============================================================================


def _first_parsed(
    document: MarkupDocument,
    selectors: tuple[str, ...],
    parser: Callable[[str], Any],
) -> Any:
    """각 선택자의 첫 노드 텍스트를 파서에 넣어 처음 나온 유효 값 반환"""
    for selector in selectors:
        node = document.select_one(selector)
        if node is None:
            continue
        value = parser(document.text(node))
        if value is not None:
            return value
    return None


def _is_allowed_image_host(url: str) -> bool:
    host = (urlparse(url).hostname or "").lower()
    return any(host == suffix or host.endswith(f".{suffix}") for suffix in IMAGE_HOST_SUFFIXES)


def _normalize_image_url(raw: str | None, site: SiteDescriptor) -> str | None:
    """상대/프로토콜 상대 URL을 절대 URL로 바꾸고, 허용 CDN이 아니면 None"""
    if not raw:
        return None
    url = raw.strip()
    if not url or url.startswith("data:"):
        return None

    if url.startswith("//"):
        url = f"https:{url}"
    elif url.startswith("/"):
        url = f"{site.base_url}{url}"

    if not url.startswith(("http://", "https://")):
        return None
    if not _is_allowed_image_host(url):
        return None

    return IMAGE_RESIZE_SUFFIX.sub(".", url, count=1)


def _dynamic_image_urls(value: str | None) -> list[str]:
    """data-a-dynamic-image JSON ({url: [w, h]}) 의 URL 키 목록"""
    if not value:
        return []
    try:
        mapping = json.loads(value)
    except (TypeError, ValueError):
        return []
    if not isinstance(mapping, dict):
        return []
    return [key for key in mapping if isinstance(key, str)]


def _image_candidates(document: MarkupDocument, node: Any) -> list[str]:
    candidates = [document.attr(node, name) for name in IMAGE_URL_ATTRIBUTES]
    candidates.extend(_dynamic_image_urls(document.attr(node, IMAGE_DYNAMIC_ATTRIBUTE)))
    return [candidate for candidate in candidates if candidate]


# =============================================================================
# Extractors
# =============================================================================


def extract_title(document: MarkupDocument) -> str | None:
    """상품명 추출 (공백 정리 후 첫 비어 있지 않은 텍스트)"""
    for selector in TITLE_SELECTORS:
        node = document.select_one(selector)
        text = clean_text(document.text(node))
        if text:
            return text
    return None


def extract_description(document: MarkupDocument) -> str | None:
    """
    상품 설명 추출

    각 선택자에서 10자 이하 조각을 버리고 줄바꿈으로 연결합니다.
    50자를 넘는 첫 결과를 채택하고, 없으면 처음 비어 있지 않은 결과,
    그것도 없으면 #feature-bullets li 원문을 길이와 무관하게 사용합니다.
    """
    first_non_empty: str | None = None

    for selector in DESCRIPTION_SELECTORS:
        fragments = [clean_text(document.text(node)) for node in document.select(selector)]
        joined = "\n".join(
            fragment for fragment in fragments if len(fragment) > DESCRIPTION_FRAGMENT_MIN_LENGTH
        )
        if len(joined) > DESCRIPTION_SUFFICIENT_LENGTH:
            return joined
        if joined and first_non_empty is None:
            first_non_empty = joined

    if first_non_empty:
        return first_non_empty

    raw = [
        clean_text(document.text(node))
        for node in document.select(DESCRIPTION_RAW_FALLBACK_SELECTOR)
    ]
    raw_joined = "\n".join(text for text in raw if text)
    return raw_joined or None


def extract_price(document: MarkupDocument) -> float | None:
    """
    가격 추출

    가격 선택자 실패 시 span/div 전체를 훑어 통화 금액을 찾습니다.
    스캔 결과는 오탐을 줄이기 위해 0 < price < 10000 만 허용합니다.
    """
    price = _first_parsed(document, PRICE_SELECTORS, parse_price)
    if price is not None:
        return price

    for node in document.select(PRICE_SCAN_SELECTOR):
        for amount in find_currency_amounts(document.text(node)):
            value = parse_price(amount)
            if value is not None and value < PRICE_SCAN_MAX:
                logger.debug(f"Price found by page scan: {amount!r}")
                return value

    return None


def extract_rating(document: MarkupDocument) -> float | None:
    """평점 추출 (노드 텍스트, 다음으로 aria-label/title 속성)"""
    for selector in RATING_SELECTORS:
        node = document.select_one(selector)
        if node is None:
            continue
        sources = [document.text(node)]
        sources.extend(document.attr(node, name) for name in RATING_ATTRIBUTES)
        for source in sources:
            rating = parse_rating(source)
            if rating is not None:
                return rating
    return None


def extract_review_count(document: MarkupDocument) -> int | None:
    """리뷰 수 추출 (선택자 실패 시 'review' 를 포함한 span/a 스캔)"""
    count = _first_parsed(document, REVIEW_COUNT_SELECTORS, parse_review_count)
    if count is not None:
        return count

    for node in document.select(REVIEW_SCAN_SELECTOR):
        text = document.text(node)
        if "review" not in text.lower():
            continue
        count = parse_review_count(text)
        if count is not None:
            return count

    return None


def extract_images(document: MarkupDocument, site: SiteDescriptor) -> list[str]:
    """
    상품 이미지 URL 추출

    Args:
        document: 파싱된 문서
        site: 상대 경로를 절대 URL로 바꿀 때 사용하는 스토어프론트

    Returns:
        원본 해상도 CDN URL 목록 (중복 제거, 최대 5개)
    """
    images: list[str] = []

    for selector in IMAGE_SELECTORS:
        for node in document.select(selector):
            # 노드당 첫 번째로 유효한 URL 하나만 사용
            for candidate in _image_candidates(document, node):
                url = _normalize_image_url(candidate, site)
                if url is None:
                    continue
                if url not in images:
                    images.append(url)
                break
            if len(images) >= MAX_IMAGES:
                return images

    return images


def infer_category(title: str | None, description: str | None) -> str:
    """
    상품명과 설명 키워드로 카테고리 추론 (기본값 general)

    키워드는 부분 문자열로 매치되므로 "smartphone" 은 electronics,
    "scarf" 는 automotive ("car") 가 됩니다.
    """
    text = f"{title or ''} {description or ''}".lower()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in text for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def extract_keywords(text: str | None) -> list[str]:
    """
    검색 키워드 추출

    소문자화 후 구두점을 공백으로 바꾸고 (한자는 유지) 3자 이상 20자 미만 토큰만
    등장 순서대로 중복 제거해 최대 10개까지 반환합니다.
    """
    if not text:
        return []

    tokens = _KEYWORD_STRIP.sub(" ", text.lower()).split()
    keywords: list[str] = []
    for token in tokens:
        if not KEYWORD_MIN_LENGTH <= len(token) < KEYWORD_MAX_LENGTH:
            continue
        if token in keywords:
            continue
        keywords.append(token)
        if len(keywords) >= MAX_KEYWORDS:
            break
    return keywords


# =============================================================================
# Aggregate
# =============================================================================


@dataclass(frozen=True)
class ExtractedFields:
    """한 페이지에서 추출된 필드 묶음 (누락 필드는 None)"""

    title: str | None = None
    description: str | None = None
    price: float | None = None
    rating: float | None = None
    reviews: int | None = None
    images: list[str] = field(default_factory=list)
    category: str = DEFAULT_CATEGORY
    keywords: list[str] = field(default_factory=list)

    @property
    def missing(self) -> list[str]:
        """값을 찾지 못한 필드 이름"""
        names = ("title", "description", "price", "rating", "reviews")
        missing = [name for name in names if getattr(self, name) is None]
        if not self.images:
            missing.append("images")
        return missing


def extract_fields(document: MarkupDocument, site: SiteDescriptor) -> ExtractedFields:
    """모든 필드 추출"""
    title = extract_title(document)
    description = extract_description(document)

    fields = ExtractedFields(
        title=title,
        description=description,
        price=extract_price(document),
        rating=extract_rating(document),
        reviews=extract_review_count(document),
        images=extract_images(document, site),
        category=infer_category(title, description),
        keywords=extract_keywords(f"{title or ''} {description or ''}"),
    )
    if fields.missing:
        logger.debug(f"Fields not found on page: {', '.join(fields.missing)}")
    return fields
