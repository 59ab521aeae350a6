"""
Product Domain Entities
=======================
상품 페이지 추출 결과 엔티티: ProductRecord

ProductRecord는 호출 1회당 한 번 생성되며 조립 이후 변경되지 않습니다 (frozen).
필드 범위 제약은 모델 레벨에서 강제됩니다.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from src.shared.constants import (
    DEFAULT_CATEGORY,
    KEYWORD_MAX_LENGTH,
    KEYWORD_MIN_LENGTH,
    MAX_IMAGES,
    MAX_KEYWORDS,
    PRICE_MAX,
    RATING_MAX,
    REVIEW_COUNT_MAX,
)

# 카테고리 닫힌 집합 (추론 순서와 동일, 마지막이 기본값)
PRODUCT_CATEGORIES = (
    "electronics",
    "clothing",
    "home",
    "books",
    "sports",
    "beauty",
    "automotive",
    DEFAULT_CATEGORY,
)


class ProductRecord(BaseModel):
    """
    상품 레코드 엔티티

    Best-effort 추출 결과입니다. 찾지 못한 필드는 None/기본값으로 남고
    레코드 자체는 항상 반환됩니다.

    Attributes:
        title: 상품명 (없으면 ASIN 포함 placeholder)
        description: 상품 설명 (없으면 고정 placeholder)
        keywords: 제목+설명에서 추출한 키워드 (최대 10개, 순서 유지)
        category: 추론된 카테고리 (기본 "general")
        target_market: 호출자가 전달한 타깃 마켓 (그대로 전달)
        price: 가격 (0 < price <= 50000)
        images: 절대 URL 이미지 목록 (최대 5개)
        reviews: 리뷰 수 (0 < reviews < 10,000,000)
        rating: 평점 (0-5)
        source_url: 호출자가 전달한 원본 URL
        identifier: ASIN
        currency: 스토어프론트 통화 코드
    """

    title: str = Field(..., min_length=1, description="상품명")
    description: str = Field(..., min_length=1, description="상품 설명")
    keywords: list[str] = Field(default_factory=list, max_length=MAX_KEYWORDS)
    category: str = Field(default=DEFAULT_CATEGORY, description="추론된 카테고리")
    target_market: str = Field(..., description="타깃 마켓 (pass-through)")
    price: Optional[float] = Field(default=None, gt=0, le=PRICE_MAX)
    images: list[str] = Field(default_factory=list, max_length=MAX_IMAGES)
    reviews: Optional[int] = Field(default=None, gt=0, lt=REVIEW_COUNT_MAX)
    rating: Optional[float] = Field(default=None, ge=0, le=RATING_MAX)
    source_url: str = Field(..., description="원본 상품 URL")
    identifier: str = Field(..., description="ASIN")
    currency: Optional[str] = Field(default=None, description="스토어프론트 통화")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
        "json_schema_extra": {
            "example": {
                "title": "Instant Pot Duo Plus 9-in-1 Electric Pressure Cooker",
                "description": "9-in-1 multi-use programmable cooker...",
                "keywords": ["instant", "pot", "duo", "plus", "electric"],
                "category": "electronics",
                "targetMarket": "US",
                "price": 69.99,
                "images": ["https://m.media-amazon.com/images/I/71T1770jSML.jpg"],
                "reviews": 15420,
                "rating": 4.6,
                "sourceUrl": "https://www.amazon.com/dp/B075CYMYK6",
                "identifier": "B075CYMYK6",
                "currency": "USD",
            }
        },
    }

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        """category는 닫힌 집합 중 하나여야 함"""
        if v not in PRODUCT_CATEGORIES:
            raise ValueError(f"category must be one of {PRODUCT_CATEGORIES}, got {v!r}")
        return v

    @field_validator("keywords")
    @classmethod
    def validate_keywords(cls, v: list[str]) -> list[str]:
        """키워드 길이 [3, 20), 중복 불가"""
        if len(set(v)) != len(v):
            raise ValueError("keywords must be unique")
        for keyword in v:
            if not KEYWORD_MIN_LENGTH <= len(keyword) < KEYWORD_MAX_LENGTH:
                raise ValueError(f"keyword length out of range: {keyword!r}")
        return v

    @field_validator("images")
    @classmethod
    def validate_images(cls, v: list[str]) -> list[str]:
        """이미지는 중복 없는 절대 URL"""
        if len(set(v)) != len(v):
            raise ValueError("images must be unique")
        for url in v:
            if not url.startswith(("https://", "http://")):
                raise ValueError(f"image URL must be absolute: {url!r}")
        return v

    def to_dict(self) -> dict[str, Any]:
        """경계 레이어용 camelCase 딕셔너리"""
        return self.model_dump(by_alias=True)
