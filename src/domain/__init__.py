"""
Domain Layer
============
Clean Architecture의 Entities Layer (Enterprise Business Rules)

이 패키지는 HTTP/HTML 라이브러리 없이 순수 도메인 모델만 포함합니다.

구조:
- entities/: 핵심 엔티티 (ProductRecord)
- value_objects/: 값 객체 (SiteDescriptor, 스토어프론트 레지스트리)
- interfaces/: 의존성 역전을 위한 Protocol (MarkupDocument)
- exceptions: 실패 카테고리별 예외

원칙:
- 외부 의존성 최소화 (httpx, BeautifulSoup 등 금지, pydantic만 허용)
- 비즈니스 로직의 핵심만 포함
"""

from src.domain.entities.product import PRODUCT_CATEGORIES, ProductRecord
from src.domain.exceptions import (
    AntiBotError,
    ConfigurationError,
    ErrorCategory,
    IdentifierNotFoundError,
    NetworkFailureError,
    ProductExtractorError,
    UnsupportedSiteError,
    error_category,
)
from src.domain.interfaces.markup import MarkupDocument
from src.domain.value_objects.site_descriptor import STOREFRONTS, SiteDescriptor

__all__ = [
    # Entities
    "ProductRecord",
    "PRODUCT_CATEGORIES",
    # Value objects
    "SiteDescriptor",
    "STOREFRONTS",
    # Interfaces
    "MarkupDocument",
    # Exceptions
    "ErrorCategory",
    "ProductExtractorError",
    "IdentifierNotFoundError",
    "UnsupportedSiteError",
    "NetworkFailureError",
    "AntiBotError",
    "ConfigurationError",
    "error_category",
]
