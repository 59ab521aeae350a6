"""
Domain Entities
===============
핵심 비즈니스 엔티티 정의

이 패키지의 모든 엔티티는:
- Pydantic BaseModel 또는 dataclass 기반
- 외부 의존성 없음
- 불변성 권장
"""

from src.domain.entities.product import PRODUCT_CATEGORIES, ProductRecord

__all__ = [
    "ProductRecord",
    "PRODUCT_CATEGORIES",
]
