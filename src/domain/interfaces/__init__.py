"""
Domain Interfaces (Protocols)
=============================
의존성 역전을 위한 추상 인터페이스 정의

필드 추출기(Application 성격)는 BeautifulSoup 같은 구현체를 직접 참조하지 않고,
이 Protocol을 통해 간접적으로 의존합니다.

사용 예:
    from src.domain.interfaces import MarkupDocument

    def extract_title(document: MarkupDocument) -> str | None:
        node = document.select_one("#productTitle")
        ...
"""

from src.domain.interfaces.markup import MarkupDocument

__all__ = [
    "MarkupDocument",
]
