"""
Markup Protocol
===============
파싱된 HTML 트리에 대한 좁은 추상 인터페이스

필드 추출기는 이 Protocol에만 의존합니다. "패턴으로 선택", "텍스트 읽기",
"속성 읽기"를 제공하는 DOM 라이브러리라면 추출 로직 수정 없이 교체 가능합니다.

구현체:
- SoupDocument (src/tools/scrapers/markup_parser.py)
"""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MarkupDocument(Protocol):
    """
    Markup Document Protocol

    노드 타입은 구현체마다 다르므로 불투명(Any)하게 다룹니다.
    모든 메서드는 매치가 없을 때 예외 대신 빈 값을 반환해야 합니다.

    Methods:
        select: 패턴에 매치되는 모든 노드 (문서 순서)
        select_one: 첫 번째 매치 노드 또는 None
        text: 노드의 텍스트 내용 (하위 노드 포함)
        attr: 노드 속성 값 또는 None
        page_title: <title> 텍스트
    """

    def select(self, pattern: str) -> Sequence[Any]: ...

    def select_one(self, pattern: str) -> Any | None: ...

    def text(self, node: Any) -> str: ...

    def attr(self, node: Any, name: str) -> str | None: ...

    def page_title(self) -> str: ...
