"""
Markup Parser
=============
HTML 문자열을 MarkupDocument Protocol 구현체로 감싸고, 차단(캡차) 페이지를 감지합니다.

BeautifulSoup의 표준 라이브러리 파서("html.parser")를 사용하므로 lxml 없이 동작합니다.
"""

import logging
from collections.abc import Sequence
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import Tag

from src.domain.exceptions import AntiBotError
from src.domain.interfaces.markup import MarkupDocument

logger = logging.getLogger(__name__)

# <title> 에서 검사 (대소문자 구분)
TITLE_CHALLENGE_MARKERS = ("Robot Check",)

# 본문에서 검사
BODY_CHALLENGE_MARKERS = (
    "captcha",
    "Enter the characters you see below",
    "Sorry, we just need to make sure you're not a robot",
    "Type the characters you see in this image",
    "api-services-support@amazon.com",
)


class SoupDocument:
    """BeautifulSoup 기반 MarkupDocument 구현체"""

    def __init__(self, html: str):
        self._soup = BeautifulSoup(html or "", "html.parser")

    def select(self, pattern: str) -> Sequence[Tag]:
        try:
            return self._soup.select(pattern)
        except Exception as e:
            # soupsieve가 지원하지 않는 선택자는 매치 없음으로 취급
            logger.debug(f"Selector rejected: {pattern!r} ({e})")
            return []

    def select_one(self, pattern: str) -> Tag | None:
        try:
            return self._soup.select_one(pattern)
        except Exception as e:
            logger.debug(f"Selector rejected: {pattern!r} ({e})")
            return None

    def text(self, node: Any) -> str:
        if node is None:
            return ""
        return node.get_text(" ", strip=True)

    def attr(self, node: Any, name: str) -> str | None:
        if node is None:
            return None
        value = node.get(name)
        if value is None:
            return None
        # class 같은 다중 값 속성은 리스트로 반환됨
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def page_title(self) -> str:
        title = self._soup.title
        if title is None:
            return ""
        return title.get_text(strip=True)


def parse_markup(html: str) -> SoupDocument:
    """HTML 문자열 파싱"""
    return SoupDocument(html)


def detect_challenge(document: MarkupDocument, html: str) -> str | None:
    """
    차단 페이지 감지

    Args:
        document: 파싱된 문서 (<title> 검사)
        html: 원본 HTML (본문 지표 검사)

    Returns:
        감지된 지표 문자열, 정상 페이지면 None
    """
    title = document.page_title()
    for marker in TITLE_CHALLENGE_MARKERS:
        if marker in title:
            return marker

    for marker in BODY_CHALLENGE_MARKERS:
        if marker in (html or ""):
            return marker

    return None


def ensure_not_challenge(document: MarkupDocument, html: str, url: str | None = None) -> None:
    """
    차단 페이지이면 AntiBotError 발생

    Raises:
        AntiBotError: 캡차/로봇 체크 지표가 감지된 경우
    """
    marker = detect_challenge(document, html)
    if marker is not None:
        logger.warning(f"Anti-bot challenge detected ({marker!r}): {url}")
        raise AntiBotError(
            "Marketplace returned an anti-bot challenge page",
            url=url,
            marker=marker,
        )
