"""
Text & Numeric Parsing Helpers
==============================
상품 페이지에서 읽은 원시 텍스트를 숫자로 변환하는 순수 함수 모음

가격/평점/리뷰 수는 스토어프론트마다 표기 방식이 다릅니다:
    - "$1,234.56"            (en-US)
    - "1.234,56 €"           (de-DE, fr-FR)
    - "4,5 von 5 Sternen"    (de-DE)
    - "￥1,980"              (ja-JP)

모든 함수는 파싱 실패 또는 범위 밖 값에 대해 None을 반환하며 예외를 던지지 않습니다.
"""

import re

from src.shared.constants import PRICE_MAX, RATING_MAX, REVIEW_COUNT_MAX

# 통화 기호가 붙은 금액 (앞/뒤 기호 모두 허용)
CURRENCY_AMOUNT_PATTERN = re.compile(r"(?:[$£€¥￥₹]\s?\d[\d.,]*|\d[\d.,]*\s?[€£])")

_LEADING_DECIMAL = re.compile(r"\d*\.?\d+")

# 콤마가 하나뿐이고 뒤에 숫자 1~2개로 끝나면 소수점 콤마 ("12,99", "1.234,56")
_DECIMAL_COMMA = re.compile(r"^[\d.]*,\d{1,2}$")

_RATING_NUMBER = r"(\d+(?:[.,]\d+)?)"
RATING_PATTERNS = (
    re.compile(_RATING_NUMBER + r"\s*out\s*of\s*5", re.IGNORECASE),
    re.compile(_RATING_NUMBER + r"\s*stars?", re.IGNORECASE),
    re.compile(_RATING_NUMBER),
)

# "1,234" / "1.234" (천 단위 구분) 또는 구분자 없는 정수
_GROUPED_NUMBER = r"(?<![\d.,])(\d{1,3}(?:[,.]\d{3})+|\d+)"
REVIEW_COUNT_PATTERNS = (
    re.compile(_GROUPED_NUMBER + r"\s*(?:reviews?|ratings?|customer)", re.IGNORECASE),
    re.compile(_GROUPED_NUMBER),
)


def clean_text(text: str | None) -> str:
    """공백/개행을 단일 공백으로 정리"""
    if not text:
        return ""
    return " ".join(text.split())


def parse_price(price_text: str | None) -> float | None:
    """
    가격 문자열 파싱

    Steps:
        1. 숫자, '.', ',' 이외 문자 제거
        2. 콤마가 하나이고 뒤에 숫자 1~2개로 끝나면 소수점으로 취급 ("12,99" -> "12.99")
        3. 그 외 콤마는 모두 자릿수 구분자로 제거 ("1,234" / 인도식 "1,23,456")
        4. '.'가 여러 개면 마지막 것만 유지
        5. 0 < price <= 50000 인 경우만 허용

    Examples:
        >>> parse_price("$1,234.56")
        1234.56
        >>> parse_price("N/A") is None
        True
    """
    if not price_text:
        return None

    cleaned = re.sub(r"[^\d.,]", "", price_text)
    if _DECIMAL_COMMA.match(cleaned):
        cleaned = cleaned.replace(",", ".")
    else:
        cleaned = cleaned.replace(",", "")
    cleaned = re.sub(r"\.(?=.*\.)", "", cleaned)

    match = _LEADING_DECIMAL.match(cleaned)
    if not match:
        return None

    try:
        price = float(match.group(0))
    except ValueError:
        return None

    if price <= 0 or price > PRICE_MAX:
        return None
    return price


def parse_rating(rating_text: str | None) -> float | None:
    """
    평점 문자열 파싱

    "4.5 out of 5 stars" -> 4.5, "4.5 stars" -> 4.5, "4.5" -> 4.5
    패턴 순서대로 첫 매치만 검사하며, 0 <= rating <= 5 인 값만 허용합니다.
    """
    if not rating_text:
        return None

    for pattern in RATING_PATTERNS:
        match = pattern.search(rating_text)
        if not match:
            continue
        try:
            rating = float(match.group(1).replace(",", "."))
        except ValueError:
            continue
        if 0 <= rating <= RATING_MAX:
            return rating

    return None


def parse_review_count(review_text: str | None) -> int | None:
    """
    리뷰 수 문자열 파싱

    "1,234 ratings" -> 1234, "89 customer reviews" -> 89, "no reviews" -> None
    0 < count < 10,000,000 인 값만 허용합니다.
    """
    if not review_text:
        return None

    for pattern in REVIEW_COUNT_PATTERNS:
        match = pattern.search(review_text)
        if not match:
            continue
        try:
            count = int(re.sub(r"[,.]", "", match.group(1)))
        except ValueError:
            # 정수 변환 자릿수 한도 초과
            continue
        if 0 < count < REVIEW_COUNT_MAX:
            return count

    return None


def find_currency_amounts(text: str | None) -> list[str]:
    """텍스트에서 통화 금액 후보 문자열 추출"""
    if not text:
        return []
    return CURRENCY_AMOUNT_PATTERN.findall(text)
