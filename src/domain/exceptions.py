"""
Product Extractor 커스텀 예외 타입

상품 페이지 추출 파이프라인에서 발생하는 실패를 카테고리별로 구분합니다.
경계 레이어(HTTP 등)는 `category`와 `status_code`만 보고 응답을 결정할 수 있습니다.

카테고리:
    - NOT_FOUND_IDENTIFIER: URL에서 ASIN을 찾을 수 없음 (재시도 안 함)
    - UNSUPPORTED_SITE: 지원하지 않는 스토어프론트 (재시도 안 함)
    - NETWORK_FAILURE: 타임아웃/연결 실패/HTTP 에러 (재시도)
    - ANTI_BOT: 캡차/로봇 체크 페이지 감지 (설정에 따라 재시도)

사용 예:
    from src.domain.exceptions import AntiBotError, ProductExtractorError

    try:
        record = await scrape_product_with_retry(url, "US")
    except ProductExtractorError as e:
        logger.error(f"Extraction failed [{e.category.value}]: {e}")
        return e.to_dict(), e.status_code
"""

from enum import Enum
from typing import Any, Optional


class ErrorCategory(str, Enum):
    """실패 카테고리"""

    NOT_FOUND_IDENTIFIER = "NOT_FOUND_IDENTIFIER"
    UNSUPPORTED_SITE = "UNSUPPORTED_SITE"
    NETWORK_FAILURE = "NETWORK_FAILURE"
    ANTI_BOT = "ANTI_BOT"
    UNKNOWN = "UNKNOWN"


class ProductExtractorError(Exception):
    """
    Base exception for all product extraction errors.

    모든 커스텀 예외의 기본 클래스입니다.

    Attributes:
        url: 요청한 상품 URL
        attempts: 실패가 확정되기까지 시도한 횟수
    """

    category: ErrorCategory = ErrorCategory.UNKNOWN
    status_code: int = 500
    retryable: bool = False

    def __init__(self, message: str, url: Optional[str] = None, attempts: int = 0):
        super().__init__(message)
        self.message = message
        self.url = url
        self.attempts = attempts

    def to_dict(self) -> dict[str, Any]:
        """경계 레이어용 딕셔너리 변환"""
        return {
            "success": False,
            "error": self.message,
            "category": self.category.value,
            "attempts": self.attempts,
        }


class IdentifierNotFoundError(ProductExtractorError):
    """
    URL does not contain a recognizable catalog identifier (ASIN).

    호출자 입력 오류이므로 재시도하지 않습니다.
    """

    category = ErrorCategory.NOT_FOUND_IDENTIFIER
    status_code = 400


class UnsupportedSiteError(ProductExtractorError):
    """
    URL host is outside the storefront registry.

    Attributes:
        host: 요청 URL의 호스트
    """

    category = ErrorCategory.UNSUPPORTED_SITE
    status_code = 400

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        host: Optional[str] = None,
        attempts: int = 0,
    ):
        super().__init__(message, url=url, attempts=attempts)
        self.host = host


class NetworkFailureError(ProductExtractorError):
    """
    Timeout, connection-level failure, or non-2xx response during fetch.

    Attributes:
        http_status: HTTP 응답 상태 코드 (연결 실패/타임아웃이면 None)

    Example:
        raise NetworkFailureError(
            "Request timed out after 8.0s",
            url="https://www.amazon.com/dp/B075CYMYK6",
        )
    """

    category = ErrorCategory.NETWORK_FAILURE
    status_code = 500
    retryable = True

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        http_status: Optional[int] = None,
        attempts: int = 0,
    ):
        super().__init__(message, url=url, attempts=attempts)
        self.http_status = http_status

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["http_status"] = self.http_status
        return data


class AntiBotError(ProductExtractorError):
    """
    Anti-automation challenge page detected after fetch.

    Attributes:
        marker: 감지된 차단 지표 문자열 (예: "captcha")
        suggestion: 사용자에게 제안할 대체 입력 경로
    """

    category = ErrorCategory.ANTI_BOT
    status_code = 429
    retryable = True

    DEFAULT_SUGGESTION = "Enter the product title and description manually instead of a URL"

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        marker: Optional[str] = None,
        suggestion: Optional[str] = None,
        attempts: int = 0,
    ):
        super().__init__(message, url=url, attempts=attempts)
        self.marker = marker
        self.suggestion = suggestion or self.DEFAULT_SUGGESTION

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["suggestion"] = self.suggestion
        return data


class ConfigurationError(ProductExtractorError):
    """
    Configuration related errors.

    Attributes:
        config_key: 문제가 된 설정 키
        actual: 실제 값
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        actual: Optional[Any] = None,
    ):
        super().__init__(message)
        self.config_key = config_key
        self.actual = actual


def error_category(exc: BaseException) -> ErrorCategory:
    """예외를 카테고리로 매핑 (인식되지 않는 예외는 UNKNOWN)"""
    if isinstance(exc, ProductExtractorError):
        return exc.category
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ProductExtractorError",
    "IdentifierNotFoundError",
    "UnsupportedSiteError",
    "NetworkFailureError",
    "AntiBotError",
    "ConfigurationError",
    "error_category",
]
