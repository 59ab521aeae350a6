"""
Request Dispatcher
==================
브라우저처럼 보이는 헤더로 상품 페이지 HTML을 가져옵니다.

## 특징
- 요청마다 User-Agent 로테이션 (fake_useragent, 실패 시 정적 풀)
- 스토어프론트 로케일에 맞춘 Accept-Language
- 호스트 실행 제한(10초) 안에 끝나도록 요청 타임아웃 8초
- 호출마다 새 httpx.AsyncClient (쿠키/세션 재사용 없음)

## 에러
- 타임아웃, 연결 실패, 비 2xx 응답 → NetworkFailureError
"""

import asyncio
import logging
import random

import httpx
from fake_useragent import UserAgent

from src.domain.exceptions import NetworkFailureError
from src.domain.value_objects.site_descriptor import SiteDescriptor
from src.shared.constants import REQUEST_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

# fake_useragent 데이터를 읽지 못할 때 사용하는 정적 풀
FALLBACK_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Edge/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)

DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.9"

_user_agent_source: UserAgent | None = None


def _get_user_agent_source() -> UserAgent | None:
    """UserAgent 인스턴스 지연 생성 (데이터 로드 실패 시 None)"""
    global _user_agent_source
    if _user_agent_source is None:
        try:
            _user_agent_source = UserAgent(browsers=["Chrome", "Firefox", "Edge"])
        except Exception as e:
            logger.warning(f"fake_useragent unavailable, using static pool: {e}")
            return None
    return _user_agent_source


def get_random_user_agent() -> str:
    """랜덤 User-Agent 반환"""
    source = _get_user_agent_source()
    if source is not None:
        try:
            return source.random
        except Exception as e:
            logger.debug(f"fake_useragent lookup failed: {e}")
    return random.choice(FALLBACK_USER_AGENTS)


def build_headers(site: SiteDescriptor | None = None) -> dict[str, str]:
    """
    브라우저 유사 요청 헤더 생성

    Args:
        site: 대상 스토어프론트 (Accept-Language 결정). None이면 en-US

    Returns:
        요청 헤더 딕셔너리 (User-Agent는 호출마다 새로 선택)
    """
    return {
        "User-Agent": get_random_user_agent(),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
        "Accept-Language": site.accept_language if site else DEFAULT_ACCEPT_LANGUAGE,
        "Accept-Encoding": "gzip, deflate",
        "DNT": "1",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
        "Sec-Fetch-Dest": "document",
        "Sec-Fetch-Mode": "navigate",
        "Sec-Fetch-Site": "none",
        "Sec-Fetch-User": "?1",
        "Cache-Control": "max-age=0",
    }


async def fetch_page(
    url: str,
    *,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
    headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """
    상품 페이지 HTML 가져오기

    Args:
        url: 정규 상품 URL
        timeout: 요청 전체 타임아웃 (초)
        headers: 요청 헤더 (None이면 build_headers())
        transport: 테스트용 httpx 트랜스포트 주입

    Returns:
        응답 본문 텍스트

    Raises:
        NetworkFailureError: 타임아웃, 전송 오류, 비 2xx 상태
    """
    request_headers = headers if headers is not None else build_headers()

    try:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            transport=transport,
        ) as client:
            # httpx 타임아웃은 단계별이므로 전체 요청 시간을 따로 제한
            response = await asyncio.wait_for(
                client.get(url, headers=request_headers), timeout=timeout
            )
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        logger.warning(f"Request timed out after {timeout}s: {url}")
        raise NetworkFailureError(f"Request timed out after {timeout}s", url=url) from e
    except httpx.HTTPError as e:
        logger.warning(f"Request failed: {url} ({type(e).__name__}: {e})")
        raise NetworkFailureError(f"Request failed: {e}", url=url) from e

    if not response.is_success:
        logger.warning(f"Unexpected HTTP status {response.status_code}: {url}")
        raise NetworkFailureError(
            f"HTTP {response.status_code}: {response.reason_phrase}",
            url=url,
            http_status=response.status_code,
        )

    logger.debug(f"Fetched {len(response.text)} chars from {url}")
    return response.text
