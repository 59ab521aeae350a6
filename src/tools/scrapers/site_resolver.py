"""
Identifier & Site Resolver
==========================
상품 URL에서 ASIN과 스토어프론트를 식별합니다.

## 지원 URL 패턴
```
https://www.amazon.com/dp/B075CYMYK6
https://www.amazon.com/Instant-Pot-Duo/dp/B075CYMYK6/ref=sr_1_1?keywords=...
https://www.amazon.co.uk/gp/product/B075CYMYK6
https://www.amazon.de/product/B075CYMYK6
https://www.amazon.co.jp/ASIN/B075CYMYK6
```

## 에러 코드
- IdentifierNotFoundError: ASIN 없음 → 호출자 입력 오류 (재시도 안 함)
- UnsupportedSiteError: 레지스트리에 없는 호스트 (재시도 안 함)
"""

import logging
import re
from urllib.parse import urlparse

from src.domain.exceptions import IdentifierNotFoundError, UnsupportedSiteError
from src.domain.value_objects.site_descriptor import STOREFRONTS, SiteDescriptor

logger = logging.getLogger(__name__)

# ASIN 추출 패턴 (우선순위 순). ASIN은 정확히 10자리 영숫자
IDENTIFIER_PATTERNS = (
    re.compile(r"/dp/([A-Za-z0-9]{10})(?![A-Za-z0-9])"),
    re.compile(r"/product/([A-Za-z0-9]{10})(?![A-Za-z0-9])"),
    re.compile(r"/gp/product/([A-Za-z0-9]{10})(?![A-Za-z0-9])"),
    re.compile(r"/ASIN/([A-Za-z0-9]{10})(?![A-Za-z0-9])"),
)


def extract_identifier(url: str) -> str:
    """
    URL에서 ASIN 추출

    Args:
        url: 상품 URL

    Returns:
        대문자 ASIN (예: "B075CYMYK6")

    Raises:
        IdentifierNotFoundError: 어떤 패턴에도 매치되지 않을 때
    """
    for pattern in IDENTIFIER_PATTERNS:
        match = pattern.search(url or "")
        if match:
            return match.group(1).upper()

    raise IdentifierNotFoundError("Could not extract a product identifier (ASIN) from URL", url=url)


def _hostname(url: str) -> str:
    """스킴 없는 URL도 호스트를 읽을 수 있도록 보정"""
    candidate = url.strip()
    if "://" not in candidate:
        candidate = f"https://{candidate.lstrip('/')}"
    return (urlparse(candidate).hostname or "").lower()


def resolve_site(url: str) -> SiteDescriptor:
    """
    URL 호스트로 스토어프론트 조회

    호스트가 도메인과 같거나 서브도메인(www., smile. 등)인 경우 매치됩니다.
    여러 도메인이 매치되면 가장 긴 도메인을 선택합니다.

    Raises:
        UnsupportedSiteError: 레지스트리에 없는 호스트
    """
    host = _hostname(url or "")

    matches = [
        domain for domain in STOREFRONTS if host == domain or host.endswith(f".{domain}")
    ]
    if not matches:
        raise UnsupportedSiteError(f"Unsupported storefront: {host or url!r}", url=url, host=host)

    domain = max(matches, key=len)
    return STOREFRONTS[domain]


def build_product_url(site: SiteDescriptor, identifier: str) -> str:
    """추적 파라미터를 제거한 정규 상품 URL"""
    return f"{site.base_url}/dp/{identifier}"
