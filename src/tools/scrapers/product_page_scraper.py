"""
Product Page Scraper
====================
상품 URL 하나를 받아 ProductRecord를 돌려주는 파이프라인 + 재시도 오케스트레이터

## 파이프라인 (1회 시도)
```
URL ─► resolve (ASIN, 스토어프론트)
    ─► fetch (httpx, 8초 타임아웃)
    ─► parse (BeautifulSoup)
    ─► challenge check (캡차 → AntiBotError)
    ─► extract (필드별 전략 목록)
    ─► assemble (ProductRecord)
```

## 재시도 정책
- IdentifierNotFoundError / UnsupportedSiteError: 재시도 없이 즉시 실패
- NetworkFailureError: 재시도
- AntiBotError: config.retry_on_antibot 이 True일 때만 재시도
- 시도 사이 random.uniform(0.5, 1.5)초 대기
- 그 외 예외는 그대로 전파 (경계에서 UNKNOWN 처리)

## 사용 예
```python
from src.tools.scrapers import scrape_product_with_retry

record = await scrape_product_with_retry(
    "https://www.amazon.com/dp/B075CYMYK6", "US"
)
print(record.to_dict())
```
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable

import httpx

from src.domain.entities.product import ProductRecord
from src.domain.exceptions import AntiBotError, ProductExtractorError
from src.domain.value_objects.site_descriptor import SiteDescriptor
from src.infrastructure.config.config_manager import ScraperConfig, get_config
from src.shared.constants import DESCRIPTION_PLACEHOLDER, TITLE_PLACEHOLDER
from src.tools.scrapers.field_extractors import ExtractedFields, extract_fields
from src.tools.scrapers.markup_parser import ensure_not_challenge, parse_markup
from src.tools.scrapers.request_dispatcher import build_headers, fetch_page
from src.tools.scrapers.site_resolver import (
    build_product_url,
    extract_identifier,
    resolve_site,
)

logger = logging.getLogger(__name__)


def assemble_record(
    fields: ExtractedFields,
    *,
    url: str,
    target_market: str,
    identifier: str,
    site: SiteDescriptor,
) -> ProductRecord:
    """추출 필드를 ProductRecord로 조립 (제목/설명 누락 시 placeholder)"""
    return ProductRecord(
        title=fields.title or TITLE_PLACEHOLDER.format(identifier=identifier),
        description=fields.description or DESCRIPTION_PLACEHOLDER,
        keywords=fields.keywords,
        category=fields.category,
        target_market=target_market,
        price=fields.price,
        images=fields.images,
        reviews=fields.reviews,
        rating=fields.rating,
        source_url=url,
        identifier=identifier,
        currency=site.currency,
    )


async def scrape_product(
    url: str,
    target_market: str,
    *,
    config: ScraperConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ProductRecord:
    """
    상품 페이지 1회 추출 (재시도 없음)

    Args:
        url: 호출자가 전달한 상품 URL
        target_market: 타깃 마켓 (레코드에 그대로 전달)
        config: 스크래퍼 설정 (타임아웃)
        transport: 테스트용 httpx 트랜스포트

    Returns:
        ProductRecord

    Raises:
        IdentifierNotFoundError, UnsupportedSiteError, NetworkFailureError, AntiBotError
    """
    identifier = extract_identifier(url)
    site = resolve_site(url)
    product_url = build_product_url(site, identifier)

    logger.info(f"Scraping {identifier} from {site.domain}")

    html = await fetch_page(
        product_url,
        timeout=config.timeout_seconds,
        headers=build_headers(site),
        transport=transport,
    )

    document = parse_markup(html)
    ensure_not_challenge(document, html, url=product_url)

    fields = extract_fields(document, site)
    record = assemble_record(
        fields,
        url=url,
        target_market=target_market,
        identifier=identifier,
        site=site,
    )

    logger.info(f"Scraped {identifier}: {record.title[:50]}")
    return record


def _should_retry(error: ProductExtractorError, config: ScraperConfig) -> bool:
    if isinstance(error, AntiBotError):
        return config.retry_on_antibot
    return error.retryable


async def scrape_product_with_retry(
    url: str,
    target_market: str,
    *,
    config: ScraperConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> ProductRecord:
    """
    재시도 포함 상품 페이지 추출

    Args:
        url: 상품 URL
        target_market: 타깃 마켓
        config: 스크래퍼 설정 (None이면 get_config())
        transport: 테스트용 httpx 트랜스포트
        sleep: 대기 함수 (테스트에서 주입)

    Returns:
        ProductRecord

    Raises:
        ProductExtractorError: 재시도 불가 실패 또는 모든 시도 실패
            (attempts 속성에 시도 횟수 기록)
    """
    config = config or get_config()
    max_attempts = max(1, config.max_attempts)

    for attempt in range(1, max_attempts + 1):
        try:
            return await scrape_product(url, target_market, config=config, transport=transport)
        except ProductExtractorError as e:
            e.attempts = attempt
            if not _should_retry(e, config):
                raise
            if attempt >= max_attempts:
                logger.error(
                    f"Scrape failed after {attempt} attempts [{e.category.value}]: {e.message}"
                )
                raise
            logger.warning(
                f"Scrape attempt {attempt}/{max_attempts} failed [{e.category.value}]: {e.message}"
            )

        delay = random.uniform(config.jitter_min_seconds, config.jitter_max_seconds)
        logger.debug(f"Retrying in {delay:.2f}s")
        await sleep(delay)

    # max_attempts >= 1 이므로 도달하지 않음
    raise RuntimeError("retry loop exited without result")


class ProductPageScraper:
    """
    설정을 보유한 스크래퍼 파사드

    Example:
        scraper = ProductPageScraper(ScraperConfig.from_env_validated())
        record = await scraper.scrape(url, "US")
    """

    def __init__(
        self,
        config: ScraperConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or get_config()
        self._transport = transport

    async def scrape(self, url: str, target_market: str) -> ProductRecord:
        """재시도 포함 추출"""
        return await scrape_product_with_retry(
            url,
            target_market,
            config=self.config,
            transport=self._transport,
        )
