"""
Storefront Value Objects
========================
스토어프론트(지역별 Amazon 카탈로그) 식별을 위한 불변 값 객체.

레지스트리는 프로세스 시작 시 한 번 로드되며 런타임에 변경되지 않습니다.
"""

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class SiteDescriptor:
    """Storefront descriptor (domain, currency, locale).

    Attributes:
        domain: 등록 도메인 (예: "amazon.co.uk")
        currency: ISO 4217 통화 코드 (예: "GBP")
        locale: BCP 47 로케일 (예: "en-GB")
    """

    domain: str
    currency: str
    locale: str

    @property
    def base_url(self) -> str:
        return f"https://www.{self.domain}"

    @property
    def accept_language(self) -> str:
        """Accept-Language 헤더 값 (로케일 우선, 영어 fallback)"""
        language = self.locale.split("-")[0]
        if language == "en":
            return f"{self.locale},en;q=0.9"
        return f"{self.locale},{language};q=0.9,en;q=0.8"


STOREFRONTS: MappingProxyType = MappingProxyType(
    {
        "amazon.com": SiteDescriptor("amazon.com", "USD", "en-US"),
        "amazon.co.uk": SiteDescriptor("amazon.co.uk", "GBP", "en-GB"),
        "amazon.de": SiteDescriptor("amazon.de", "EUR", "de-DE"),
        "amazon.fr": SiteDescriptor("amazon.fr", "EUR", "fr-FR"),
        "amazon.co.jp": SiteDescriptor("amazon.co.jp", "JPY", "ja-JP"),
        "amazon.ca": SiteDescriptor("amazon.ca", "CAD", "en-CA"),
        "amazon.com.au": SiteDescriptor("amazon.com.au", "AUD", "en-AU"),
        "amazon.in": SiteDescriptor("amazon.in", "INR", "en-IN"),
    }
)
