import os
from pathlib import Path

import httpx
import pytest
from dotenv import load_dotenv

from src.domain.value_objects.site_descriptor import STOREFRONTS
from src.infrastructure.config.config_manager import ScraperConfig, reset_config
from src.tools.scrapers.markup_parser import parse_markup

PAGES_DIR = Path(__file__).parent / "fixtures" / "pages"


def pytest_configure(config):
    """테스트 시작 전 환경 설정 로드"""
    project_root = Path(__file__).parent.parent

    main_env_path = project_root / ".env"
    if main_env_path.exists():
        load_dotenv(main_env_path, override=False)
        print(f"\n[conftest] Loaded base environment from: {main_env_path}")

    env_file = os.environ.get("ENV_FILE", ".env.test")
    env_path = project_root / env_file

    if env_path.exists():
        load_dotenv(env_path, override=True)
        print(f"[conftest] Applied test overrides from: {env_path}")
    else:
        print(f"[conftest] No {env_file} found, using base environment only")


def load_page(name: str) -> str:
    """tests/fixtures/pages 의 HTML 로드"""
    return (PAGES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def _reset_config_singleton():
    """테스트 간 설정 싱글톤 격리"""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clean_scraper_env(monkeypatch):
    """SCRAPER_* 환경변수 제거"""
    for key in list(os.environ):
        if key.startswith("SCRAPER_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def us_site():
    return STOREFRONTS["amazon.com"]


@pytest.fixture
def de_site():
    return STOREFRONTS["amazon.de"]


@pytest.fixture
def full_page_html():
    return load_page("product_full.html")


@pytest.fixture
def title_only_html():
    return load_page("product_title_only.html")


@pytest.fixture
def legacy_de_html():
    return load_page("product_legacy_de.html")


@pytest.fixture
def captcha_html():
    return load_page("captcha.html")


@pytest.fixture
def full_page_document(full_page_html):
    return parse_markup(full_page_html)


@pytest.fixture
def fast_config(tmp_path):
    """재시도 2회, 대기 0.5~1.5초 (sleep은 테스트에서 주입)"""
    return ScraperConfig(config_path=tmp_path, max_attempts=2, timeout_seconds=2.0)


@pytest.fixture
def page_transport():
    """
    고정 응답 MockTransport 팩토리

    Usage:
        transport, calls = page_transport([(200, html)])
    응답 목록을 순서대로 돌려주며 마지막 응답은 이후 요청에도 반복됩니다.
    """

    def factory(responses: list[tuple[int, str]]):
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            status, body = responses[min(len(calls), len(responses)) - 1]
            return httpx.Response(status, text=body)

        return httpx.MockTransport(handler), calls

    return factory
