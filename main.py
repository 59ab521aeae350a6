"""
Marketplace Product Extractor
메인 진입점

Amazon 상품 URL 하나를 받아 상품 레코드(JSON)를 출력합니다.
"""

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

from src.domain.exceptions import (
    ConfigurationError,
    ErrorCategory,
    IdentifierNotFoundError,
    ProductExtractorError,
    UnsupportedSiteError,
)
from src.infrastructure.config.config_manager import ScraperConfig
from src.monitoring.logger import setup_logging
from src.tools.scrapers.product_page_scraper import scrape_product_with_retry

# 환경 변수 로드
load_dotenv()

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INPUT_ERROR = 2

INPUT_ERRORS = (IdentifierNotFoundError, UnsupportedSiteError, ConfigurationError)


def build_config(args: argparse.Namespace) -> ScraperConfig:
    """환경/파일 설정에 CLI 인자를 덮어쓴 뒤 검증"""
    config = ScraperConfig.from_env()

    if args.max_attempts is not None:
        config.max_attempts = args.max_attempts
    if args.timeout is not None:
        config.timeout_seconds = args.timeout
    if args.no_retry_antibot:
        config.retry_on_antibot = False
    if args.log_level:
        config.log_level = args.log_level.upper()

    errors = config.validate()
    if errors:
        raise ConfigurationError("설정 검증 실패:\n" + "\n".join(f"  - {e}" for e in errors))
    return config


async def run_extraction(url: str, market: str, config: ScraperConfig) -> dict:
    """상품 추출 실행 후 camelCase 딕셔너리 반환"""
    record = await scrape_product_with_retry(url, market, config=config)
    return {"success": True, "data": record.to_dict()}


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def main(argv: list[str] | None = None) -> int:
    """메인 함수"""
    parser = argparse.ArgumentParser(
        description="Marketplace product-page extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Extract a product for the US market
  python main.py "https://www.amazon.com/dp/B075CYMYK6" --market US

  # Single attempt with a shorter timeout
  python main.py "https://www.amazon.de/dp/B075CYMYK6" --market DE --max-attempts 1 --timeout 5

  # Fail immediately on captcha pages
  python main.py "https://www.amazon.co.uk/dp/B075CYMYK6" --no-retry-antibot
        """,
    )

    parser.add_argument("url", help="Product page URL")
    parser.add_argument("--market", default="US", help="Target market (default: US)")
    parser.add_argument("--max-attempts", type=int, help="Maximum fetch attempts")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument(
        "--no-retry-antibot",
        action="store_true",
        help="Do not retry when an anti-bot challenge page is returned",
    )
    parser.add_argument("--log-level", type=str, help="Log level (default: SCRAPER_LOG_LEVEL or INFO)")

    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ConfigurationError as e:
        setup_logging("INFO")
        _print_json(e.to_dict())
        return EXIT_INPUT_ERROR

    setup_logging(config.log_level)
    logger = logging.getLogger("src.main")

    try:
        result = asyncio.run(run_extraction(args.url, args.market, config))
    except INPUT_ERRORS as e:
        _print_json(e.to_dict())
        return EXIT_INPUT_ERROR
    except ProductExtractorError as e:
        _print_json(e.to_dict())
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return EXIT_FAILURE
    except Exception as e:
        logger.error(f"Extraction failed: {e}", exc_info=True)
        _print_json(
            {
                "success": False,
                "error": str(e),
                "category": ErrorCategory.UNKNOWN.value,
                "attempts": 0,
            }
        )
        return EXIT_FAILURE

    _print_json(result)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
