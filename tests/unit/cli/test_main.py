"""
CLI 진입점 테스트

테스트 대상: main.py
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

import main
from src.domain.entities.product import ProductRecord
from src.domain.exceptions import AntiBotError, IdentifierNotFoundError, NetworkFailureError

URL = "https://www.amazon.com/dp/B075CYMYK6"


@pytest.fixture
def record():
    return ProductRecord(
        title="Instant Pot Duo",
        description="Pressure cooker",
        keywords=["instant", "pot"],
        target_market="US",
        price=89.99,
        source_url=URL,
        identifier="B075CYMYK6",
        currency="USD",
    )


@pytest.fixture(autouse=True)
def _no_logging_setup(clean_scraper_env):
    """패키지 로거 설정 변경 방지"""
    with patch.object(main, "setup_logging") as mock_setup:
        yield mock_setup


def _run(argv, capsys):
    code = main.main(argv)
    return code, json.loads(capsys.readouterr().out)


class TestMainSuccess:
    def test_prints_record(self, record, capsys):
        with patch.object(main, "scrape_product_with_retry", AsyncMock(return_value=record)):
            code, output = _run([URL, "--market", "US"], capsys)

        assert code == main.EXIT_OK
        assert output["success"] is True
        assert output["data"]["targetMarket"] == "US"
        assert output["data"]["price"] == 89.99

    def test_cli_overrides_config(self, record, capsys):
        mock_scrape = AsyncMock(return_value=record)
        with patch.object(main, "scrape_product_with_retry", mock_scrape):
            _run([URL, "--max-attempts", "1", "--timeout", "5", "--no-retry-antibot"], capsys)

        config = mock_scrape.await_args.kwargs["config"]
        assert config.max_attempts == 1
        assert config.timeout_seconds == 5.0
        assert config.retry_on_antibot is False

    def test_sets_up_logging_with_config_level(self, record, capsys, _no_logging_setup):
        with patch.object(main, "scrape_product_with_retry", AsyncMock(return_value=record)):
            _run([URL, "--log-level", "debug"], capsys)

        _no_logging_setup.assert_called_once_with("DEBUG")


class TestMainErrors:
    def test_input_error_exit_code(self, capsys):
        error = IdentifierNotFoundError("no asin", url="https://www.amazon.com/s?k=x", attempts=1)
        with patch.object(main, "scrape_product_with_retry", AsyncMock(side_effect=error)):
            code, output = _run(["https://www.amazon.com/s?k=x"], capsys)

        assert code == main.EXIT_INPUT_ERROR
        assert output["category"] == "NOT_FOUND_IDENTIFIER"
        assert output["success"] is False

    def test_antibot_error(self, capsys):
        error = AntiBotError("challenge", marker="captcha", attempts=2)
        with patch.object(main, "scrape_product_with_retry", AsyncMock(side_effect=error)):
            code, output = _run([URL], capsys)

        assert code == main.EXIT_FAILURE
        assert output["category"] == "ANTI_BOT"
        assert output["attempts"] == 2
        assert output["suggestion"] == AntiBotError.DEFAULT_SUGGESTION

    def test_network_error(self, capsys):
        error = NetworkFailureError("HTTP 503", http_status=503, attempts=2)
        with patch.object(main, "scrape_product_with_retry", AsyncMock(side_effect=error)):
            code, output = _run([URL], capsys)

        assert code == main.EXIT_FAILURE
        assert output["http_status"] == 503

    def test_unexpected_error(self, capsys):
        with patch.object(
            main, "scrape_product_with_retry", AsyncMock(side_effect=RuntimeError("bug"))
        ):
            code, output = _run([URL], capsys)

        assert code == main.EXIT_FAILURE
        assert output["category"] == "UNKNOWN"

    def test_invalid_cli_config(self, capsys):
        mock_scrape = AsyncMock()
        with patch.object(main, "scrape_product_with_retry", mock_scrape):
            code, output = _run([URL, "--timeout", "30"], capsys)

        assert code == main.EXIT_INPUT_ERROR
        assert "timeout_seconds" in output["error"]
        mock_scrape.assert_not_awaited()
