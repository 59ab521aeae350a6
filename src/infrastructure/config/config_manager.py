"""
Centralized Configuration Manager
=================================
스크래퍼 설정을 중앙에서 관리합니다.

주요 기능:
- 기본값 → JSON 파일(config/scraper.json) → 환경변수 순으로 로드 (뒤가 우선)
- 시작 시 설정 검증 (validate)

환경변수:
    SCRAPER_TIMEOUT_SECONDS       요청 타임아웃 (기본 8.0, 10초 미만)
    SCRAPER_MAX_ATTEMPTS          최대 시도 횟수 (기본 2)
    SCRAPER_RETRY_ON_ANTIBOT      캡차 감지 시 재시도 여부 (기본 true)
    SCRAPER_JITTER_MIN_SECONDS    재시도 대기 하한 (기본 0.5)
    SCRAPER_JITTER_MAX_SECONDS    재시도 대기 상한 (기본 1.5)
    SCRAPER_LOG_LEVEL             로그 레벨 (기본 INFO)
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.domain.exceptions import ConfigurationError
from src.shared.constants import (
    HOST_EXECUTION_CEILING_SECONDS,
    MAX_ATTEMPTS,
    REQUEST_TIMEOUT_SECONDS,
    RETRY_JITTER_MAX_SECONDS,
    RETRY_JITTER_MIN_SECONDS,
)

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "scraper.json"

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


@dataclass
class ScraperConfig:
    """
    스크래퍼 설정

    환경변수와 설정 파일에서 로드합니다.
    """

    config_path: Path = field(default_factory=lambda: Path.cwd() / "config")

    # Request
    timeout_seconds: float = REQUEST_TIMEOUT_SECONDS

    # Retry
    max_attempts: int = MAX_ATTEMPTS
    retry_on_antibot: bool = True
    jitter_min_seconds: float = RETRY_JITTER_MIN_SECONDS
    jitter_max_seconds: float = RETRY_JITTER_MAX_SECONDS

    # Logging
    log_level: str = "INFO"

    # (설정 키, 변환 함수) - JSON 키와 환경변수 접미사가 같은 이름을 공유
    _FIELDS = (
        ("timeout_seconds", float),
        ("max_attempts", int),
        ("retry_on_antibot", _parse_bool),
        ("jitter_min_seconds", float),
        ("jitter_max_seconds", float),
        ("log_level", lambda value: str(value).strip().upper()),
    )

    @classmethod
    def from_env(cls, config_dir: Path | None = None) -> "ScraperConfig":
        """설정 파일 + 환경변수에서 설정 로드"""
        config = cls()

        if config_dir:
            config.config_path = Path(config_dir)

        config._load_file()
        config._load_env()

        return config

    def _apply(self, key: str, raw: Any, source: str) -> None:
        converters = dict(self._FIELDS)
        try:
            setattr(self, key, converters[key](raw))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid value for {key} from {source}: {raw!r}",
                config_key=key,
                actual=raw,
            ) from e

    def _load_file(self) -> None:
        """scraper.json 로드 (있는 경우)"""
        path = self.config_path / CONFIG_FILE_NAME
        if not path.exists():
            return

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        for key, _ in self._FIELDS:
            if key in data:
                self._apply(key, data[key], str(path))

        logger.debug(f"Loaded scraper config from {path}")

    def _load_env(self) -> None:
        """SCRAPER_* 환경변수 로드"""
        for key, _ in self._FIELDS:
            env_name = f"SCRAPER_{key.upper()}"
            raw = os.environ.get(env_name)
            if raw is None or raw == "":
                continue
            self._apply(key, raw, env_name)

    def validate(self) -> list[str]:
        """설정 검증

        Returns:
            오류 메시지 목록 (빈 리스트 = 정상)
        """
        errors: list[str] = []

        # === 타임아웃 검증 ===
        if not 0 < self.timeout_seconds < HOST_EXECUTION_CEILING_SECONDS:
            errors.append(
                f"timeout_seconds 범위 오류: 0 < t < {HOST_EXECUTION_CEILING_SECONDS} 필요, "
                f"현재 {self.timeout_seconds}"
            )

        # === 재시도 검증 ===
        if self.max_attempts < 1:
            errors.append(f"max_attempts는 1 이상이어야 합니다, 현재 {self.max_attempts}")

        if self.jitter_min_seconds < 0:
            errors.append(
                f"jitter_min_seconds는 0 이상이어야 합니다, 현재 {self.jitter_min_seconds}"
            )
        if self.jitter_min_seconds > self.jitter_max_seconds:
            errors.append(
                f"jitter 범위 오류: min({self.jitter_min_seconds}) > max({self.jitter_max_seconds})"
            )

        # === 로그 레벨 검증 ===
        if self.log_level not in _LOG_LEVELS:
            errors.append(f"알 수 없는 log_level: {self.log_level}")

        # === 경고 로깅 ===
        total_budget = self.max_attempts * self.timeout_seconds
        if total_budget >= HOST_EXECUTION_CEILING_SECONDS:
            logger.warning(
                f"[Config Warning] 최대 시도 시간({total_budget}s)이 "
                f"호스트 실행 제한({HOST_EXECUTION_CEILING_SECONDS}s) 이상입니다"
            )

        return errors

    @classmethod
    def from_env_validated(
        cls, fail_fast: bool = True, config_dir: Path | None = None
    ) -> "ScraperConfig":
        """설정 로드 + 검증

        Args:
            fail_fast: True면 검증 실패 시 ConfigurationError 발생.
                       False면 에러만 로깅하고 config 반환.

        Raises:
            ConfigurationError: fail_fast=True이고 검증 실패 시
        """
        config = cls.from_env(config_dir=config_dir)
        errors = config.validate()

        if errors:
            error_msg = "설정 검증 실패:\n" + "\n".join(f"  - {e}" for e in errors)
            if fail_fast:
                raise ConfigurationError(error_msg)
            logger.error(error_msg)

        return config

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "config_path": str(self.config_path),
            "timeout_seconds": self.timeout_seconds,
            "max_attempts": self.max_attempts,
            "retry_on_antibot": self.retry_on_antibot,
            "jitter_min_seconds": self.jitter_min_seconds,
            "jitter_max_seconds": self.jitter_max_seconds,
            "log_level": self.log_level,
        }


# Singleton instance
_config: ScraperConfig | None = None


def get_config() -> ScraperConfig:
    """설정 싱글톤 반환"""
    global _config
    if _config is None:
        _config = ScraperConfig.from_env()
    return _config


def reset_config() -> None:
    """설정 싱글톤 초기화 (테스트용)"""
    global _config
    _config = None
