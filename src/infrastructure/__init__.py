"""
Infrastructure Layer
====================
Clean Architecture의 Frameworks & Drivers Layer

환경변수, 설정 파일 등 외부 환경과의 통합을 담당합니다.

구조:
- config/: 설정 관리 (ScraperConfig)
"""

from src.infrastructure.config.config_manager import ScraperConfig, get_config

__all__ = ["ScraperConfig", "get_config"]
