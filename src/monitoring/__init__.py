"""
Monitoring and observability modules
"""

from .logger import RetryFailureFilter, SensitiveDataFilter, setup_logging

__all__ = [
    "setup_logging",
    "SensitiveDataFilter",
    "RetryFailureFilter",
]
