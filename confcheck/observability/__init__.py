"""
Logging and metrics.
"""

from .logger import get_logger, log_operation, setup_logger
from .metrics import MetricsCollector

__all__ = [
    "get_logger",
    "log_operation",
    "setup_logger",
    "MetricsCollector",
]
