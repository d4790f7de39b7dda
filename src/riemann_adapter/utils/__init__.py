"""
Utilities Module

Common utilities for logging, configuration, and run metrics.
"""

from .config_loader import ConfigLoader
from .logger import setup_logging
from .metrics import MetricsCollector

__all__ = [
    'ConfigLoader',
    'setup_logging',
    'MetricsCollector',
]
