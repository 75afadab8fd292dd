"""Shared utilities for XML tag validation.

This module provides the configuration objects, result types, exceptions and
logging helpers used across all processing layers.
"""

from .errors import KittyValidatorError
from .result import (
    DiagnosticEntry,
    DiagnosticReason,
    PerformanceMetrics,
    ValidationResult,
    capture_memory_usage,
)
from .config import (
    ConfigError,
    ConfigValidationError,
    ExtractionConfig,
    ReaderConfig,
    ReportConfig,
    ValidatorConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "KittyValidatorError",
    "DiagnosticEntry",
    "DiagnosticReason",
    "PerformanceMetrics",
    "ValidationResult",
    "capture_memory_usage",
    "ConfigError",
    "ConfigValidationError",
    "ExtractionConfig",
    "ReaderConfig",
    "ReportConfig",
    "ValidatorConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
