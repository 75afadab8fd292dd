"""Result objects and diagnostic types for XML tag validation.

This module defines the result returned by every validation entry point,
the structured form of a single diagnostic, and the performance metrics
gathered for a run.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import psutil


class DiagnosticReason(Enum):
    """Why a tag was reported as not constructed correctly."""

    STRAY_END_TAG = "stray_end_tag"     # End tag with nothing open to match
    INTERCROSSED = "intercrossed"       # Skipped over by a bounded stack search
    EXTRA_END_TAG = "extra_end_tag"     # End tag absent from the whole stack
    UNCLOSED = "unclosed"               # Start tag still open at end of input
    UNRESOLVED = "unresolved"           # Left over during queue reconciliation


@dataclass(frozen=True)
class DiagnosticEntry:
    """Single diagnostic with the tag and line that caused it."""

    line_number: int
    raw_text: str
    reason: DiagnosticReason
    message: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to a JSON friendly dictionary."""
        return {
            "line": self.line_number,
            "tag": self.raw_text,
            "reason": self.reason.value,
            "message": self.message,
        }


@dataclass
class PerformanceMetrics:
    """Performance metrics for a validation run."""

    processing_time_ms: float = 0.0
    lines_read: int = 0
    tags_seen: int = 0
    tags_ignored: int = 0
    memory_used_bytes: int = 0

    @property
    def tags_per_second(self) -> float:
        """Calculate tags processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.tags_seen * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to a dictionary."""
        return {
            "processing_time_ms": self.processing_time_ms,
            "lines_read": self.lines_read,
            "tags_seen": self.tags_seen,
            "tags_ignored": self.tags_ignored,
            "memory_used_bytes": self.memory_used_bytes,
        }


@dataclass
class ValidationResult:
    """Outcome of validating one document.

    Attributes:
        is_well_formed: True when no diagnostic was recorded
        diagnostics: Formatted messages in first-seen order, duplicates removed
        entries: Structured counterpart of ``diagnostics``
        report: Success sentence or the newline-terminated diagnostics block
        source: Where the document came from (path, ``<string>`` or ``<tags>``)
        encoding: Encoding used to decode the input, when it was read from bytes
        performance: Timing and volume metrics for the run
        correlation_id: Correlation ID of the run
    """

    is_well_formed: bool
    diagnostics: List[str] = field(default_factory=list)
    entries: List[DiagnosticEntry] = field(default_factory=list)
    report: str = ""
    source: Optional[str] = None
    encoding: Optional[str] = None
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    @property
    def error_count(self) -> int:
        """Number of distinct diagnostics."""
        return len(self.diagnostics)

    def as_tuple(self) -> Tuple[bool, List[str]]:
        """Return ``(is_well_formed, diagnostics)``."""
        return self.is_well_formed, list(self.diagnostics)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON friendly dictionary."""
        return {
            "source": self.source,
            "well_formed": self.is_well_formed,
            "error_count": self.error_count,
            "diagnostics": [entry.to_dict() for entry in self.entries],
            "encoding": self.encoding,
            "performance": self.performance.to_dict(),
        }


def capture_memory_usage() -> int:
    """Get current resident memory of this process in bytes."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss
