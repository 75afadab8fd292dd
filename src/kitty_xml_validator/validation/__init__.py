"""Tag nesting validation.

Key Components:
    ValidationEngine: Kitty's Algorithm over an open-tag stack and two queues
    TagRecord: A tag with its name, original text and line number
    TagStack, TagQueue: Containers of tag records
    DiagnosticCollector: Ordered, de-duplicated diagnostic messages
    reconcile: End-of-input reconciliation pass
"""

from .containers import TagQueue, TagStack
from .diagnostics import (
    DIAGNOSTIC_TEMPLATE,
    SUCCESS_MESSAGE,
    DiagnosticCollector,
    format_diagnostic,
)
from .engine import ValidationEngine
from .reconciliation import reconcile
from .records import TagRecord

__all__ = [
    "DIAGNOSTIC_TEMPLATE",
    "SUCCESS_MESSAGE",
    "DiagnosticCollector",
    "TagQueue",
    "TagRecord",
    "TagStack",
    "ValidationEngine",
    "format_diagnostic",
    "reconcile",
]
