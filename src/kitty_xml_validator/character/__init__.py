"""Character layer: encoding detection and line-oriented reading."""

from .encoding import (
    BOMDetector,
    DetectionMethod,
    EncodingDetector,
    EncodingResult,
    XMLDeclarationParser,
)
from .reader import (
    InputReadError,
    LineReader,
    split_lines,
)

__all__ = [
    "BOMDetector",
    "DetectionMethod",
    "EncodingDetector",
    "EncodingResult",
    "XMLDeclarationParser",
    "InputReadError",
    "LineReader",
    "split_lines",
]
