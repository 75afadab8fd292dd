"""Raw tag extraction from numbered lines."""

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from kitty_xml_validator.shared.config import ExtractionConfig


@dataclass(frozen=True)
class RawTag:
    """A bracketed token exactly as it appeared, with its 1-based line."""

    text: str
    line_number: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line_number < 1:
            raise ValueError("Line number must be >= 1")

    def as_pair(self) -> Tuple[str, int]:
        return self.text, self.line_number


class TagExtractor:
    """Finds tag tokens inside individual lines.

    A tag must start and end on the same physical line; a tag broken across
    lines is not reassembled.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None) -> None:
        self.config = config or ExtractionConfig()
        self._pattern = re.compile(self.config.tag_pattern)

    def extract_line(self, line: str, line_number: int) -> Iterator[RawTag]:
        """Yield every tag token found in one line, left to right."""
        for match in self._pattern.finditer(line):
            yield RawTag(match.group(), line_number)

    def extract(self, lines: Iterable[Tuple[int, str]]) -> Iterator[RawTag]:
        """Yield tag tokens from ``(line_number, line)`` pairs in document order."""
        for line_number, line in lines:
            yield from self.extract_line(line, line_number)
