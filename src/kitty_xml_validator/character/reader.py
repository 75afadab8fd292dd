"""Line-oriented document reading.

Documents are consumed one physical line at a time, each paired with its
1-based line number. ``\\n``, ``\\r\\n`` and a lone ``\\r`` all terminate a line.
"""

import re
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

from kitty_xml_validator.character.encoding import (
    DetectionMethod,
    EncodingDetector,
    EncodingResult,
)
from kitty_xml_validator.shared.config import ReaderConfig
from kitty_xml_validator.shared.errors import KittyValidatorError
from kitty_xml_validator.shared.logging import get_logger

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

NumberedLine = Tuple[int, str]


class InputReadError(KittyValidatorError):
    """Raised when a document cannot be read; fatal to the run."""

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = str(path)
        self.reason = reason


def split_lines(text: str) -> Iterator[NumberedLine]:
    """Yield ``(line_number, line)`` pairs for in-memory text."""
    if not text:
        return
    lines = _LINE_BREAK.split(text)
    # A terminator at the very end does not start another line
    if lines[-1] == "":
        lines.pop()
    for line_number, line in enumerate(lines, start=1):
        yield line_number, line


class LineReader:
    """Reads documents from disk line by line with encoding detection."""

    def __init__(
        self,
        config: Optional[ReaderConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ReaderConfig()
        self.detector = EncodingDetector(self.config.fallback_encoding)
        self.logger = get_logger(__name__, correlation_id, "line_reader")

    def detect_encoding(self, path: Union[str, Path]) -> EncodingResult:
        """Decide which encoding ``path`` should be decoded with.

        Raises:
            InputReadError: If the file is missing, not a file or unreadable
        """
        path_obj = Path(path)
        if not path_obj.exists():
            raise InputReadError(path_obj, "file not found")
        if not path_obj.is_file():
            raise InputReadError(path_obj, "path is not a file")

        if self.config.encoding:
            return EncodingResult(
                encoding=self.config.encoding,
                confidence=1.0,
                method=DetectionMethod.OVERRIDE,
            )

        if not self.config.detect_encoding:
            return EncodingResult(
                encoding=self.config.fallback_encoding,
                confidence=1.0,
                method=DetectionMethod.FALLBACK,
            )

        try:
            with path_obj.open("rb") as handle:
                sample = handle.read(self.config.sample_size)
        except OSError as e:
            raise InputReadError(path_obj, e.strerror or str(e)) from e

        result = self.detector.detect(sample)
        self.logger.debug(
            "Encoding detected",
            extra={
                "file_path": str(path_obj),
                "encoding": result.encoding,
                "method": result.method.value,
            }
        )
        return result

    def read_lines(
        self,
        path: Union[str, Path],
        encoding: Optional[str] = None
    ) -> Iterator[NumberedLine]:
        """Yield ``(line_number, line)`` pairs from the file at ``path``.

        Args:
            path: File to read
            encoding: Codec to use; detected when not given

        Raises:
            InputReadError: On any read or (with strict decoding) decode failure
        """
        path_obj = Path(path)
        if encoding is None:
            encoding = self.detect_encoding(path_obj).encoding

        try:
            with path_obj.open(
                "r", encoding=encoding, errors=self.config.errors, newline=None
            ) as handle:
                for line_number, line in enumerate(handle, start=1):
                    yield line_number, line.rstrip("\r\n")
        except UnicodeError as e:
            detail = e.reason if isinstance(e, UnicodeDecodeError) else str(e)
            raise InputReadError(path_obj, f"cannot decode as {encoding}: {detail}") from e
        except OSError as e:
            raise InputReadError(path_obj, e.strerror or str(e)) from e
