"""Validation API with progressive disclosure.

Module-level functions cover one-off checks; ``XMLTagValidator`` keeps its
components between documents and gathers usage statistics.
"""

import time
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, Union

from kitty_xml_validator.character.reader import InputReadError, LineReader, split_lines
from kitty_xml_validator.shared.config import ValidatorConfig
from kitty_xml_validator.shared.logging import get_logger
from kitty_xml_validator.shared.result import (
    PerformanceMetrics,
    ValidationResult,
    capture_memory_usage,
)
from kitty_xml_validator.tokenization.extractor import RawTag, TagExtractor
from kitty_xml_validator.validation.engine import ValidationEngine

TagInput = Union[Tuple[str, int], RawTag]
NumberedLine = Tuple[int, str]

MS_PER_SECOND = 1000


def validate(
    tags: Iterable[TagInput],
    correlation_id: Optional[str] = None
) -> ValidationResult:
    """Validate tags that have already been extracted from a document.

    Args:
        tags: ``(raw_text, line_number)`` pairs or ``RawTag`` objects in
            document order
        correlation_id: Optional correlation ID for run tracking

    Returns:
        ValidationResult for the document

    Examples:
        >>> validate([("<a>", 1), ("</a>", 1)]).is_well_formed
        True
        >>> validate([("</a>", 3)]).diagnostics
        ['Error at line: 3 </a> is not constructed correctly.']
    """
    return XMLTagValidator(correlation_id=correlation_id).validate_tags(tags)


def validate_string(
    text: str,
    config: Optional[ValidatorConfig] = None,
    correlation_id: Optional[str] = None
) -> ValidationResult:
    """Validate the tag nesting of a document held in memory.

    Examples:
        >>> validate_string('<?xml version="1.0"?>\\n<a><br/></a>').is_well_formed
        True
    """
    return XMLTagValidator(config, correlation_id).validate_string(text)


def validate_file(
    file_path: Union[str, Path],
    config: Optional[ValidatorConfig] = None,
    correlation_id: Optional[str] = None
) -> ValidationResult:
    """Validate the tag nesting of a document on disk.

    Raises:
        InputReadError: If the file cannot be read; no partial result is returned
    """
    return XMLTagValidator(config, correlation_id).validate_file(file_path)


class XMLTagValidator:
    """Reusable validator with configurable reading and extraction.

    Attributes:
        config: Current validator configuration
        correlation_id: Correlation ID for run tracking

    Examples:
        >>> validator = XMLTagValidator()
        >>> validator.validate_string("<a><b></a></b>").is_well_formed
        False
        >>> validator.statistics["total_validations"]
        1
    """

    def __init__(
        self,
        config: Optional[ValidatorConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ValidatorConfig.default()
        self.correlation_id = correlation_id or self.config.correlation_id
        self._build_components()

        self._validation_count = 0
        self._well_formed_count = 0
        self._total_processing_time = 0.0

    def _build_components(self) -> None:
        self.logger = get_logger(__name__, self.correlation_id, "tag_validator")
        self._reader = LineReader(self.config.reader, self.correlation_id)
        self._extractor = TagExtractor(self.config.extraction)
        self._engine = ValidationEngine(correlation_id=self.correlation_id)

    def validate_tags(
        self,
        tags: Iterable[TagInput],
        source: str = "<tags>"
    ) -> ValidationResult:
        """Validate pre-extracted tags in document order."""
        pairs = (
            tag.as_pair() if isinstance(tag, RawTag) else tag
            for tag in tags
        )
        return self._run(pairs, PerformanceMetrics(), source, None)

    def validate_lines(
        self,
        lines: Iterable[NumberedLine],
        source: str = "<lines>",
        encoding: Optional[str] = None
    ) -> ValidationResult:
        """Validate a document given as ``(line_number, line)`` pairs."""
        metrics = PerformanceMetrics()
        counted = self._count_lines(lines, metrics)
        pairs = (tag.as_pair() for tag in self._extractor.extract(counted))
        return self._run(pairs, metrics, source, encoding)

    def validate_string(self, text: str) -> ValidationResult:
        """Validate a document held in memory."""
        return self.validate_lines(split_lines(text), source="<string>")

    def validate_file(self, file_path: Union[str, Path]) -> ValidationResult:
        """Validate a document on disk.

        Raises:
            InputReadError: If the file cannot be read
        """
        path_obj = Path(file_path)
        file_logger = self.logger.bind(file_path=str(path_obj))
        file_logger.info("Starting file validation")

        try:
            encoding = self._reader.detect_encoding(path_obj).encoding
            return self.validate_lines(
                self._reader.read_lines(path_obj, encoding),
                source=str(path_obj),
                encoding=encoding,
            )
        except InputReadError as e:
            file_logger.error(
                "Could not read document",
                extra={"reason": e.reason},
                exc_info=False
            )
            raise

    def _count_lines(
        self,
        lines: Iterable[NumberedLine],
        metrics: PerformanceMetrics
    ) -> Iterator[NumberedLine]:
        for numbered_line in lines:
            metrics.lines_read += 1
            yield numbered_line

    def _run(
        self,
        pairs: Iterable[Tuple[str, int]],
        metrics: PerformanceMetrics,
        source: str,
        encoding: Optional[str]
    ) -> ValidationResult:
        start_time = time.time()
        memory_before = capture_memory_usage() if self.config.enable_metrics else 0

        is_well_formed = self._engine.run(pairs)

        metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
        metrics.tags_seen = self._engine.classifier.total
        metrics.tags_ignored = self._engine.classifier.ignored
        if self.config.enable_metrics:
            metrics.memory_used_bytes = max(0, capture_memory_usage() - memory_before)

        result = ValidationResult(
            is_well_formed=is_well_formed,
            diagnostics=self._engine.diagnostics,
            entries=self._engine.entries,
            report=self._engine.report(),
            source=source,
            encoding=encoding,
            performance=metrics,
            correlation_id=self.correlation_id,
        )

        self._validation_count += 1
        self._total_processing_time += metrics.processing_time_ms
        if is_well_formed:
            self._well_formed_count += 1

        self.logger.info(
            "Validation completed",
            extra={
                "source": source,
                "well_formed": is_well_formed,
                "error_count": result.error_count,
                "tags_seen": metrics.tags_seen,
                "processing_time_ms": metrics.processing_time_ms,
            }
        )
        return result

    def reconfigure(self, config: ValidatorConfig) -> None:
        """Replace the configuration and rebuild the components."""
        self.config = config
        self.correlation_id = config.correlation_id or self.correlation_id
        self._build_components()
        self.logger.info("Validator reconfigured")

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get validator usage statistics."""
        return {
            "total_validations": self._validation_count,
            "well_formed_documents": self._well_formed_count,
            "well_formed_rate": (
                self._well_formed_count / self._validation_count
                if self._validation_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._validation_count
                if self._validation_count > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset validator usage statistics."""
        self._validation_count = 0
        self._well_formed_count = 0
        self._total_processing_time = 0.0
