"""Encoding detection for documents read from disk.

Detection cascades through a Byte Order Mark check, the encoding named in an
XML declaration, and finally a configured fallback encoding. The selected
codec always consumes a BOM if one is present, so decoded text never starts
with U+FEFF.
"""

import codecs
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Tuple

# Only the head of a document is searched for a declaration
DECLARATION_SEARCH_LIMIT = 1024


class DetectionMethod(Enum):
    """Enumeration of encoding detection methods."""
    BOM = "bom"
    XML_DECLARATION = "xml_declaration"
    FALLBACK = "fallback"
    OVERRIDE = "override"


@dataclass
class EncodingResult:
    """Result of encoding detection.

    Attributes:
        encoding: Codec name suitable for ``open(..., encoding=...)``
        confidence: Confidence score from 0.0 to 1.0
        method: Detection method used
        issues: Problems noticed while detecting
    """
    encoding: str
    confidence: float
    method: DetectionMethod
    issues: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate confidence score range."""
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(
                f"Confidence must be between 0.0 and 1.0, got {self.confidence}"
            )


class BOMDetector:
    """Byte Order Mark (BOM) detection."""

    # Longest marks first: the UTF-32-LE mark starts with the UTF-16-LE one
    BOM_PATTERNS: ClassVar[Tuple[Tuple[bytes, str], ...]] = (
        (b"\xff\xfe\x00\x00", "utf-32"),
        (b"\x00\x00\xfe\xff", "utf-32"),
        (b"\xef\xbb\xbf", "utf-8-sig"),
        (b"\xff\xfe", "utf-16"),
        (b"\xfe\xff", "utf-16"),
    )

    def detect(self, data: bytes) -> Optional[EncodingResult]:
        """Detect encoding based on BOM.

        Args:
            data: Leading bytes of the document

        Returns:
            EncodingResult if a BOM is present, None otherwise
        """
        if not data:
            return None

        for bom_bytes, encoding in self.BOM_PATTERNS:
            if data.startswith(bom_bytes):
                return EncodingResult(
                    encoding=encoding,
                    confidence=1.0,
                    method=DetectionMethod.BOM,
                )

        return None


class XMLDeclarationParser:
    """Parser for XML encoding declarations."""

    XML_DECLARATION_PATTERN = re.compile(
        rb'<\?xml\s+.*?encoding\s*=\s*["\']([^"\']+)["\'].*?\?>',
        re.IGNORECASE | re.DOTALL
    )

    ALIASES: ClassVar[dict] = {
        "utf8": "utf-8",
        "utf16": "utf-16",
        "utf32": "utf-32",
        "iso-8859-1": "latin-1",
        "windows-1252": "cp1252",
    }

    def parse_declaration(self, data: bytes) -> Optional[EncodingResult]:
        """Parse encoding from an XML declaration.

        Returns:
            EncodingResult if a usable declaration is found, None otherwise;
            a declared codec that cannot read ``data`` is not usable
        """
        if not data:
            return None

        match = self.XML_DECLARATION_PATTERN.search(data[:DECLARATION_SEARCH_LIMIT])
        if not match:
            return None

        declared = match.group(1).decode("ascii", errors="ignore").strip().lower()
        normalized = self.ALIASES.get(declared, declared)
        try:
            codecs.lookup(normalized)
        except LookupError:
            return None

        # The declaration was found in these bytes, so the codec must read them
        decoder = codecs.getincrementaldecoder(normalized)(errors="replace")
        try:
            decoder.decode(data, final=False)
        except UnicodeError:
            return None

        return EncodingResult(
            encoding=normalized,
            confidence=0.9,
            method=DetectionMethod.XML_DECLARATION,
        )


class EncodingDetector:
    """Cascading encoding detection: BOM, XML declaration, fallback."""

    def __init__(self, fallback_encoding: str = "utf-8") -> None:
        """Initialize detection components.

        Args:
            fallback_encoding: Encoding used when nothing else is conclusive
        """
        self.fallback_encoding = fallback_encoding
        self.bom_detector = BOMDetector()
        self.xml_parser = XMLDeclarationParser()

    def detect(self, data: bytes) -> EncodingResult:
        """Detect the encoding of ``data``.

        Args:
            data: Leading bytes of the document

        Returns:
            EncodingResult with detected encoding and metadata
        """
        bom_result = self.bom_detector.detect(data)
        if bom_result is not None:
            return bom_result

        xml_result = self.xml_parser.parse_declaration(data)
        if xml_result is not None:
            return xml_result

        issues = []
        if data:
            issues.append("No BOM or encoding declaration, using fallback")
        return EncodingResult(
            encoding=self.fallback_encoding,
            confidence=0.5 if data else 1.0,
            method=DetectionMethod.FALLBACK,
            issues=issues,
        )
