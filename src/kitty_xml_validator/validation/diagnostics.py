"""Collection and formatting of validation diagnostics."""

from typing import Iterator, List, Set

from kitty_xml_validator.shared.result import DiagnosticEntry, DiagnosticReason
from kitty_xml_validator.validation.records import TagRecord

SUCCESS_MESSAGE = "XML document is constructed correctly."
DIAGNOSTIC_TEMPLATE = "Error at line: {line} {text} is not constructed correctly."


def format_diagnostic(line_number: int, raw_text: str) -> str:
    return DIAGNOSTIC_TEMPLATE.format(line=line_number, text=raw_text)


class DiagnosticCollector:
    """Ordered set of diagnostic messages.

    Messages keep first-seen order. Recording a message that is already
    present (same line, same tag text) has no effect, so a tag reported both
    during the scan and again during reconciliation appears once.
    """

    def __init__(self) -> None:
        self._entries: List[DiagnosticEntry] = []
        self._seen: Set[str] = set()

    def record(
        self,
        line_number: int,
        raw_text: str,
        reason: DiagnosticReason = DiagnosticReason.UNRESOLVED,
    ) -> bool:
        """Add a diagnostic; return False when it was a duplicate."""
        message = format_diagnostic(line_number, raw_text)
        if message in self._seen:
            return False
        self._seen.add(message)
        self._entries.append(DiagnosticEntry(line_number, raw_text, reason, message))
        return True

    def record_tag(self, record: TagRecord, reason: DiagnosticReason) -> bool:
        """Add a diagnostic for ``record`` at its own line."""
        return self.record(record.line_number, record.raw_text, reason)

    @property
    def messages(self) -> List[str]:
        return [entry.message for entry in self._entries]

    @property
    def entries(self) -> List[DiagnosticEntry]:
        return list(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def clear(self) -> None:
        self._entries.clear()
        self._seen.clear()

    def report(self) -> str:
        """Return the success sentence, or one newline-terminated line per diagnostic."""
        if not self._entries:
            return SUCCESS_MESSAGE
        return "".join(entry.message + "\n" for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.messages)
