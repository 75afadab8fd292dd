"""Tag nesting validation engine (Kitty's Algorithm).

The engine scans classified tags once, in document order. Start tags are
pushed onto an open-tag stack. An end tag that does not close the top of the
stack is not judged immediately: it may cancel a previously deferred error,
it may close a tag deeper in the stack (charging everything above that tag
as intercrossed), or it may be set aside as an extra end tag. Deferred
records are reconciled against each other once the input is exhausted.

Diagnostics are data, never exceptions: malformed markup cannot make the
scan fail.
"""

from typing import Iterable, List, Optional, Tuple

from kitty_xml_validator.shared.logging import get_logger
from kitty_xml_validator.shared.result import DiagnosticEntry, DiagnosticReason
from kitty_xml_validator.tokenization.classifier import TagClassifier, TagKind
from kitty_xml_validator.validation.containers import TagQueue, TagStack
from kitty_xml_validator.validation.diagnostics import DiagnosticCollector
from kitty_xml_validator.validation.reconciliation import reconcile
from kitty_xml_validator.validation.records import TagRecord


class ValidationEngine:
    """Stateful validator owning the open-tag stack and both deferral queues.

    An engine can validate any number of documents one after another;
    ``run`` clears all state first. It must not be used from several threads
    or re-entered while a run is in progress.

    Examples:
        >>> engine = ValidationEngine()
        >>> engine.run([("<a>", 1), ("<b>", 1), ("</b>", 1), ("</a>", 1)])
        True
        >>> engine.run([("<a>", 1), ("<b>", 2), ("</b>", 2)])
        False
        >>> engine.diagnostics
        ['Error at line: 1 <a> is not constructed correctly.']
    """

    def __init__(
        self,
        classifier: Optional[TagClassifier] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize an empty engine.

        Args:
            classifier: Tag classifier to use (a fresh one by default)
            correlation_id: Optional correlation ID for run tracking
        """
        self.classifier = classifier or TagClassifier()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "validation_engine")

        self._stack = TagStack()
        self._error_queue = TagQueue()
        self._extras_queue = TagQueue()
        self._collector = DiagnosticCollector()

    # ------------------------------------------------------------------
    # Run lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Clear the stack, both queues, the diagnostics and classifier tallies."""
        self._stack.clear()
        self._error_queue.clear()
        self._extras_queue.clear()
        self._collector.clear()
        self.classifier.reset()

    def run(self, tags: Iterable[Tuple[str, int]]) -> bool:
        """Validate a whole document given as ``(raw_text, line_number)`` pairs.

        Returns:
            True if the document is well-formed
        """
        self.reset()
        for raw_text, line_number in tags:
            self.feed(raw_text, line_number)
        return self.finish()

    def feed(self, raw_text: str, line_number: int) -> TagKind:
        """Classify one tag token and apply it to the engine state."""
        kind, name = self.classifier.classify(raw_text)

        if kind is TagKind.START:
            self.open_tag(TagRecord(name, raw_text, line_number))
        elif kind is TagKind.END:
            self.close_tag(TagRecord(name, raw_text, line_number))
        elif kind is TagKind.UNKNOWN:
            self.logger.debug(
                "Ignoring tag with unrecognised shape",
                extra={"tag": raw_text, "line": line_number}
            )

        return kind

    def finish(self) -> bool:
        """Reconcile leftovers after end of input and return validity."""
        reconcile(
            self._stack,
            self._error_queue,
            self._extras_queue,
            self._collector,
            self.logger,
        )
        return self.is_well_formed

    # ------------------------------------------------------------------
    # Tag handling
    # ------------------------------------------------------------------

    def open_tag(self, record: TagRecord) -> None:
        """Start tags are always accepted; they are judged when closed."""
        self._stack.push(record)

    def close_tag(self, record: TagRecord) -> None:
        """Apply an end tag to the stack and queues."""
        top = self._stack.peek()
        if top is not None and top.matches(record):
            self._stack.pop()
            return

        deferred = self._error_queue.peek()
        if deferred is not None and deferred.matches(record):
            self._error_queue.dequeue()
            self.logger.debug(
                "End tag cancelled a deferred error",
                extra={"tag": record.raw_text, "line": record.line_number}
            )
            return

        if self._stack.is_empty():
            self._error_queue.enqueue(record)
            self._collector.record_tag(record, DiagnosticReason.STRAY_END_TAG)
            return

        if not self._search_stack(record):
            self._extras_queue.enqueue(record)
            self._collector.record_tag(record, DiagnosticReason.EXTRA_END_TAG)

    def _search_stack(self, record: TagRecord) -> bool:
        """Look below the top of the stack for a start tag ``record`` can close.

        On success every record above the match is charged as intercrossed
        and moved to the error queue, and the match itself is closed. On
        failure the stack is restored to exactly its previous content.
        """
        if self.logger.is_debug_enabled():
            self.logger.debug(
                "Searching open tags for end tag",
                extra={
                    "tag": record.raw_text,
                    "line": record.line_number,
                    "depth": self._stack.search(record.name),
                }
            )

        scratch = TagStack()
        found = False

        while not self._stack.is_empty():
            current = self._stack.pop()
            if current is None:
                break
            scratch.push(current)
            if current.matches(record):
                found = True
                break

        if not found:
            while not scratch.is_empty():
                restored = scratch.pop()
                if restored is not None:
                    self._stack.push(restored)
            return False

        skipped = 0
        while not scratch.is_empty():
            current = scratch.pop()
            if current is None or current.matches(record):
                continue
            self._error_queue.enqueue(current)
            self._collector.record_tag(current, DiagnosticReason.INTERCROSSED)
            skipped += 1

        self.logger.debug(
            "End tag matched below top of stack",
            extra={
                "tag": record.raw_text,
                "line": record.line_number,
                "skipped": skipped,
            }
        )
        return True

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def open_tags(self) -> Tuple[TagRecord, ...]:
        """Currently open start tags, outermost first."""
        return tuple(self._stack.to_list())

    @property
    def error_queue(self) -> Tuple[TagRecord, ...]:
        return tuple(self._error_queue.to_list())

    @property
    def extras_queue(self) -> Tuple[TagRecord, ...]:
        return tuple(self._extras_queue.to_list())

    @property
    def diagnostics(self) -> List[str]:
        return self._collector.messages

    @property
    def entries(self) -> List[DiagnosticEntry]:
        return self._collector.entries

    @property
    def is_well_formed(self) -> bool:
        return self._collector.is_empty()

    def report(self) -> str:
        """Success sentence or the newline-terminated diagnostics block."""
        return self._collector.report()
