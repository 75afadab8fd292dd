"""End-of-input reconciliation of the open-tag stack and deferral queues.

Runs once after the last tag has been fed to the engine. Every tag still open
is unclosed and gets reported. Deferred error records are then paired off
against extra end tags: a matching pair cancels out, anything left over is
reported.
"""

from typing import Optional

from kitty_xml_validator.shared.logging import CorrelationLogger, get_logger
from kitty_xml_validator.shared.result import DiagnosticReason
from kitty_xml_validator.validation.containers import TagQueue, TagStack
from kitty_xml_validator.validation.diagnostics import DiagnosticCollector


def drain_open_tags(
    stack: TagStack,
    error_queue: TagQueue,
    collector: DiagnosticCollector,
) -> int:
    """Move unclosed tags to the error queue, innermost first."""
    drained = 0
    while not stack.is_empty():
        record = stack.pop()
        if record is None:
            break
        error_queue.enqueue(record)
        collector.record_tag(record, DiagnosticReason.UNCLOSED)
        drained += 1
    return drained


def _report_all(queue: TagQueue, collector: DiagnosticCollector) -> None:
    while not queue.is_empty():
        record = queue.dequeue()
        if record is None:
            break
        collector.record_tag(record, DiagnosticReason.UNRESOLVED)


def resolve_queues(
    error_queue: TagQueue,
    extras_queue: TagQueue,
    collector: DiagnosticCollector,
) -> int:
    """Pair deferred errors with extra end tags; return cancelled pairs."""
    cancelled = 0
    while not error_queue.is_empty() or not extras_queue.is_empty():
        if error_queue.is_empty() != extras_queue.is_empty():
            _report_all(error_queue, collector)
            _report_all(extras_queue, collector)
            break

        error_front = error_queue.peek()
        extra_front = extras_queue.peek()
        if error_front is None or extra_front is None:
            break

        if error_front.matches(extra_front):
            error_queue.dequeue()
            extras_queue.dequeue()
            cancelled += 1
        else:
            error_queue.dequeue()
            collector.record_tag(error_front, DiagnosticReason.UNRESOLVED)
    return cancelled


def reconcile(
    stack: TagStack,
    error_queue: TagQueue,
    extras_queue: TagQueue,
    collector: DiagnosticCollector,
    logger: Optional[CorrelationLogger] = None,
) -> None:
    """Run the full end-of-input pass; all three containers end up empty."""
    logger = logger or get_logger(__name__, None, "reconciliation")

    unclosed = drain_open_tags(stack, error_queue, collector)
    pending_errors = len(error_queue)
    pending_extras = len(extras_queue)
    cancelled = resolve_queues(error_queue, extras_queue, collector)

    logger.debug(
        "Reconciliation finished",
        extra={
            "unclosed_tags": unclosed,
            "pending_errors": pending_errors,
            "pending_extras": pending_extras,
            "cancelled_pairs": cancelled,
        }
    )
