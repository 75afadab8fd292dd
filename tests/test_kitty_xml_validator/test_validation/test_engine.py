"""Tests for the tag nesting validation engine."""

import logging
import re

import pytest

from kitty_xml_validator.shared.result import DiagnosticReason
from kitty_xml_validator.tokenization.classifier import TagKind
from kitty_xml_validator.validation.engine import ValidationEngine


def lines_to_tags(*lines):
    """Turn one string per line into (raw_text, line_number) pairs."""
    tags = []
    for line_number, line in enumerate(lines, start=1):
        for match in re.finditer(r"<[^>]+>", line):
            tags.append((match.group(), line_number))
    return tags


def error(line, tag):
    return f"Error at line: {line} {tag} is not constructed correctly."


@pytest.fixture
def engine():
    return ValidationEngine()


class TestWellFormedDocuments:
    """Documents whose tags nest correctly."""

    def test_no_tags(self, engine):
        """A document without tags is well-formed."""
        assert engine.run([]) is True
        assert engine.diagnostics == []
        assert engine.report() == "XML document is constructed correctly."

    def test_simple_nesting(self, engine):
        """Properly nested tags leave nothing behind."""
        assert engine.run(lines_to_tags("<a><b></b></a>")) is True
        assert engine.diagnostics == []
        assert engine.open_tags == ()
        assert engine.error_queue == ()
        assert engine.extras_queue == ()

    def test_nesting_across_lines_with_attributes(self, engine):
        """Attributes are ignored for matching."""
        tags = lines_to_tags(
            '<catalog xmlns="urn:x">',
            '  <book id="1" lang="en">',
            "    <title>Dune</title>",
            "  </book>",
            "</catalog>",
        )
        assert engine.run(tags) is True

    def test_processing_instruction_and_self_closing_are_ignored(self, engine):
        """PIs and self-closing tags never touch the stack or queues."""
        tags = lines_to_tags(
            '<?xml version="1.0"?>',
            "<root>",
            "<br/>",
            '<img src="a.png" />',
            "</root>",
        )
        assert engine.run(tags) is True

    def test_ignored_tags_outside_any_element(self, engine):
        """Ignored kinds produce no diagnostic wherever they appear."""
        tags = lines_to_tags('<br/><?xml version="1.0"?>', "<hr />")
        assert engine.run(tags) is True
        assert engine.open_tags == ()

    def test_comment_and_doctype_are_silently_dropped(self, engine):
        """Comments and declarations do not affect nesting."""
        tags = lines_to_tags(
            "<!DOCTYPE note>",
            "<note><!-- a comment --></note>",
        )
        assert engine.run(tags) is True


class TestUnclosedTags:
    """Start tags still open at end of input."""

    def test_single_unclosed_tag(self, engine):
        """An unclosed outer tag yields exactly one diagnostic at its line."""
        assert engine.run(lines_to_tags("<a>", "<b></b>")) is False
        assert engine.diagnostics == [error(1, "<a>")]

    def test_innermost_reported_first(self, engine):
        """Unclosed tags are reported innermost first."""
        assert engine.run(lines_to_tags("<a>", "<b>")) is False
        assert engine.diagnostics == [error(2, "<b>"), error(1, "<a>")]

    def test_reason_is_unclosed(self, engine):
        """The structured entry records why the tag was reported."""
        engine.run(lines_to_tags("<a>"))
        assert engine.entries[0].reason is DiagnosticReason.UNCLOSED


class TestStrayEndTags:
    """End tags with nothing open."""

    def test_stray_end_tag(self, engine):
        """A lone end tag yields exactly one diagnostic."""
        assert engine.run(lines_to_tags("</a>")) is False
        assert engine.diagnostics == [error(1, "</a>")]

    def test_stray_end_tag_is_deferred_mid_scan(self, engine):
        """The stray tag waits in the error queue until end of input."""
        engine.reset()
        engine.feed("</a>", 1)
        assert [record.name for record in engine.error_queue] == ["a"]
        assert engine.diagnostics == [error(1, "</a>")]

        engine.finish()
        assert engine.error_queue == ()
        assert engine.diagnostics == [error(1, "</a>")]

    def test_two_different_stray_end_tags(self, engine):
        """A second stray tag with another name is deferred behind the first."""
        assert engine.run(lines_to_tags("</x>", "</y>")) is False
        assert engine.diagnostics == [error(1, "</x>"), error(2, "</y>")]

    def test_repeated_stray_end_tag_rescued_by_error_queue(self, engine):
        """A second identical end tag consumes the deferred first one."""
        engine.reset()
        engine.feed("</a>", 1)
        engine.feed("</a>", 2)
        assert engine.error_queue == ()
        assert engine.finish() is False
        assert engine.diagnostics == [error(1, "</a>")]


class TestIntercrossedTags:
    """Overlapping rather than nested tags."""

    def test_intercrossed_pair(self, engine):
        """<a><b></a></b> charges <b> and matches <a>."""
        tags = lines_to_tags("<a>", "<b>", "</a>", "</b>")
        assert engine.run(tags) is False
        assert engine.diagnostics == [error(2, "<b>")]
        assert engine.entries[0].reason is DiagnosticReason.INTERCROSSED

    def test_intercrossed_on_one_line_does_not_crash(self, engine):
        """Everything on one line still yields a single diagnostic."""
        assert engine.run(lines_to_tags("<a><b></a></b>")) is False
        assert engine.diagnostics == [error(1, "<b>")]

    def test_every_record_above_match_is_charged(self, engine):
        """Skipped records are charged nearest-to-match first."""
        engine.reset()
        for raw_text, line_number in lines_to_tags("<a>", "<x>", "<b>", "</a>"):
            engine.feed(raw_text, line_number)

        assert engine.open_tags == ()
        assert [record.name for record in engine.error_queue] == ["x", "b"]
        assert engine.diagnostics == [error(2, "<x>"), error(3, "<b>")]

    def test_search_stops_at_nearest_match(self, engine):
        """Only the records above the nearest matching start tag are charged."""
        engine.reset()
        for raw_text, line_number in lines_to_tags("<a>", "<a>", "<b>", "</a>"):
            engine.feed(raw_text, line_number)

        assert [record.line_number for record in engine.open_tags] == [1]
        assert engine.diagnostics == [error(3, "<b>")]


class TestExtraEndTags:
    """End tags that match nothing in a non-empty stack."""

    def test_extra_end_tag(self, engine):
        """An end tag absent from the stack is reported once."""
        assert engine.run(lines_to_tags("<a>", "</x>", "</a>")) is False
        assert engine.diagnostics == [error(2, "</x>")]
        assert engine.entries[0].reason is DiagnosticReason.EXTRA_END_TAG

    def test_failed_search_leaves_stack_untouched(self, engine):
        """A failed search restores the stack content and order."""
        engine.reset()
        for raw_text, line_number in lines_to_tags("<a>", "<b>", "<c>"):
            engine.feed(raw_text, line_number)
        before = engine.open_tags

        engine.feed("</z>", 4)

        assert engine.open_tags == before
        assert [record.name for record in engine.open_tags] == ["a", "b", "c"]
        assert [record.name for record in engine.extras_queue] == ["z"]

    def test_search_logs_match_depth(self, engine, caplog):
        """With debug enabled the search reports how deep the match sits."""
        with caplog.at_level(logging.DEBUG, logger="kitty_xml_validator.validation.engine"):
            engine.run(lines_to_tags("<a>", "<b>", "<c>", "</b>", "</z>"))

        depths = [
            record.depth for record in caplog.records
            if record.getMessage() == "Searching open tags for end tag"
        ]
        assert depths == [2, -1]

    def test_matching_continues_after_failed_search(self, engine):
        """Subsequent end tags still close the restored stack correctly."""
        tags = lines_to_tags("<a>", "<b>", "</z>", "</b>", "</a>")
        assert engine.run(tags) is False
        assert engine.diagnostics == [error(3, "</z>")]

    def test_names_are_case_sensitive(self, engine):
        """<A> is not closed by </a>."""
        assert engine.run(lines_to_tags("<A>", "</a>")) is False
        assert engine.diagnostics == [error(2, "</a>"), error(1, "<A>")]


class TestReconciliation:
    """Interaction between the two queues after end of input."""

    def test_unclosed_tag_cancels_earlier_extra_end_tag(self, engine):
        """A deferred error and an extra with the same name cancel out."""
        tags = lines_to_tags("<a>", "</x>", "</a>", "<x>")
        assert engine.run(tags) is False
        # Both were reported when first seen; reconciliation adds nothing.
        assert engine.diagnostics == [error(2, "</x>"), error(4, "<x>")]
        assert engine.error_queue == ()
        assert engine.extras_queue == ()

    def test_duplicate_messages_suppressed(self, engine):
        """The same tag text on the same line is reported once."""
        assert engine.run(lines_to_tags("<a>", "</x></x>", "</a>")) is False
        assert engine.diagnostics == [error(2, "</x>")]

    def test_same_text_on_different_lines_reported_separately(self, engine):
        """Line numbers are part of the message, so both appear."""
        tags = lines_to_tags("<a>", "</x>", "</x>", "</a>")
        assert engine.run(tags) is False
        assert engine.diagnostics == [error(2, "</x>"), error(3, "</x>")]

    def test_empty_final_stack_can_still_be_invalid(self, engine):
        """Validity depends on diagnostics, not only on the final stack."""
        engine.reset()
        for raw_text, line_number in lines_to_tags("<a>", "</x>", "</a>"):
            engine.feed(raw_text, line_number)
        assert engine.open_tags == ()
        assert engine.finish() is False


class TestUnknownShapes:
    """Bracketed tokens that match no known tag shape."""

    def test_malformed_name_is_silently_dropped(self, engine):
        """<1abc> neither opens anything nor produces a diagnostic."""
        assert engine.feed("<a>", 1) is TagKind.START
        assert engine.feed("<1abc>", 1) is TagKind.UNKNOWN
        assert [record.name for record in engine.open_tags] == ["a"]

    def test_document_with_malformed_tag_is_well_formed(self, engine):
        """Silent drop keeps the rest of the document valid."""
        assert engine.run(lines_to_tags("<a><1abc></a>")) is True

    def test_end_tag_with_attributes_is_dropped(self, engine):
        """End tags may not carry attributes; such tokens are dropped."""
        assert engine.run(lines_to_tags('<a>', '</a x="1">')) is False
        assert engine.diagnostics == [error(1, "<a>")]


class TestEngineReuse:
    """Running several documents through one engine."""

    def test_idempotent_runs(self, engine):
        """The same input gives the same diagnostics every time."""
        tags = lines_to_tags("<a>", "<b>", "</a>", "</c>")
        first_valid = engine.run(tags)
        first = engine.diagnostics
        second_valid = engine.run(tags)

        assert first_valid == second_valid
        assert engine.diagnostics == first

    def test_state_does_not_leak_between_runs(self, engine):
        """A malformed run does not affect a following well-formed one."""
        engine.run(lines_to_tags("<a>", "</b>"))
        assert engine.run(lines_to_tags("<a></a>")) is True
        assert engine.diagnostics == []

    def test_classifier_tallies_reset_between_runs(self, engine):
        """Tag counts describe only the latest run."""
        engine.run(lines_to_tags("<a></a>", "<br/>"))
        assert engine.classifier.total == 3
        engine.run(lines_to_tags("<a></a>"))
        assert engine.classifier.total == 2
        assert engine.classifier.ignored == 0
