"""Tag classification for nesting validation.

Each raw tag token is sorted into one of a handful of kinds. Only start and
end tags take part in nesting; processing instructions, self-closing tags and
anything that matches none of the known shapes are ignored.
"""

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Tuple

# Patterns are applied as full matches against the whole token
START_TAG_PATTERN = re.compile(r"<([a-zA-Z][a-zA-Z0-9_-]*)(\s[^>]*)?>")
END_TAG_PATTERN = re.compile(r"</([a-zA-Z][a-zA-Z0-9_-]*)>")
SELF_CLOSING_TAG_PATTERN = re.compile(r"<([a-zA-Z][a-zA-Z0-9_-]*)(\s[^>]*)?/>")
PROCESSING_INSTRUCTION_PATTERN = re.compile(r"<\?xml[^?]*\?>")

_NAME_DELIMITERS = re.compile(r"[<>/]")


class TagKind(Enum):
    """Kinds of tag token."""

    PROCESSING_INSTRUCTION = auto()  # <?xml ... ?>
    SELF_CLOSING = auto()            # <name/> or anything ending in />
    START = auto()                   # <name attrs>
    END = auto()                     # </name>
    UNKNOWN = auto()                 # Bracketed but none of the above

    @property
    def affects_nesting(self) -> bool:
        """Whether tokens of this kind open or close anything."""
        return self in (TagKind.START, TagKind.END)


def is_processing_instruction(raw_text: str) -> bool:
    return PROCESSING_INSTRUCTION_PATTERN.fullmatch(raw_text) is not None


def is_self_closing(raw_text: str) -> bool:
    return (
        SELF_CLOSING_TAG_PATTERN.fullmatch(raw_text) is not None
        or raw_text.strip().endswith("/>")
    )


def is_start_tag(raw_text: str) -> bool:
    return (
        START_TAG_PATTERN.fullmatch(raw_text) is not None
        and not raw_text.startswith("</")
        and not is_self_closing(raw_text)
    )


def is_end_tag(raw_text: str) -> bool:
    return END_TAG_PATTERN.fullmatch(raw_text) is not None


def classify(raw_text: str) -> TagKind:
    """Decide which kind of tag ``raw_text`` is.

    Checks run in a fixed order: processing instruction, self-closing, start,
    end. A token matching none of them is ``TagKind.UNKNOWN``.
    """
    if is_processing_instruction(raw_text):
        return TagKind.PROCESSING_INSTRUCTION
    if is_self_closing(raw_text):
        return TagKind.SELF_CLOSING
    if is_start_tag(raw_text):
        return TagKind.START
    if is_end_tag(raw_text):
        return TagKind.END
    return TagKind.UNKNOWN


def extract_name(raw_text: str) -> str:
    """Extract the bare tag name, dropping brackets, slashes and attributes.

    Never fails; input without a recognisable name yields ``""``.

    Examples:
        >>> extract_name('<item id="3">')
        'item'
        >>> extract_name('</item>')
        'item'
    """
    cleaned = _NAME_DELIMITERS.sub("", raw_text).strip()
    parts = cleaned.split(None, 1)
    name = parts[0] if parts else ""
    if name.startswith("?"):
        name = name[1:]
    return name.strip()


@dataclass
class TagClassifier:
    """Classifies tokens and keeps a tally of the kinds seen."""

    counts: Dict[TagKind, int] = field(default_factory=dict)

    def classify(self, raw_text: str) -> Tuple[TagKind, str]:
        """Return the kind of ``raw_text`` and, for start/end tags, its name."""
        kind = classify(raw_text)
        self.counts[kind] = self.counts.get(kind, 0) + 1
        name = extract_name(raw_text) if kind.affects_nesting else ""
        return kind, name

    @property
    def total(self) -> int:
        """Number of tokens classified since the last reset."""
        return sum(self.counts.values())

    @property
    def ignored(self) -> int:
        """Number of tokens that did not take part in nesting."""
        return sum(
            count for kind, count in self.counts.items() if not kind.affects_nesting
        )

    def reset(self) -> None:
        """Forget all tallies."""
        self.counts.clear()
