"""Tag records tracked by the validation engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TagRecord:
    """A start or end tag seen in the document.

    Two records refer to "the same tag" when their names are equal; raw text
    and line number only matter for reporting. Use ``matches``/``has_name``
    for matching rather than ``==``, which compares every field.
    """

    name: str
    raw_text: str
    line_number: int

    def has_name(self, name: str) -> bool:
        return self.name == name

    def matches(self, other: "TagRecord") -> bool:
        return self.name == other.name

    def __str__(self) -> str:
        return self.name
