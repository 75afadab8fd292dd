#!/usr/bin/env python3
"""
Quick Start Guide for Kitty XML Validator.

Walks through the three levels of the API on a few small documents.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kitty_xml_validator import ValidationEngine, XMLTagValidator, validate_string

DOCUMENTS = {
    "well formed": '<?xml version="1.0"?>\n<shelf>\n  <book><br/></book>\n</shelf>\n',
    "unclosed": "<shelf>\n  <book></book>\n",
    "intercrossed": "<shelf>\n  <book>\n</shelf>\n  </book>\n",
    "extra end tag": "<shelf>\n  </book>\n</shelf>\n",
}


def level_one():
    """Module-level functions."""
    print("Level 1: validate_string()")
    print("-" * 40)
    for label, text in DOCUMENTS.items():
        result = validate_string(text)
        print(f"[{label}] well-formed: {result.is_well_formed}")
        print(result.report.rstrip("\n"))
        print()


def level_two():
    """A reusable validator with statistics."""
    print("Level 2: XMLTagValidator")
    print("-" * 40)
    validator = XMLTagValidator(correlation_id="quick-start")
    for text in DOCUMENTS.values():
        validator.validate_string(text)
    stats = validator.statistics
    print(f"Validated {stats['total_validations']} documents, "
          f"{stats['well_formed_documents']} well-formed")
    print()


def level_three():
    """Feeding the engine one tag at a time."""
    print("Level 3: ValidationEngine")
    print("-" * 40)
    engine = ValidationEngine()
    engine.reset()
    for raw_text, line_number in [("<a>", 1), ("<b>", 2), ("</a>", 3)]:
        engine.feed(raw_text, line_number)
        print(f"after {raw_text:5} open={[r.name for r in engine.open_tags]} "
              f"errorQ={[r.name for r in engine.error_queue]}")
    engine.finish()
    print(engine.report().rstrip("\n"))


if __name__ == "__main__":
    level_one()
    level_two()
    level_three()
