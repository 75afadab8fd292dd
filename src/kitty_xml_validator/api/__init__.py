"""Public validation API."""

from .validator import (
    XMLTagValidator,
    validate,
    validate_file,
    validate_string,
)

__all__ = [
    "XMLTagValidator",
    "validate",
    "validate_file",
    "validate_string",
]
