"""Kitty XML Validator.

Checks that the tags of a markup document nest correctly: every start tag is
closed by exactly one matching end tag in stack order, with nothing left
unclosed or unopened. Attributes, entities and schemas are out of scope.

Progressive API Disclosure:
- Level 1: Simple functions - validate(), validate_string(), validate_file()
- Level 2: Configured validator - XMLTagValidator class
- Level 3: The engine itself - ValidationEngine, fed one tag at a time
"""

__version__ = "0.1.0"
__author__ = "Kitty XML Validator Team"

# Level 1 and 2
from .api import XMLTagValidator, validate, validate_file, validate_string

# Errors callers are expected to handle
from .character.reader import InputReadError
from .shared.config import ConfigError, ValidatorConfig
from .shared.errors import KittyValidatorError

# Result objects
from .shared.result import DiagnosticEntry, ValidationResult

# Level 3
from .validation.engine import ValidationEngine

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple validation functions
    "validate",
    "validate_string",
    "validate_file",

    # Level 2: Configured validator
    "XMLTagValidator",
    "ValidatorConfig",

    # Level 3: Engine
    "ValidationEngine",

    # Results
    "ValidationResult",
    "DiagnosticEntry",

    # Errors
    "KittyValidatorError",
    "InputReadError",
    "ConfigError",
]
