"""Exception hierarchy for kitty-xml-validator.

Malformed markup is never reported through exceptions; these types cover
infrastructure failures only (unreadable input, unusable configuration).
"""


class KittyValidatorError(Exception):
    """Base exception for all validator infrastructure failures."""
