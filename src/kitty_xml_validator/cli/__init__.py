"""Command-line interface for Kitty XML Validator."""

from .main import main

__all__ = ["main"]
