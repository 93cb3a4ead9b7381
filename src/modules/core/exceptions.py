"""Cross-module exceptions."""

from __future__ import annotations


class InvalidQuery(Exception):
    """A list query carried filter values the store cannot apply."""
