"""Category domain exceptions.

Raised by the Service Layer; the API layer (Views) catches them and
translates them into HTTP responses.
"""

from __future__ import annotations


class CategoryNotFound(Exception):
    """The requested category does not exist or has been deleted."""
