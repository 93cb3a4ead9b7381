"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from typing import Iterable


class ProductNotFound(Exception):
    """The requested product does not exist or has been soft-deleted."""


class VariantNotFound(Exception):
    """The product has no variant with the requested id."""


class InvalidCategory(Exception):
    """The referenced category does not exist."""


class SkuAlreadyExists(Exception):
    """One or more SKUs collide, within the payload or with stored variants."""

    def __init__(self, message: str, skus: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.skus = sorted(set(skus))
