"""Product domain exceptions.

Raised by the Service Layer (and the validator/factory it drives).
The API layer (Views) catches these and translates them into the
fixed response payloads; the underlying cause is only logged.
"""

from __future__ import annotations

from typing import Dict


class ProductValidationError(Exception):
    """A submission failed field validation.

    ``errors`` maps each offending field to a human-readable message.
    """

    def __init__(self, errors: Dict[str, str]) -> None:
        super().__init__(", ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = dict(errors)


class InvalidProductType(Exception):
    """No product variant exists for the requested type tag."""


class InvalidProductData(Exception):
    """A submission cannot be turned into a product of the requested type."""


class ProductPersistenceError(Exception):
    """The storage layer failed to insert or delete a product."""
