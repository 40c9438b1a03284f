"""Validation of raw product submissions.

Turns the untyped JSON body of a create request into a validated
``ProductSubmission`` DTO.  An unknown ``productType`` is rejected up
front with ``InvalidProductType``; otherwise every field check runs
before deciding, so the caller sees all problems at once:

1. Common fields: ``sku``, ``name``, ``price``, ``productType``.
2. Variant fields for the submitted ``productType``.
3. SKU uniqueness, which overrides any other ``sku`` message.

Numbers are stored in ``DECIMAL(10, 2)`` columns: accepted values are
rounded half away from zero to two places, and values whose integer
part does not fit are reported as field errors.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from modules.products.dtos import SUBMISSION_TYPES, ProductSubmission
from modules.products.exceptions import (
    InvalidProductData,
    InvalidProductType,
    ProductValidationError,
)
from modules.products.models import VARIANT_FIELDS, Product

if TYPE_CHECKING:
    from modules.products.repositories.interfaces import IProductRepository

REQUIRED_FIELDS: Tuple[str, ...] = ("sku", "name", "price", "productType")
TEXT_FIELDS: Tuple[str, ...] = ("sku", "name")

DUPLICATE_SKU_MESSAGE = "This SKU has already been used"

# Same shape PHP's is_numeric() accepts: sign, digits, fraction, exponent.
NUMERIC_PATTERN = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")

_price_field = Product._meta.get_field("price")
DECIMAL_PLACES = _price_field.decimal_places
INTEGER_DIGITS = _price_field.max_digits - _price_field.decimal_places
_QUANTUM = Decimal(1).scaleb(-DECIMAL_PLACES)
_LIMIT = Decimal(10) ** INTEGER_DIGITS


def ucfirst(field: str) -> str:
    return field[:1].upper() + field[1:]


def is_blank(value: Any) -> bool:
    """Missing-value test: ``None``, blank strings and empty collections.

    Zero is a legitimate value (e.g. a free product) and is not blank.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return not value
    return False


def parse_number(value: Any) -> Optional[Decimal]:
    """Return ``value`` as a finite ``Decimal``, or ``None`` if it is not numeric."""
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, Decimal)):
            number = Decimal(value)
        elif isinstance(value, float):
            number = Decimal(str(value))
        elif isinstance(value, str) and NUMERIC_PATTERN.match(value):
            number = Decimal(value.strip())
        else:
            return None
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def to_column_decimal(number: Decimal) -> Optional[Decimal]:
    """Round ``number`` the way a ``DECIMAL(10, 2)`` column stores it.

    Returns ``None`` when the rounded value has too many integer digits.
    """
    if number and number.adjusted() >= INTEGER_DIGITS:
        return None
    rounded = number.quantize(_QUANTUM, rounding=ROUND_HALF_UP)
    if abs(rounded) >= _LIMIT:
        return None
    return rounded


def variant_fields_for(product_type: Any) -> Optional[Tuple[str, ...]]:
    """Variant attribute names for a type tag, ``None`` for unknown tags."""
    if not isinstance(product_type, str):
        return None
    return VARIANT_FIELDS.get(product_type)


class ProductSubmissionValidator:
    """Validates create requests against the catalog rules.

    Receives an ``IProductRepository`` for the SKU uniqueness look-up.
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    def validate(self, data: Mapping[str, Any]) -> ProductSubmission:
        """Validate ``data`` and build the matching variant DTO.

        Raises:
            InvalidProductType: ``productType`` is present but unknown.
            ProductValidationError: with every field error found.
            InvalidProductData: if the checked data still fails DTO parsing.
        """
        self.check_product_type(data.get("productType"))

        errors = self.check_common_fields(data)
        errors.update(self.check_variant_fields(data))

        sku_error = self.check_unique_sku(data.get("sku"))
        if sku_error:
            errors["sku"] = sku_error

        if errors:
            raise ProductValidationError(errors)
        return self._build_submission(data)

    # ------------------------------------------------------------------
    # Individual passes
    # ------------------------------------------------------------------

    def check_product_type(self, product_type: Any) -> None:
        # A blank tag is left to the required-field check.
        if not is_blank(product_type) and variant_fields_for(product_type) is None:
            raise InvalidProductType(f"Unknown product type {product_type!r}.")

    def check_common_fields(self, data: Mapping[str, Any]) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        for field in REQUIRED_FIELDS:
            if is_blank(data.get(field)):
                errors[field] = f"{ucfirst(field)} field is required."

        for field in TEXT_FIELDS:
            if field in errors:
                continue
            value = data[field]
            max_length = Product._meta.get_field(field).max_length
            if not isinstance(value, str):
                errors[field] = f"{ucfirst(field)} must be a text value."
            elif len(value.strip()) > max_length:
                errors[field] = (
                    f"{ucfirst(field)} must be at most {max_length} characters."
                )

        if "price" not in errors:
            price = parse_number(data["price"])
            if price is None:
                errors["price"] = "Price must be a valid number."
            elif price < 0:
                errors["price"] = "Price must not be negative."
            elif to_column_decimal(price) is None:
                errors["price"] = "Price is too large."
        return errors

    def check_variant_fields(self, data: Mapping[str, Any]) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        for field in variant_fields_for(data.get("productType")) or ():
            number = parse_number(data.get(field))
            if number is None:
                errors[field] = f"{ucfirst(field)} must be a valid number."
            elif to_column_decimal(number) is None:
                errors[field] = f"{ucfirst(field)} is too large."
        return errors

    def check_unique_sku(self, sku: Any) -> Optional[str]:
        """Look the submitted SKU up as stored text.

        Numeric SKUs are looked up by their text form, so a duplicate
        replaces the "must be a text value" message too.  Blank and
        structured values are never looked up.
        """
        if isinstance(sku, (int, float)) and not isinstance(sku, bool):
            sku = str(sku)
        if isinstance(sku, str) and sku.strip() and self._repo.exists_by_sku(sku.strip()):
            return DUPLICATE_SKU_MESSAGE
        return None

    # ------------------------------------------------------------------
    # DTO construction
    # ------------------------------------------------------------------

    def _build_submission(self, data: Mapping[str, Any]) -> ProductSubmission:
        product_type = data["productType"]
        payload = {
            "sku": data["sku"],
            "name": data["name"],
            "price": to_column_decimal(parse_number(data["price"])),
            "productType": product_type,
        }
        for field in VARIANT_FIELDS[product_type]:
            payload[field] = to_column_decimal(parse_number(data[field]))

        try:
            return SUBMISSION_TYPES[product_type].model_validate(payload)
        except PydanticValidationError as exc:
            raise InvalidProductData(str(exc)) from exc
