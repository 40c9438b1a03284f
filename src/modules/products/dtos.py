"""Validated product submissions.

Framework-agnostic data transfer objects using Pydantic v2.  One DTO
per product variant, each tagged with a ``Literal`` ``product_type``,
so a submission is a tagged union over the three variants.  DTOs are
immutable (``frozen=True``) and only built once validation passed.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Literal, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductSubmissionBase(BaseModel):
    """Fields shared by every variant."""

    model_config = ConfigDict(frozen=True)

    sku: str
    name: str
    price: Decimal = Field(ge=0)

    @field_validator("sku", "name")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class BookSubmission(ProductSubmissionBase):
    product_type: Literal["book"] = Field(default="book", alias="productType")
    weight: Decimal


class DvdSubmission(ProductSubmissionBase):
    product_type: Literal["dvd"] = Field(default="dvd", alias="productType")
    size: Decimal


class FurnitureSubmission(ProductSubmissionBase):
    product_type: Literal["furniture"] = Field(default="furniture", alias="productType")
    height: Decimal
    width: Decimal
    length: Decimal


ProductSubmission = Union[BookSubmission, DvdSubmission, FurnitureSubmission]

SUBMISSION_TYPES: Dict[str, Type[ProductSubmissionBase]] = {
    "book": BookSubmission,
    "dvd": DvdSubmission,
    "furniture": FurnitureSubmission,
}
