"""Request classification for the product action endpoint.

One endpoint serves three actions; the body decides which.  The
checks run in a fixed order and the first match wins, so a body
carrying both ``sku`` and ``action: "cancel"`` is a create.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class RequestKind(str, Enum):
    CREATE = "create"
    CANCEL = "cancel"
    BULK_DELETE = "bulk_delete"
    INVALID = "invalid"


CANCEL_ACTION = "cancel"


def classify_request(payload: Any) -> RequestKind:
    if not isinstance(payload, dict):
        return RequestKind.INVALID
    if "sku" in payload:
        return RequestKind.CREATE
    if payload.get("action") == CANCEL_ACTION:
        return RequestKind.CANCEL
    if "productIds" in payload:
        return RequestKind.BULK_DELETE
    return RequestKind.INVALID
