"""Session access for the "cancel last product" action.

The service depends on the ``SessionStore`` protocol, not on Django's
request object; ``DjangoSessionStore`` adapts ``request.session``.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

LAST_ADDED_SKU = "last_added_sku"


class SessionStore(Protocol):
    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...


class DjangoSessionStore:
    """``SessionStore`` backed by a Django ``SessionBase``."""

    def __init__(self, session) -> None:
        self._session = session

    def get(self, key: str) -> Optional[Any]:
        return self._session.get(key)

    def set(self, key: str, value: Any) -> None:
        self._session[key] = value
