from __future__ import annotations

from typing import Any

from starlette.requests import Request

from app.crudkit.core.config import settings


class SessionStore:
    """Namespaced access to the signed cookie session installed by ``SessionMiddleware``."""

    def __init__(self, request: Request, prefix: str | None = None):
        self._session = request.session
        self.prefix = settings.CRUD_SESSION_NAMESPACE if prefix is None else prefix

    def _key(self, key: str, prefix: str | None) -> str:
        return f"{self.prefix if prefix is None else prefix}{key}"

    def get(self, key: str, default: Any = None, prefix: str | None = None) -> Any:
        return self._session.get(self._key(key, prefix), default)

    def set(self, key: str, value: Any, prefix: str | None = None) -> None:
        full_key = self._key(key, prefix)
        if value is None:
            self._session.pop(full_key, None)
            return
        self._session[full_key] = value

    def clear(self, prefix: str | None = None) -> None:
        namespace = self.prefix if prefix is None else prefix
        for key in [key for key in self._session if key.startswith(namespace)]:
            del self._session[key]
