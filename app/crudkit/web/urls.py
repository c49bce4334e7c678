from __future__ import annotations

import logging
from typing import Any, Iterable
from urllib.parse import quote_plus, unquote_plus

from starlette.requests import Request

from app.crudkit.core.error_catalog import AppError, ErrorCatalog, RedirectRequired
from app.crudkit.core.logging import log_json

logger = logging.getLogger("crudkit.url")


def parse_query_string(query: str) -> list[tuple[str, str | None]]:
    pairs: list[tuple[str, str | None]] = []
    for part in query.split("&"):
        if not part:
            continue
        if "=" in part:
            key, value = part.split("=", 1)
            pairs.append((unquote_plus(key), unquote_plus(value)))
        else:
            # bare markers such as ``?reset`` keep their shape
            pairs.append((unquote_plus(part), None))
    return pairs


def encode_query_string(pairs: Iterable[tuple[str, str | None]]) -> str:
    parts = []
    for key, value in pairs:
        if value is None:
            parts.append(quote_plus(key))
        else:
            parts.append(f"{quote_plus(key)}={quote_plus(value)}")
    return "&".join(parts)


def _as_list(value: Any) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _query_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class UrlHelper:
    def __init__(self, request: Request):
        self._url = request.url

    def get(self) -> str:
        return self._url.path

    def get_with_query_string(self) -> str:
        query = self._url.query
        return f"{self._url.path}?{query}" if query else self._url.path

    def replace_in_query_string(self, keys: Any, values: Any) -> str:
        if isinstance(keys, (list, tuple)):
            keys = list(keys)
            values = _as_list(values)
        else:
            keys, values = [keys], [values]
        if len(keys) != len(values):
            raise AppError(
                ErrorCatalog.QUERY_STRING_MISMATCH,
                details={"keys": len(keys), "values": len(values)},
            )

        replacements: dict[str, list[str]] = {}
        for key, value in zip(keys, values):
            replacements[str(key)] = [_query_value(item) for item in _as_list(value)]

        pairs: list[tuple[str, str | None]] = []
        written: set[str] = set()
        for key, value in parse_query_string(self._url.query):
            if key not in replacements:
                pairs.append((key, value))
                continue
            if key in written:
                continue
            pairs.extend((key, item) for item in replacements[key])
            written.add(key)
        for key, items in replacements.items():
            if key not in written:
                pairs.extend((key, item) for item in items)

        return "?" + encode_query_string(pairs)

    def remove_from_query_string(self, *keys: str) -> str:
        removed = set(keys)
        pairs = [(key, value) for key, value in parse_query_string(self._url.query) if key not in removed]
        query = encode_query_string(pairs)
        return f"?{query}" if query else ""

    def redirect(self, url: str, status_code: int | None = None) -> None:
        log_json(logger, {"event": "crud_redirect", "from": self.get_with_query_string(), "to": url})
        raise RedirectRequired(url, status_code=status_code)
