from __future__ import annotations

import re
from typing import Iterable

from app.crudkit.core.error_catalog import PrintableError


_LIST_PATTERN = re.compile(r"^(.*<(?:ul|ol)[^>]*?>)(.*?)(</(?:ul|ol)>.*)$", re.IGNORECASE | re.DOTALL)
_ITEM_PATTERN = re.compile(r"<li(.*?)</li>", re.IGNORECASE | re.DOTALL)


def split_list(message: str) -> tuple[str, list[tuple[str, str]], str] | None:
    """Split an HTML message into the text before the list, its items and the text after.

    Each item is returned as ``(markup, inner)`` where ``inner`` is everything
    between ``<li`` and ``</li>``, attributes included. Returns ``None`` when
    the message holds no ``<ul>``/``<ol>`` list.
    """
    match = _LIST_PATTERN.match(message)
    if match is None:
        return None
    beginning, contents, ending = match.groups()
    items = [(item.group(0), item.group(1)) for item in _ITEM_PATTERN.finditer(contents)]
    return beginning, items, ending


def remove_list_items(exception: PrintableError, filters: Iterable[str]) -> None:
    parts = split_list(exception.get_message())
    if parts is None:
        return
    beginning, items, ending = parts
    filters = list(filters)

    kept = [markup for markup, inner in items if not any(token in inner for token in filters)]
    exception.set_message(beginning + "\n".join(kept) + ending)


def reorder_list_items(exception: PrintableError, matches: Iterable[str]) -> None:
    parts = split_list(exception.get_message())
    if parts is None:
        return
    beginning, items, ending = parts
    matches = list(matches)

    ordered: list[list[str]] = [[] for _ in matches]
    others: list[str] = []
    for markup, inner in items:
        for position, token in enumerate(matches):
            if token in inner:
                ordered[position].append(markup)
                break
        else:
            others.append(markup)

    final = [markup for bucket in ordered for markup in bucket] + others
    exception.set_message(beginning + "\n".join(final) + ending)
