from __future__ import annotations

import logging
from typing import Any, Iterable

from starlette.requests import Request

from app.crudkit.core.config import settings
from app.crudkit.core.context import CrudState, get_crud_state
from app.crudkit.core.error_catalog import PrintableError
from app.crudkit.core.logging import log_json
from app.crudkit.services import list_items
from app.crudkit.web.grammar import humanize
from app.crudkit.web.html_utils import encode, prepare
from app.crudkit.web.request import RequestReader
from app.crudkit.web.session import SessionStore
from app.crudkit.web.urls import UrlHelper

logger = logging.getLogger("crudkit.crud")

_OPPOSITE_DIRECTIONS = {"asc": "desc", "desc": "asc"}


def opposite_direction(direction: str | None) -> str:
    return _OPPOSITE_DIRECTIONS.get((direction or "").lower(), "asc")


def loose_equals(value: Any, other: Any) -> bool:
    """Compare the way form values need to: ``1 == "1"`` and ``None == ""``."""
    if value == other:
        return True
    value = "" if value is None else value
    other = "" if other is None else other
    if isinstance(value, (list, tuple, set, dict)) or isinstance(other, (list, tuple, set, dict)):
        return False
    return str(value) == str(other)


def is_selected(value: Any, selected: Any) -> bool:
    if isinstance(selected, (list, tuple, set, frozenset)):
        return any(loose_equals(value, item) for item in selected)
    return loose_equals(value, selected)


def _has_value(value: Any) -> bool:
    return value is not None and value != "" and value != []


class CrudHelper:
    """Search, sort and row rendering state for one list page request.

    Values are read from the query string first. When a parameter is missing,
    the value used on the previous visit to the same path is restored from the
    session and remembered in ``state.loaded_values`` so that
    :meth:`redirect_with_loaded_values` can put it back into the URL.
    """

    def __init__(
        self,
        request: Request,
        state: CrudState | None = None,
        *,
        session: SessionStore | None = None,
        reader: RequestReader | None = None,
        urls: UrlHelper | None = None,
    ):
        self.state = state if state is not None else get_crud_state(request)
        self.session = session or SessionStore(request)
        self.reader = reader or RequestReader(request)
        self.urls = urls or UrlHelper(request)

    # session persistence

    def _previous_key(self, name: str) -> str:
        return f"{self.urls.get()}::{name}"

    def _get_previous(self, name: str) -> Any:
        return self.session.get(self._previous_key(name))

    def _set_previous(self, name: str, value: Any) -> None:
        self.session.set(self._previous_key(name), value)

    def _restore(self, key: str, value: Any) -> None:
        self.state.loaded_values[key] = value
        log_json(
            logger,
            {"event": "crud_state_restored", "path": self.urls.get(), "key": key},
            level=logging.DEBUG,
        )

    def _reset(self, name: str) -> None:
        self._set_previous(name, None)
        log_json(logger, {"event": "crud_state_reset", "path": self.urls.get(), "key": name})

    # state tracker

    def was_reset_requested(self) -> bool:
        url = self.urls.get_with_query_string()
        marker = settings.CRUD_RESET_MARKER
        return url.endswith(f"?{marker}") or url.endswith(f"&{marker}")

    def get_search_value(self, column: str, cast_to: str | type | None = None, default: Any = None) -> Any:
        name = f"previous_search::{column}"
        if self.was_reset_requested():
            self._reset(name)
            return None

        previous = self._get_previous(name)
        if _has_value(previous) and not self.reader.has(column):
            self.state.search_values[column] = previous
            self._restore(column, previous)
        else:
            self.state.search_values[column] = self.reader.get(column, cast_to, default)
            self._set_previous(name, self.state.search_values[column])
        return self.state.search_values[column]

    def get_sort_column(self, *possible_columns: Any) -> str | None:
        if self.was_reset_requested():
            self._reset("previous_sort_column")
            return None

        if len(possible_columns) == 1 and isinstance(possible_columns[0], (list, tuple)):
            possible_columns = tuple(possible_columns[0])

        param = settings.CRUD_SORT_PARAM
        previous = self._get_previous("previous_sort_column")
        if _has_value(previous) and previous in possible_columns and not self.reader.has(param):
            self.state.sort_column = previous
            self._restore(param, previous)
        else:
            self.state.sort_column = self.reader.get_valid(param, possible_columns)
            self._set_previous("previous_sort_column", self.state.sort_column)
        return self.state.sort_column

    def get_sort_direction(self, default_direction: str = "asc") -> str | None:
        if self.was_reset_requested():
            self._reset("previous_sort_direction")
            return None

        param = settings.CRUD_DIRECTION_PARAM
        valid_directions = [default_direction, opposite_direction(default_direction)]
        previous = self._get_previous("previous_sort_direction")
        if _has_value(previous) and previous in valid_directions and not self.reader.has(param):
            self.state.sort_direction = previous
            self._restore(param, previous)
        else:
            self.state.sort_direction = self.reader.get_valid(param, valid_directions)
            self._set_previous("previous_sort_direction", self.state.sort_direction)
        return self.state.sort_direction

    def redirect_with_loaded_values(self) -> None:
        if self.was_reset_requested():
            marker = settings.CRUD_RESET_MARKER
            self.urls.redirect(self.urls.get() + self.urls.remove_from_query_string(marker))

        loaded = self.state.loaded_values
        if not loaded:
            return

        url = self.urls.get() + self.urls.replace_in_query_string(list(loaded.keys()), list(loaded.values()))
        current = self.urls.get_with_query_string()
        if url != current and url != current + "?":
            self.urls.redirect(url)

    # html fragments

    def print_option(self, text: Any, value: Any, selected_value: Any = None) -> str:
        selected = ' selected="selected"' if is_selected(value, selected_value) else ""
        return f'<option value="{encode(value)}"{selected}>{prepare(text)}</option>'

    def show_checked(self, value: Any, checked_value: Any) -> str:
        if is_selected(value, checked_value):
            return ' checked="checked"'
        return ""

    def get_column_class(self, column: str) -> str:
        if self.state.sort_column == column:
            return "sorted"
        return ""

    def print_sortable_column(self, column: str, column_name: str | None = None) -> str:
        if column_name is None:
            column_name = humanize(column)

        active = self.state.sort_column == column
        direction = opposite_direction(self.state.sort_direction) if active else "asc"

        keys = [settings.CRUD_SORT_PARAM, settings.CRUD_DIRECTION_PARAM, *self.state.search_values.keys()]
        values = [column, direction, *self.state.search_values.values()]
        url = encode(self.urls.get() + self.urls.replace_in_query_string(keys, values))
        css_class = f" {self.state.sort_direction}" if active else ""

        return f'<a href="{url}" class="sortable_column{css_class}">{prepare(column_name)}</a>'

    def get_row_class(self, row_value: Any = None, affected_value: Any = None) -> str:
        """Return ``highlighted`` for the row just written, else ``odd``/``even``.

        A row is highlighted when ``row_value`` is not ``None`` and loosely equals
        ``affected_value``, so ``""`` matches ``None``. The counter advances either way.
        """
        self.state.row_number += 1
        if row_value is not None and loose_equals(row_value, affected_value):
            return "highlighted"

        css_class = "odd" if self.state.row_number % 2 else "even"
        if self.state.row_number == 2:
            css_class += " first"
        return css_class

    # exception messages

    @staticmethod
    def remove_list_items(exception: PrintableError, filters: Iterable[str]) -> None:
        list_items.remove_list_items(exception, filters)

    @staticmethod
    def reorder_list_items(exception: PrintableError, matches: Iterable[str]) -> None:
        list_items.reorder_list_items(exception, matches)
