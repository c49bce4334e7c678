from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import HTMLResponse

from app.crudkit.core.deps import get_crud
from app.crudkit.core.error_catalog import PrintableError
from app.crudkit.core.logging import log_json
from app.crudkit.schemas.records import RECORD_STATUSES, Record
from app.crudkit.services.crud import CrudHelper
from app.crudkit.services.records import (
    SORTABLE_COLUMNS,
    RecordStore,
    filter_records,
    parse_record,
    sort_records,
)
from app.crudkit.web.grammar import humanize
from app.crudkit.web.html_utils import encode, prepare


router = APIRouter()
logger = logging.getLogger(__name__)


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.records


def render_search_form(crud: CrudHelper, *, search: Any, status: Any, archived: Any) -> str:
    options = [crud.print_option("Any status", "", status)]
    options.extend(crud.print_option(humanize(value), value, status) for value in RECORD_STATUSES)
    path = encode(crud.urls.get())
    return (
        f'<form method="get" action="{path}">'
        f'<input type="text" name="search" value="{encode(search)}" />'
        f'<select name="status">{"".join(options)}</select>'
        '<input type="hidden" name="archived" value="" />'
        f'<label><input type="checkbox" name="archived" value="1"{crud.show_checked("1", archived)} />'
        " Show archived</label>"
        '<input type="submit" value="Search" />'
        f' <a href="{path}?reset">Reset</a>'
        "</form>"
    )


def render_records_table(crud: CrudHelper, records: list[Record], *, highlight: Any = None) -> str:
    headers = "".join(
        f'<th class="{crud.get_column_class(column)}">{crud.print_sortable_column(column)}</th>'
        for column in SORTABLE_COLUMNS
    )
    rows = []
    for record in records:
        cells = "".join(
            f'<td class="{crud.get_column_class(column)}">{prepare(getattr(record, column))}</td>'
            for column in SORTABLE_COLUMNS
        )
        rows.append(f'<tr class="{crud.get_row_class(record.id, highlight)}">{cells}</tr>')
    if not rows:
        rows.append(f'<tr><td colspan="{len(SORTABLE_COLUMNS)}">No records found</td></tr>')
    return f"<table><thead><tr>{headers}</tr></thead><tbody>{''.join(rows)}</tbody></table>"


@router.get("/records", response_class=HTMLResponse)
def list_records(
    crud: CrudHelper = Depends(get_crud),
    store: RecordStore = Depends(get_record_store),
):
    search = crud.get_search_value("search")
    status = crud.get_search_value("status")
    archived = crud.get_search_value("archived")
    sort_column = crud.get_sort_column(SORTABLE_COLUMNS)
    sort_direction = crud.get_sort_direction("asc")
    crud.redirect_with_loaded_values()

    highlight = crud.reader.get("highlight", int)
    records = filter_records(
        store.all(),
        search=search,
        status=status if status in RECORD_STATUSES else None,
        include_archived=bool(archived),
    )
    records = sort_records(records, sort_column, sort_direction)

    body = render_search_form(crud, search=search, status=status, archived=archived)
    body += render_records_table(crud, records, highlight=highlight)
    return HTMLResponse(f"<html><head><title>Records</title></head><body>{body}</body></html>")


@router.post("/records")
def create_record(
    payload: dict[str, Any] = Body(...),
    hide: list[str] = Query(default=[]),
    order: list[str] = Query(default=[]),
    crud: CrudHelper = Depends(get_crud),
    store: RecordStore = Depends(get_record_store),
):
    try:
        data = parse_record(payload)
    except PrintableError as exc:
        if hide:
            crud.remove_list_items(exc, hide)
        if order:
            crud.reorder_list_items(exc, order)
        raise

    record = store.create(data)
    log_json(logger, {"event": "record_created", "record_id": record.id})
    crud.urls.redirect(f"/records?highlight={record.id}", status_code=303)
