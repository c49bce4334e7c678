from __future__ import annotations

from datetime import date
from typing import Any, Iterable

from pydantic import ValidationError

from app.crudkit.core.error_catalog import PrintableError
from app.crudkit.schemas.records import Record, RecordCreateRequest
from app.crudkit.web.grammar import humanize
from app.crudkit.web.html_utils import encode, prepare


SORTABLE_COLUMNS: tuple[str, ...] = ("name", "email", "status", "created")

SAMPLE_RECORDS: tuple[dict, ...] = (
    {"id": 1, "name": "Ada Lovelace", "email": "ada@example.com", "status": "active", "created": date(2024, 3, 1)},
    {"id": 2, "name": "Grace Hopper", "email": "grace@example.com", "status": "pending", "created": date(2024, 1, 15)},
    {"id": 3, "name": "Alan Turing", "email": "alan@example.com", "status": "archived", "created": date(2023, 11, 30)},
    {"id": 4, "name": "Edsger Dijkstra", "email": "edsger@example.com", "status": "active", "created": date(2024, 2, 20)},
    {"id": 5, "name": "Barbara Liskov", "email": "barbara@example.com", "status": "active", "created": date(2023, 12, 5)},
)


class RecordStore:
    def __init__(self, records: Iterable[dict | Record] = SAMPLE_RECORDS):
        self._records = [Record.model_validate(record) for record in records]

    def all(self) -> list[Record]:
        return list(self._records)

    def create(self, payload: RecordCreateRequest) -> Record:
        next_id = max((record.id for record in self._records), default=0) + 1
        record = Record(id=next_id, created=date.today(), **payload.model_dump())
        self._records.append(record)
        return record


def filter_records(
    records: Iterable[Record],
    *,
    search: str | None = None,
    status: str | None = None,
    include_archived: bool = False,
) -> list[Record]:
    needle = (search or "").strip().lower()
    result = []
    for record in records:
        if needle and needle not in record.name.lower() and needle not in record.email.lower():
            continue
        if status and record.status != status:
            continue
        if not include_archived and not status and record.status == "archived":
            continue
        result.append(record)
    return result


def sort_records(records: Iterable[Record], column: str | None, direction: str | None) -> list[Record]:
    records = list(records)
    if column not in SORTABLE_COLUMNS:
        return records
    return sorted(records, key=lambda record: getattr(record, column), reverse=(direction == "desc"))


def build_printable_error(exc: ValidationError, status_code: int | None = None) -> PrintableError:
    """Turn a pydantic validation failure into an HTML list, one ``<li>`` per field."""
    items = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "record"
        items.append(
            f'<li class="{encode(field)}"><span>{prepare(humanize(field))}</span>: '
            f'{prepare(error.get("msg", "Invalid value"))}</li>'
        )
    message = "<p>The following problems were found:</p>\n<ul>\n" + "\n".join(items) + "\n</ul>"
    return PrintableError(message, status_code=status_code)


def parse_record(payload: dict[str, Any]) -> RecordCreateRequest:
    try:
        return RecordCreateRequest.model_validate(payload)
    except ValidationError as exc:
        raise build_printable_error(exc) from exc
