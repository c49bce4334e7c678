from datetime import date
from typing import Literal

from pydantic import BaseModel, Field


RecordStatus = Literal["active", "pending", "archived"]

RECORD_STATUSES: tuple[str, ...] = ("active", "pending", "archived")


class Record(BaseModel):
    id: int
    name: str
    email: str
    status: RecordStatus
    created: date


class RecordCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    status: RecordStatus = "active"
