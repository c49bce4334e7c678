from dataclasses import dataclass, field
from typing import Any

from starlette.requests import Request


@dataclass
class CrudState:
    search_values: dict[str, Any] = field(default_factory=dict)
    loaded_values: dict[str, Any] = field(default_factory=dict)
    sort_column: str | None = None
    sort_direction: str | None = None
    row_number: int = 1


def build_crud_state() -> CrudState:
    return CrudState()


def get_crud_state(request: Request) -> CrudState:
    state = getattr(request.state, "crud", None)
    if isinstance(state, CrudState):
        return state
    state = build_crud_state()
    request.state.crud = state
    return state
