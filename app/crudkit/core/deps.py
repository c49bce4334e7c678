from fastapi import Request

from app.crudkit.core.context import get_crud_state
from app.crudkit.services.crud import CrudHelper


def get_crud(request: Request) -> CrudHelper:
    return CrudHelper(request, get_crud_state(request))
