from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.crudkit.core.context import build_crud_state


class CrudStateMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request.state.crud = build_crud_state()
        return await call_next(request)
