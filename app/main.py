from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from app.crudkit.api import api_router
from app.crudkit.core.config import settings
from app.crudkit.core.errors import setup_exception_handlers
from app.crudkit.core.logging import configure_logging
from app.crudkit.middleware.crud_state import CrudStateMiddleware
from app.crudkit.middleware.observability import ObservabilityMiddleware
from app.crudkit.middleware.trace import TraceIdMiddleware
from app.crudkit.services.records import RecordStore


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.APP_NAME)
    app.state.records = RecordStore()
    app.add_middleware(CrudStateMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        same_site=settings.SESSION_SAME_SITE,
        https_only=settings.SESSION_HTTPS_ONLY,
    )
    app.add_middleware(TraceIdMiddleware)
    app.add_middleware(ObservabilityMiddleware)
    setup_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
