import importlib
import os

import pytest
from fastapi.testclient import TestClient

from app.crudkit.core.context import get_crud_state
from app.crudkit.services.crud import CrudHelper
from tests.request_helpers import build_request


def _setup_app():
    os.environ["SESSION_SECRET_KEY"] = "test-secret"

    import app.crudkit.core.config as config
    import app.main as main

    importlib.reload(config)
    importlib.reload(main)

    return main.create_app()


@pytest.fixture()
def client():
    app = _setup_app()
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def session_data():
    return {}


@pytest.fixture()
def make_crud(session_data):
    def _make(query: str = "", path: str = "/records", session: dict | None = None) -> CrudHelper:
        request = build_request(path, query, session_data if session is None else session)
        return CrudHelper(request, get_crud_state(request))

    return _make
