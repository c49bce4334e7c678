from app.crudkit.core.config import settings


def test_search_value_defaults_without_query_or_session(make_crud):
    crud = make_crud()

    assert crud.get_search_value("name") is None
    assert crud.get_search_value("status", default="active") == "active"
    assert crud.get_search_value("page", int, 1) == 1
    assert crud.state.loaded_values == {}


def test_search_value_empty_string_without_cast_is_absent(make_crud):
    crud = make_crud("name=&page=")

    assert crud.get_search_value("name") is None
    assert crud.get_search_value("name", default="x") == "x"
    assert crud.get_search_value("page", int) == 0


def test_search_value_is_persisted_and_restored(make_crud, session_data):
    first = make_crud("name=ada")
    assert first.get_search_value("name") == "ada"
    assert first.state.loaded_values == {}
    assert session_data[f"{settings.CRUD_SESSION_NAMESPACE}/records::previous_search::name"] == "ada"

    second = make_crud()
    assert second.get_search_value("name") == "ada"
    assert second.state.search_values == {"name": "ada"}
    assert second.state.loaded_values == {"name": "ada"}


def test_query_value_wins_over_session(make_crud):
    make_crud("name=ada").get_search_value("name")

    crud = make_crud("name=grace")
    assert crud.get_search_value("name") == "grace"
    assert crud.state.loaded_values == {}

    assert make_crud().get_search_value("name") == "grace"


def test_clearing_a_field_forgets_the_previous_value(make_crud, session_data):
    make_crud("name=ada").get_search_value("name")

    crud = make_crud("name=")
    assert crud.get_search_value("name") is None
    assert session_data == {}

    assert make_crud().get_search_value("name") is None


def test_search_values_are_scoped_by_path(make_crud):
    make_crud("name=ada", path="/records").get_search_value("name")

    assert make_crud(path="/users").get_search_value("name") is None


def test_cast_values_are_restored(make_crud):
    make_crud("page=3").get_search_value("page", int, 1)

    crud = make_crud()
    assert crud.get_search_value("page", int, 1) == 3
    assert crud.state.loaded_values == {"page": 3}


def test_reset_clears_persisted_values(make_crud, session_data):
    make_crud("name=ada&status=active").get_search_value("name")
    make_crud("status=active").get_search_value("status")
    assert len(session_data) == 2

    crud = make_crud("reset")
    assert crud.was_reset_requested()
    assert crud.get_search_value("name") is None
    assert crud.get_search_value("status") is None
    assert session_data == {}

    after = make_crud()
    assert after.get_search_value("name") is None
    assert after.get_search_value("status", default="pending") == "pending"


def test_reset_marker_must_end_the_url(make_crud):
    assert make_crud("reset").was_reset_requested()
    assert make_crud("name=ada&reset").was_reset_requested()
    assert not make_crud("reset=1").was_reset_requested()
    assert not make_crud("name=reset").was_reset_requested()
    assert not make_crud("preset").was_reset_requested()
