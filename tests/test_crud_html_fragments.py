from app.crudkit.services.crud import is_selected, loose_equals


def test_print_option_marks_selected_value(make_crud):
    crud = make_crud()

    assert crud.print_option("Active", "active", "active") == '<option value="active" selected="selected">Active</option>'
    assert crud.print_option("Active", "active", "pending") == '<option value="active">Active</option>'
    assert crud.print_option("Active", "active") == '<option value="active">Active</option>'


def test_print_option_matches_list_membership(make_crud):
    crud = make_crud()

    assert 'selected="selected"' in crud.print_option("B", "b", ["a", "b"])
    assert 'selected="selected"' not in crud.print_option("C", "c", ["a", "b"])


def test_print_option_escapes_value_and_text(make_crud):
    crud = make_crud()

    option = crud.print_option('<Tom & "Jerry">', 'a"b')
    assert option == '<option value="a&quot;b">&lt;Tom &amp; "Jerry"&gt;</option>'


def test_empty_option_is_selected_when_nothing_is_chosen(make_crud):
    assert 'selected="selected"' in make_crud().print_option("Any", "", None)


def test_show_checked(make_crud):
    crud = make_crud()

    assert crud.show_checked("1", "1") == ' checked="checked"'
    assert crud.show_checked("1", 1)
    assert crud.show_checked("b", ["a", "b"]) == ' checked="checked"'
    assert crud.show_checked("1", None) == ""
    assert not crud.show_checked("c", ["a", "b"])


def test_loose_equality_rules():
    assert loose_equals(1, "1")
    assert loose_equals(None, "")
    assert not loose_equals("a", ["a"])
    assert is_selected(2, ("1", "2"))
    assert not is_selected("3", {"1", "2"})


def test_column_class_reflects_active_sort(make_crud):
    crud = make_crud("sort=email")
    crud.get_sort_column("name", "email")

    assert crud.get_column_class("email") == "sorted"
    assert crud.get_column_class("name") == ""


def test_sortable_column_for_inactive_column(make_crud):
    crud = make_crud("sort=name&dir=desc")
    crud.get_sort_column("name", "email")
    crud.get_sort_direction("asc")

    link = crud.print_sortable_column("email")
    assert link == '<a href="/records?sort=email&amp;dir=asc" class="sortable_column">Email</a>'


def test_sortable_column_toggles_direction(make_crud):
    crud = make_crud("sort=name&dir=asc", session={})
    crud.get_sort_column("name", "email")
    crud.get_sort_direction("asc")
    link = crud.print_sortable_column("name")
    assert link == '<a href="/records?sort=name&amp;dir=desc" class="sortable_column asc">Name</a>'

    crud = make_crud("sort=name&dir=desc", session={})
    crud.get_sort_column("name", "email")
    crud.get_sort_direction("asc")
    link = crud.print_sortable_column("name")
    assert link == '<a href="/records?sort=name&amp;dir=asc" class="sortable_column desc">Name</a>'


def test_sortable_column_keeps_search_values(make_crud):
    crud = make_crud("status=active&name=ada+l&sort=name&dir=asc")
    crud.get_search_value("name")
    crud.get_search_value("status")
    crud.get_sort_column("name", "email")
    crud.get_sort_direction("asc")

    link = crud.print_sortable_column("email", "E-mail <address>")
    assert link == (
        '<a href="/records?status=active&amp;name=ada+l&amp;sort=email&amp;dir=asc" '
        'class="sortable_column">E-mail &lt;address&gt;</a>'
    )


def test_sortable_column_humanizes_the_column(make_crud):
    crud = make_crud()

    assert ">Created At</a>" in crud.print_sortable_column("created_at")
    assert ">User ID</a>" in crud.print_sortable_column("user_id")


def test_row_class_sequence(make_crud):
    crud = make_crud()

    assert [crud.get_row_class() for _ in range(4)] == ["even first", "odd", "even", "odd"]


def test_row_class_highlights_affected_row_and_advances(make_crud):
    crud = make_crud()

    assert crud.get_row_class(1, 2) == "even first"
    assert crud.get_row_class(2, 2) == "highlighted"
    assert crud.get_row_class(3, 2) == "even"
    assert crud.get_row_class("4", 4) == "highlighted"
    assert crud.get_row_class(5, 2) == "even"
    assert crud.state.row_number == 6


def test_row_class_never_highlights_a_missing_row_value(make_crud):
    crud = make_crud()

    assert crud.get_row_class(None, None) == "even first"
    assert crud.get_row_class(None, "") == "odd"


def test_row_class_treats_empty_and_none_as_equal(make_crud):
    crud = make_crud()

    assert crud.get_row_class("", None) == "highlighted"
    assert crud.get_row_class(3, None) == "odd"
