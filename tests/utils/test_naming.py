import pytest

from attribute_observer.utils import camel_to_snake, studly


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Name", "name"),
        ("FirstName", "first_name"),
        ("firstName", "first_name"),
        ("UpdatedAt", "updated_at"),
        ("X", "x"),
        ("Address2Line", "address2_line"),
    ],
)
def test_camel_to_snake(name, expected):
    assert camel_to_snake(name) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("name", "Name"),
        ("first_name", "FirstName"),
        ("updated_at", "UpdatedAt"),
        ("x", "X"),
        ("post-observer", "PostObserver"),
        ("PostObserver", "PostObserver"),
    ],
)
def test_studly(name, expected):
    assert studly(name) == expected


def test_studly_of_snake_round_trips_simple_names():
    for name in ("Title", "FirstName", "IsActive", "UpdatedAt"):
        assert studly(camel_to_snake(name)) == name
