import pytest

from attribute_observer.hooks import EVENTS
from attribute_observer.observers import observer_method_name, parse_method_name, parse_observer_methods


class ProfileObserver:
    def onNameUpdated(self, model, new, old):
        pass

    def onEmailUpdated(self, model, new, old):
        pass

    def onFirstNameCreating(self, model, new, old):
        pass

    def onUpdatedAtSaved(self, model, new, old):
        pass

    def onNameRenamed(self, model, new, old):
        pass

    def onboarding(self):
        pass

    def handleNameUpdated(self, model, new, old):
        pass

    def _onSecretUpdated(self, model, new, old):
        pass


class ExtendedObserver(ProfileObserver):
    def onAgeDeleted(self, model, new, old):
        pass

    def onNameUpdated(self, model, new, old):
        pass


@pytest.mark.parametrize("event", EVENTS)
def test_every_known_event_is_recognized(event):
    method = "onStatus" + event.capitalize()
    assert parse_method_name(method) == (event, "status")


@pytest.mark.parametrize(
    "method_name, expected",
    [
        ("onNameUpdated", ("updated", "name")),
        ("onFirstNameCreating", ("creating", "first_name")),
        ("onUpdatedAtUpdated", ("updated", "updated_at")),
        ("onXUpdated", ("updated", "x")),
        ("onAddress2Saved", ("saved", "address2")),
    ],
)
def test_parse_method_name(method_name, expected):
    assert parse_method_name(method_name) == expected


@pytest.mark.parametrize(
    "method_name",
    [
        "handleNameUpdated",
        "onNameRenamed",
        "onboarding",
        "on",
        "onUpdated",
        "onname_updated",
        "onNameupdated",
    ],
)
def test_non_observer_names_yield_nothing(method_name):
    assert parse_method_name(method_name) is None


def test_parse_observer_methods_groups_attributes_by_event():
    mapping = parse_observer_methods(ProfileObserver())
    assert mapping == {
        "updated": ["name", "email"],
        "creating": ["first_name"],
        "saved": ["updated_at"],
    }
    assert list(mapping) == ["updated", "creating", "saved"]


def test_parse_accepts_classes_and_walks_subclass_first():
    mapping = parse_observer_methods(ExtendedObserver)
    assert mapping == {
        "deleted": ["age"],
        "updated": ["name", "email"],
        "creating": ["first_name"],
        "saved": ["updated_at"],
    }


@pytest.mark.parametrize(
    "method_name",
    ["onNameUpdated", "onFirstNameCreating", "onUpdatedAtSaved", "onXDeleted", "onIsActiveSaving"],
)
def test_method_name_round_trip(method_name):
    event, attribute = parse_method_name(method_name)
    assert observer_method_name(attribute, event) == method_name


def test_observer_method_name_accepts_enum_events():
    from attribute_observer.hooks import LifecycleEvent

    assert observer_method_name("title", LifecycleEvent.UPDATED) == "onTitleUpdated"


def test_acronyms_parse_as_one_lower_cased_word():
    assert parse_method_name("onURLSaved") == ("saved", "url")
    assert observer_method_name("url", "saved") == "onUrlSaved"
