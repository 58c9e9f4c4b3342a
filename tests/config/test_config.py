import pytest

from attribute_observer.config import (
    CONFIG_ENV_VAR,
    ObserverConfig,
    ObserverConfigurationError,
    import_from_string,
)


class LocalModel:
    pass


def test_from_mapping_preserves_order_and_normalizes_entries():
    config = ObserverConfig.from_mapping(
        {
            "observers": {
                "app.models:Post": ["app.observers:A", " app.observers.B "],
                "app.models:User": "app.observers:C",
                LocalModel: None,
            }
        }
    )

    assert list(config.observers) == ["app.models:Post", "app.models:User", LocalModel]
    assert config.observers["app.models:Post"] == ["app.observers:A", "app.observers.B"]
    assert config.observers_for("app.models:User") == ["app.observers:C"]
    assert config.observers_for(LocalModel) == []
    assert config.observers_for("missing") == []


def test_missing_observers_key_means_empty_configuration():
    assert not ObserverConfig.from_mapping({})
    assert not ObserverConfig.from_mapping(None)
    assert not ObserverConfig.from_mapping({"observers": None})


@pytest.mark.parametrize(
    "data",
    [
        ["not", "a", "mapping"],
        {"observers": ["app.models:Post"]},
        {"observers": {"app.models:Post": {"nested": "mapping"}}},
        {"observers": {"app.models:Post": [42]}},
        {"observers": {"": ["app.observers:A"]}},
    ],
)
def test_malformed_configuration_raises(data):
    with pytest.raises(ObserverConfigurationError):
        ObserverConfig.from_mapping(data)


def test_from_yaml_matches_mapping(tmp_path):
    path = tmp_path / "attribute_observer.yaml"
    path.write_text(
        "observers:\n"
        "  app.models:Post:\n"
        "    - app.observers:PostObserver\n"
        "    - app.observers:AuditObserver\n",
        encoding="utf-8",
    )

    config = ObserverConfig.from_yaml(path)

    assert config.observers == {
        "app.models:Post": ["app.observers:PostObserver", "app.observers:AuditObserver"]
    }
    assert config.source == str(path)


def test_from_yaml_reports_invalid_files(tmp_path):
    with pytest.raises(ObserverConfigurationError):
        ObserverConfig.from_yaml(tmp_path / "missing.yaml")

    broken = tmp_path / "broken.yaml"
    broken.write_text("observers: [unclosed\n", encoding="utf-8")
    with pytest.raises(ObserverConfigurationError):
        ObserverConfig.from_yaml(broken)


def test_from_env_uses_explicit_path(tmp_path, monkeypatch):
    path = tmp_path / "custom.yaml"
    path.write_text("observers:\n  app.models:Post: [app.observers:A]\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert ObserverConfig.from_env().observers == {"app.models:Post": ["app.observers:A"]}


def test_from_env_falls_back_to_default_file(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    assert not ObserverConfig.from_env()

    (tmp_path / "attribute_observer.yaml").write_text(
        "observers:\n  app.models:Post: [app.observers:A]\n", encoding="utf-8"
    )
    assert ObserverConfig.from_env().observers_for("app.models:Post") == ["app.observers:A"]


def test_from_env_missing_explicit_file_is_an_error(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.yaml"))
    with pytest.raises(ObserverConfigurationError):
        ObserverConfig.from_env()


def test_import_from_string_supports_both_notations():
    from attribute_observer.persistence import Session

    assert import_from_string("attribute_observer.persistence:Session") is Session
    assert import_from_string("attribute_observer.persistence.Session") is Session


@pytest.mark.parametrize(
    "value",
    ["", "nodots", "attribute_observer.persistence:Missing", "no_such_module_xyz:Thing"],
)
def test_import_from_string_errors(value):
    with pytest.raises(ObserverConfigurationError):
        import_from_string(value)
