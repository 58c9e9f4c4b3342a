"""
Configuration loading for attribute observers.

The configuration maps model identifiers to the ordered list of observer
identifiers attached to them::

    observers:
      myapp.models:Post:
        - myapp.observers:PostObserver

Identifiers are classes or import strings, either ``"package.module:Name"``
or ``"package.module.Name"``.
"""

from __future__ import annotations

import importlib
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml


DEFAULT_CONFIG_FILE = "attribute_observer.yaml"
CONFIG_ENV_VAR = "ATTRIBUTE_OBSERVER_CONFIG"
OBSERVERS_KEY = "observers"

Identifier = Union[str, type]


class ObserverConfigurationError(Exception):
    """Raised when observer configuration cannot be loaded or is malformed."""


def import_from_string(import_str: str) -> Any:
    """
    Import an object given ``"module:attr"`` or ``"module.attr"`` notation.
    """
    if not isinstance(import_str, str) or not import_str.strip():
        raise ObserverConfigurationError(f"Invalid import string {import_str!r}")

    if ":" in import_str:
        module_path, _, attr_path = import_str.partition(":")
    else:
        module_path, _, attr_path = import_str.rpartition(".")
    if not module_path or not attr_path:
        raise ObserverConfigurationError(
            f"Import string '{import_str}' must look like 'package.module:Name'"
        )

    try:
        target: Any = importlib.import_module(module_path)
    except ImportError as exc:
        raise ObserverConfigurationError(
            f"Could not import module '{module_path}' for '{import_str}': {exc}"
        ) from exc

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ObserverConfigurationError(
                f"Module '{module_path}' has no attribute '{attr_path}'"
            ) from exc
    return target


def _validate_identifier(value: Any, *, context: str) -> Identifier:
    if isinstance(value, type):
        return value
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise ObserverConfigurationError(
        f"{context} must be a class or an import string, got {value!r}"
    )


@dataclass
class ObserverConfig:
    """
    Normalized observer registration, read-only after loading.
    """

    observers: Dict[Identifier, List[Identifier]] = field(default_factory=dict)
    source: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]], *, source: Optional[str] = None) -> "ObserverConfig":
        if data is None:
            return cls(source=source)
        if not isinstance(data, Mapping):
            raise ObserverConfigurationError(
                f"Observer configuration must be a mapping, got {type(data).__name__}"
            )

        raw_observers = data.get(OBSERVERS_KEY)
        if raw_observers is None:
            return cls(source=source)
        if not isinstance(raw_observers, Mapping):
            raise ObserverConfigurationError(
                f"'{OBSERVERS_KEY}' must map models to observer lists"
            )

        observers: Dict[Identifier, List[Identifier]] = {}
        for model_id, observer_ids in raw_observers.items():
            model_key = _validate_identifier(model_id, context="Model identifier")
            if observer_ids is None:
                observer_ids = []
            elif isinstance(observer_ids, (str, type)):
                observer_ids = [observer_ids]
            elif not isinstance(observer_ids, (list, tuple)):
                raise ObserverConfigurationError(
                    f"Observers for '{model_key}' must be a list, got {type(observer_ids).__name__}"
                )
            observers[model_key] = [
                _validate_identifier(observer_id, context=f"Observer for '{model_key}'")
                for observer_id in observer_ids
            ]
        return cls(observers=observers, source=source)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ObserverConfig":
        config_path = Path(path)
        try:
            with config_path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except OSError as exc:
            raise ObserverConfigurationError(f"Could not read config file '{config_path}': {exc}") from exc
        except yaml.YAMLError as exc:
            raise ObserverConfigurationError(f"Invalid YAML in '{config_path}': {exc}") from exc
        return cls.from_mapping(data, source=str(config_path))

    @classmethod
    def from_env(cls, env_var: str = CONFIG_ENV_VAR) -> "ObserverConfig":
        """
        Load the file named by ``env_var``, falling back to
        ``attribute_observer.yaml`` in the working directory. A missing default
        file yields an empty configuration; a missing explicit file is an error.
        """
        explicit = os.getenv(env_var)
        if explicit:
            return cls.from_yaml(explicit)
        default_path = Path.cwd() / DEFAULT_CONFIG_FILE
        if default_path.exists():
            return cls.from_yaml(default_path)
        return cls(source=None)

    def observers_for(self, model: Identifier) -> List[Identifier]:
        return list(self.observers.get(model, []))

    def __bool__(self) -> bool:
        return bool(self.observers)
