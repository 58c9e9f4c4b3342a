"""
Field definitions and descriptors for observable models.
"""

from __future__ import annotations

import copy
import json
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional, Sequence, cast

if TYPE_CHECKING:
    from .model import Model


class FieldError(Exception):
    """Internal exception for field configuration issues."""


class Field:
    """
    Base class for model field descriptors.

    Fields store their values in the raw attribute dictionary of a model
    instance, which is what change tracking compares against the original
    snapshot. ``cast`` names the conversion applied by :meth:`to_python` and is
    reported through ``Model.get_casts``.
    """

    cast: Optional[str] = None
    _creation_counter = 0

    def __init__(
        self,
        *,
        primary_key: bool = False,
        nullable: bool = True,
        default: Any = None,
        choices: Optional[Sequence[Any]] = None,
    ) -> None:
        self.primary_key = primary_key
        self.nullable = nullable
        self.default = default
        self.choices = tuple(choices) if choices is not None else None

        self.model: type["Model"] | None = None  # Will be set during contribute_to_class
        self.name: str | None = None
        self.creation_counter = Field._creation_counter
        Field._creation_counter += 1

    # Descriptor protocol -------------------------------------------------
    def __get__(self, instance: object | None, owner: type | None = None) -> Any:
        if instance is None:
            return self

        model_instance = cast("Model", instance)
        return model_instance.get_attribute_value(self.require_name())

    def __set__(self, instance: object, value: Any) -> None:
        model_instance = cast("Model", instance)
        name = self.require_name()
        if value is None:
            if not self.nullable and not self.primary_key:
                raise ValueError(f"Field '{name}' cannot be None")
            model_instance._attributes[name] = None
            return

        if self.choices and value not in self.choices:
            raise ValueError(f"Value '{value}' for field '{name}' not in choices {self.choices}")

        model_instance._attributes[name] = self.to_python(value)

    # Metadata helpers ----------------------------------------------------
    def contribute_to_class(self, model: type["Model"], name: str) -> None:
        """
        Attach the field to the model class as a descriptor.
        """
        self.model = model
        self.name = name
        setattr(model, name, self)

    def require_name(self) -> str:
        if self.name is None:
            raise FieldError("Field name is not set.")
        return self.name

    # Conversion ----------------------------------------------------------
    def get_default(self) -> Any:
        if callable(self.default):
            return self.default()
        return self.default

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def to_python(self, value: Any) -> Any:
        return value

    def pre_update(self, instance: "Model") -> None:
        """Called by the session before an existing instance is updated."""


class AutoField(Field):
    """
    Auto-incrementing integer field used as default primary key.
    """

    cast = "int"

    def __init__(self) -> None:
        super().__init__(primary_key=True, nullable=False)

    def to_python(self, value: Any) -> int | None:
        if value is None:
            return value
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid value '{value}' for AutoField") from exc


class IntegerField(Field):
    cast = "int"

    def to_python(self, value: Any) -> int | None:
        if value is None:
            return value
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid integer value '{value}'") from exc


class FloatField(Field):
    cast = "float"

    def to_python(self, value: Any) -> float | None:
        if value is None:
            return value
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid float value '{value}'") from exc


class BooleanField(Field):
    cast = "bool"

    def __init__(self, *, default: Any = False, **kwargs: Any) -> None:
        kwargs.setdefault("nullable", False)
        super().__init__(default=default, **kwargs)

    @property
    def has_default(self) -> bool:
        return True

    def to_python(self, value: Any) -> bool | None:
        if value is None:
            return value
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.lower()
            if lowered in {"true", "t", "1"}:
                return True
            if lowered in {"false", "f", "0"}:
                return False
        if isinstance(value, (int, float)):
            return bool(value)
        raise ValueError(f"Invalid boolean value '{value}'")


class StringField(Field):
    cast = "string"

    def __init__(self, *, max_length: int = 255, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.max_length = max_length

    def to_python(self, value: Any) -> str | None:
        if value is None:
            return value
        result = str(value)
        if self.max_length and len(result) > self.max_length:
            field_name = self.require_name()
            raise ValueError(f"Value for field '{field_name}' exceeds max_length {self.max_length}")
        return result


class DateTimeField(Field):
    cast = "datetime"

    def __init__(
        self, *, auto_now: bool = False, auto_now_add: bool = False, **kwargs: Any
    ) -> None:
        super().__init__(**kwargs)
        self.auto_now = auto_now
        self.auto_now_add = auto_now_add

    @property
    def has_default(self) -> bool:
        return self.auto_now or self.auto_now_add or super().has_default

    def get_default(self) -> Any:
        if self.auto_now or self.auto_now_add:
            return datetime.now(timezone.utc)
        return super().get_default()

    def pre_update(self, instance: "Model") -> None:
        if self.auto_now:
            setattr(instance, self.require_name(), datetime.now(timezone.utc))

    def to_python(self, value: Any) -> datetime | None:
        if value is None:
            return value
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value)
            except ValueError as exc:
                raise ValueError(f"Invalid datetime value '{value}' for field '{self.name}'") from exc
        raise ValueError(f"Expected datetime for field '{self.name}', received {value!r}")


class JSONField(Field):
    """
    Stores decoded JSON documents. Strings are parsed; containers are copied
    so later in-place edits do not leak into the original snapshot.
    """

    cast = "json"

    def to_python(self, value: Any) -> Any:
        if value is None:
            return value
        if isinstance(value, (str, bytes)):
            try:
                return json.loads(value)
            except ValueError as exc:
                raise ValueError(f"Invalid JSON value for field '{self.name}'") from exc
        return copy.deepcopy(value)
