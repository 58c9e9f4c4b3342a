"""
Model base classes with change tracking for attribute observers.
"""

from __future__ import annotations

import copy
import re
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Type, TypeVar

from .fields import AutoField, Field


_ACCESSOR_RE = re.compile(r"^get_(?P<attribute>[a-z0-9_]+)_attribute$")


class ModelConfigurationError(Exception):
    """Raised when a model class is misconfigured."""


@dataclass
class ModelOptions:
    """
    Container for model metadata calculated by :class:`ModelMeta`.
    """

    model: Type["Model"]
    abstract: bool = False
    fields: "OrderedDict[str, Field]" = field(default_factory=OrderedDict)
    primary_key: Optional[Field] = None
    casts: Dict[str, str] = field(default_factory=dict)
    accessors: Dict[str, str] = field(default_factory=dict)

    def add_field(self, field_obj: Field) -> None:
        if field_obj.name in self.fields:
            raise ModelConfigurationError(
                f"Duplicate field name '{field_obj.name}' on model '{self.model.__name__}'"
            )
        self.fields[field_obj.name] = field_obj
        if field_obj.primary_key:
            if self.primary_key and self.primary_key is not field_obj:
                raise ModelConfigurationError(
                    f"Multiple primary keys defined on model '{self.model.__name__}'"
                )
            self.primary_key = field_obj

    def get_field(self, name: str) -> Field:
        try:
            return self.fields[name]
        except KeyError as exc:
            raise KeyError(f"Unknown field '{name}' on model '{self.model.__name__}'") from exc

    def get_fields(self) -> Iterable[Field]:
        return self.fields.values()


TModel = TypeVar("TModel", bound="Model")


class ModelMeta(type):
    """
    Metaclass responsible for collecting fields, casts and accessors.
    """

    def __new__(mcls, name: str, bases: tuple[type, ...], attrs: Dict[str, Any]) -> "ModelMeta":
        # The base Model class carries no metadata of its own.
        if not bases:
            return super().__new__(mcls, name, bases, attrs)

        declared_fields: Dict[str, Field] = {}
        for attr_name, value in list(attrs.items()):
            if isinstance(value, Field):
                declared_fields[attr_name] = attrs.pop(attr_name)

        cls = super().__new__(mcls, name, bases, attrs)

        meta = attrs.get("Meta")
        abstract = bool(getattr(meta, "abstract", False))
        options = ModelOptions(model=cls, abstract=abstract)

        for base in reversed(cls.__mro__[1:]):
            base_meta = base.__dict__.get("_meta")
            if isinstance(base_meta, ModelOptions):
                for inherited in base_meta.get_fields():
                    if inherited.name not in options.fields:
                        options.add_field(inherited)
                options.casts.update(base_meta.casts)

        sorted_fields = sorted(
            declared_fields.items(), key=lambda item: item[1].creation_counter
        )
        for attr_name, field_obj in sorted_fields:
            field_obj.contribute_to_class(cls, attr_name)
            options.add_field(field_obj)

        if not options.primary_key and not abstract:
            if "id" in options.fields:
                raise ModelConfigurationError(
                    f"Model '{name}' defines a field named 'id' but no primary key. "
                    "Either set primary_key=True on that field or define a different name."
                )
            auto_field = AutoField()
            auto_field.contribute_to_class(cls, "id")
            options.add_field(auto_field)
            options.fields.move_to_end("id", last=False)

        for field_obj in options.get_fields():
            if field_obj.cast:
                options.casts[field_obj.require_name()] = field_obj.cast
        options.casts.update(getattr(meta, "casts", None) or {})

        for klass in reversed(cls.__mro__):
            for attr_name, value in vars(klass).items():
                match = _ACCESSOR_RE.match(attr_name)
                if match and callable(value):
                    options.accessors[match.group("attribute")] = attr_name

        cls._meta = options
        return cls


class Model(metaclass=ModelMeta):
    """
    Base model providing attribute storage and change tracking.

    Three snapshots are kept per instance: the current raw attributes, the
    original values from the last sync, and the change set of the operation
    in flight (or the last completed one). Persistence is supplied by
    :class:`~attribute_observer.persistence.Session`.
    """

    _meta: ModelOptions

    def __init__(self, **kwargs: Any) -> None:
        if self._meta.abstract:
            raise ModelConfigurationError(
                f"Abstract model '{self.__class__.__name__}' cannot be instantiated."
            )
        self._attributes: Dict[str, Any] = {}
        self._original: Dict[str, Any] = {}
        self._relations: Dict[str, Any] = {}
        self._original_relations: Dict[str, Any] = {}
        self._changes: Dict[str, Any] = {}
        self._exists = False

        for field_obj in self._meta.get_fields():
            name = field_obj.require_name()
            if name in kwargs:
                continue
            if field_obj.primary_key and not field_obj.has_default:
                # Primary key is assigned by the session on insert.
                continue
            if field_obj.has_default:
                setattr(self, name, field_obj.get_default())
        self.fill(**kwargs)

    def __repr__(self) -> str:
        field_parts = ", ".join(
            f"{name}={value!r}" for name, value in self._attributes.items()
        )
        return f"<{self.__class__.__name__} {field_parts}>"

    def __getattr__(self, name: str) -> Any:
        # Only consulted when normal lookup fails: exposes dynamic attributes,
        # accessors and loaded relations as plain attributes.
        if name.startswith("_"):
            raise AttributeError(name)
        if (
            name in self._attributes
            or name in self._relations
            or name in self._meta.accessors
        ):
            return self.get_attribute_value(name)
        raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")

    @classmethod
    def from_storage(cls: Type[TModel], **values: Any) -> TModel:
        """
        Build an instance representing an already persisted record.
        """
        instance = cls(**values)
        instance._exists = True
        instance.sync_original()
        return instance

    @property
    def pk(self) -> Any:
        if not self._meta.primary_key:
            raise ModelConfigurationError(
                f"Model '{self.__class__.__name__}' does not define a primary key."
            )
        return self._attributes.get(self._meta.primary_key.require_name())

    @property
    def exists(self) -> bool:
        return self._exists

    # Attribute access -----------------------------------------------------
    def fill(self, **values: Any) -> "Model":
        for name, value in values.items():
            self.set_attribute(name, value)
        return self

    def set_attribute(self, name: str, value: Any) -> None:
        if name in self._meta.fields:
            setattr(self, name, value)
        else:
            self._attributes[name] = value

    def get_attributes(self) -> Dict[str, Any]:
        return dict(self._attributes)

    def get_casts(self) -> Dict[str, str]:
        return dict(self._meta.casts)

    def has_get_mutator(self, name: str) -> bool:
        return name in self._meta.accessors

    def get_attribute_value(self, name: str) -> Any:
        if name in self._meta.accessors:
            return self._mutate_attribute(name, self._attributes.get(name))
        if name in self._attributes:
            return self._attributes[name]
        return self._relations.get(name)

    def get_original(self, name: Optional[str] = None) -> Any:
        if name is None:
            original = dict(self._original_relations)
            original.update(self._original)
            return original
        if name in self._meta.accessors:
            return self._mutate_attribute(name, self._original.get(name))
        if name in self._original:
            return self._original[name]
        return self._original_relations.get(name)

    def to_dict(self) -> Dict[str, Any]:
        return {name: self.get_attribute_value(name) for name in self._attributes}

    def _mutate_attribute(self, name: str, value: Any) -> Any:
        accessor: Callable[[Any], Any] = getattr(self, self._meta.accessors[name])
        return accessor(value)

    # Relations ----------------------------------------------------------
    def get_relations(self) -> Dict[str, Any]:
        return dict(self._relations)

    def set_relation(self, name: str, value: Any) -> "Model":
        self._relations[name] = value
        return self

    def unset_relation(self, name: str) -> "Model":
        self._relations.pop(name, None)
        self._original_relations.pop(name, None)
        return self

    def relation_loaded(self, name: str) -> bool:
        return name in self._relations

    # Change tracking ----------------------------------------------------
    def get_dirty(self) -> Dict[str, Any]:
        dirty: Dict[str, Any] = {}
        for name, value in self._attributes.items():
            if name not in self._original or self._original[name] != value:
                dirty[name] = value
        for name, value in self._relations.items():
            if name not in self._original_relations or self._original_relations[name] != value:
                dirty[name] = value
        return dirty

    def is_dirty(self, name: Optional[str] = None) -> bool:
        dirty = self.get_dirty()
        if name is None:
            return bool(dirty)
        return name in dirty

    def was_changed(self, name: Optional[str] = None) -> bool:
        if name is None:
            return bool(self._changes)
        return name in self._changes

    def get_changes(self) -> Dict[str, Any]:
        return dict(self._changes)

    def sync_changes(self) -> "Model":
        self._changes = self.get_dirty()
        return self

    def sync_original(self) -> "Model":
        self._original = copy.deepcopy(self._attributes)
        self._original_relations = dict(self._relations)
        return self

    # Lifecycle hooks ----------------------------------------------------
    @classmethod
    def register_hook(cls, event, handler) -> None:
        from ..hooks import hooks

        hooks.register(event, handler, model=cls)

    @classmethod
    def creating(cls, handler) -> None:
        cls.register_hook("creating", handler)

    @classmethod
    def created(cls, handler) -> None:
        cls.register_hook("created", handler)

    @classmethod
    def updating(cls, handler) -> None:
        cls.register_hook("updating", handler)

    @classmethod
    def updated(cls, handler) -> None:
        cls.register_hook("updated", handler)

    @classmethod
    def saving(cls, handler) -> None:
        cls.register_hook("saving", handler)

    @classmethod
    def saved(cls, handler) -> None:
        cls.register_hook("saved", handler)

    @classmethod
    def deleting(cls, handler) -> None:
        cls.register_hook("deleting", handler)

    @classmethod
    def deleted(cls, handler) -> None:
        cls.register_hook("deleted", handler)
