"""
Core building blocks for observable models.
"""

from .fields import (
    AutoField,
    BooleanField,
    DateTimeField,
    Field,
    FloatField,
    IntegerField,
    JSONField,
    StringField,
)
from .model import Model, ModelConfigurationError, ModelMeta, ModelOptions

__all__ = [
    "AutoField",
    "BooleanField",
    "DateTimeField",
    "Field",
    "FloatField",
    "IntegerField",
    "JSONField",
    "Model",
    "ModelConfigurationError",
    "ModelMeta",
    "ModelOptions",
    "StringField",
]
