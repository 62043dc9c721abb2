from cms.fields.base import BaseField, Field, MultipleValueField
from cms.fields.factory import Factory
from cms.fields.group import Group, RepeatableContainer
from cms.fields.types import FieldTypeRegistry, default_registry
from cms.fields.validation import Validator

__all__ = [
    "BaseField",
    "Factory",
    "Field",
    "FieldTypeRegistry",
    "Group",
    "MultipleValueField",
    "RepeatableContainer",
    "Validator",
    "default_registry",
]
