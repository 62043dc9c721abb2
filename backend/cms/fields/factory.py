from cms.domain.exceptions import ConfigurationError
from cms.fields.group import Group
from cms.fields.types import default_registry
from cms.fields.validation import Validator


class Factory:
    """
    Builds the fields and groups a page type defines.

    ``build()`` clears whatever the previous build produced and lets the page
    type register its schema, so every build hands out fresh field objects
    and a fresh validator.
    """

    def __init__(self, registry=None, validator=None):
        self._registry = registry or default_registry()
        self._base_validator = validator or Validator()
        self._fields = {}
        self._validator = self._fresh_validator()

    def _fresh_validator(self):
        return self._base_validator.clone().clear()

    def build(self, page_type):
        self.clear()
        page_type.set_fields(self)
        return self

    def add_field(self, type, name, label=None):
        field = self.get_field(type, name, label)
        self.add(field)
        return field

    def add_group(self, name, label=None):
        group = self.get_group(name, label)
        self.add(group)
        return group

    def add(self, field):
        if field.get_name() in self._fields:
            raise ConfigurationError(
                f"A field with the name `{field.get_name()}` already exists on the field factory"
            )
        field.set_validator(self._validator)
        self._fields[field.get_name()] = field
        return field

    def clear(self):
        self._fields = {}
        self._validator = self._fresh_validator()
        return self

    def get_field(self, type, name, label=None):
        return self._registry.create(type, name, label)

    def get_group(self, name, label=None):
        # Groups validate in their own scope, cut from the page level validator
        return Group(name, label, validator=self._validator.clone().clear())

    def get(self, name):
        return self._fields.get(name)

    def get_validator(self):
        return self._validator

    def get_registry(self):
        return self._registry

    def items(self):
        return self._fields.items()

    def __iter__(self):
        return iter(self._fields.values())

    def __len__(self):
        return len(self._fields)
