"""Concrete field types and the registry that instantiates them by name."""
from dateutil import parser as date_parser

from cms.domain.exceptions import ConfigurationError
from cms.fields.base import BaseField, Field, MultipleValueField


class Text(Field):
    pass


class Richtext(Field):
    """Text written in a rich text markup language."""

    ENGINES = ("markdown",)

    def __init__(self, name, label=None):
        super().__init__(name, label)
        self._engine = "markdown"

    def set_engine(self, engine):
        engine = engine.lower()
        if engine not in self.ENGINES:
            raise ConfigurationError(f"Rich text engine `{engine}` does not exist.")
        self._engine = engine
        return self

    def get_engine(self):
        return self._engine


class Date(Field):
    def get_datetime(self):
        if not self._value:
            return None
        return date_parser.parse(str(self._value))


class File(Field):
    """A reference to a file held by the asset store."""

    def __init__(self, name, label=None):
        super().__init__(name, label)
        self._allowed_types = []

    def set_allowed_types(self, types):
        if isinstance(types, str):
            types = [types]
        self._allowed_types = list(types)
        return self

    def get_allowed_types(self):
        return list(self._allowed_types)


class Boolean(Field):
    TRUE_VALUES = {"1", "true", "yes", "on"}

    def is_checked(self):
        return str(self._value).strip().lower() in self.TRUE_VALUES


class Integer(Field):
    def get_int(self, default=0):
        try:
            return int(self._value)
        except (TypeError, ValueError):
            return default


class Link(MultipleValueField):
    """A link to an internal page or an external URL."""

    def get_value_keys(self):
        return ["scope", "target"]


class Productoption(MultipleValueField):
    def get_value_keys(self):
        return ["name", "value"]


class FieldTypeRegistry:
    """Maps a field type identifier to the class that implements it."""

    def __init__(self):
        self._types = {}

    def register(self, name, field_class):
        if not (isinstance(field_class, type) and issubclass(field_class, BaseField)):
            raise ConfigurationError(
                f"Field type `{name}` must be registered with a BaseField subclass, `{field_class!r}` given"
            )
        self._types[name.lower()] = field_class
        return self

    def has(self, name):
        return name.lower() in self._types

    def create(self, name, field_name, label=None):
        field_class = self._types.get(name.lower())
        if field_class is None:
            raise ConfigurationError(
                f"Field type `{name}` does not exist (known types: {', '.join(sorted(self._types))})"
            )
        return field_class(field_name, label)

    def __iter__(self):
        return iter(self._types)


def default_registry():
    registry = FieldTypeRegistry()
    registry.register("text", Text)
    registry.register("richtext", Richtext)
    registry.register("date", Date)
    registry.register("file", File)
    registry.register("boolean", Boolean)
    registry.register("integer", Integer)
    registry.register("link", Link)
    registry.register("productoption", Productoption)
    return registry
