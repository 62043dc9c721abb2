from cms.domain.exceptions import ConfigurationError
from cms.fields.validation import max_length_rule, pattern_rule, required_rule


class BaseField:
    """
    Common behaviour for anything that can sit in page content: a single
    value field, a multiple value field or a group of fields.
    """

    def __init__(self, name, label=None):
        self._name = name
        self._label = label or name
        self._translation_key = f"cms.field.{name}"
        self._help_key = None
        self._validator = None

    def get_name(self):
        return self._name

    def get_label(self):
        return self._label

    def get_translation_key(self):
        return self._translation_key

    def set_translation_key(self, key):
        self._translation_key = key
        return self

    def get_help_key(self):
        return self._help_key

    def set_help_key(self, key):
        self._help_key = key
        return self

    def set_validator(self, validator):
        self._validator = validator
        return self

    def get_validator(self):
        return self._validator

    def _require_validator(self):
        if self._validator is None:
            raise ConfigurationError(
                f"Field `{self._name}` is not bound to a validator; add it to a factory or group first"
            )
        return self._validator

    # Validation helpers, chainable from a page type's field definitions

    def required(self, message=None):
        self._require_validator().add_rule(
            self._name, required_rule, message or f"`{self._label}` is required"
        )
        return self

    def max_length(self, length, message=None):
        self._require_validator().add_rule(
            self._name,
            max_length_rule(length),
            message or f"`{self._label}` must be at most {length} characters",
        )
        return self

    def pattern(self, regex, message=None):
        self._require_validator().add_rule(
            self._name,
            pattern_rule(regex),
            message or f"`{self._label}` is not in the expected format",
        )
        return self

    def reset(self):
        raise NotImplementedError

    def get_value(self):
        raise NotImplementedError


class Field(BaseField):
    """A field holding exactly one value."""

    def __init__(self, name, label=None):
        super().__init__(name, label)
        self._value = None

    def get_value(self):
        return self._value

    def set_value(self, value):
        self._value = value
        return self

    def reset(self):
        self._value = None

    def __str__(self):
        return "" if self._value is None else str(self._value)

    def __repr__(self):
        return f"<{type(self).__name__} {self._name}={self._value!r}>"


class MultipleValueField(BaseField):
    """
    A field made of several named sub-values.

    Concrete types declare the sub-value names through ``get_value_keys()``;
    values for any other key are ignored.
    """

    def __init__(self, name, label=None):
        super().__init__(name, label)
        self._value = {}

    def get_value_keys(self):
        raise NotImplementedError

    def set_value(self, key, value=None):
        if isinstance(key, dict):
            for sub_key, sub_value in key.items():
                self.set_value(sub_key, sub_value)
            return self

        if key in self.get_value_keys():
            self._value[key] = value
        return self

    def get_value(self):
        return {key: self._value[key] for key in self.get_value_keys() if key in self._value}

    def get(self, key):
        return self._value.get(key)

    def reset(self):
        self._value = {}

    def __str__(self):
        return ", ".join(f"{k}: {v}" for k, v in self.get_value().items())

    def __repr__(self):
        return f"<{type(self).__name__} {self._name}={self.get_value()!r}>"
