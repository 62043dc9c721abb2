from cms.domain.exceptions import ValidationError
from cms.fields.base import BaseField
from cms.fields.group import Group, RepeatableContainer


class Content:
    """
    The content of one page: an ordered mapping of field name to a field,
    a group or a repeatable group container.

    Looking up a name that is not part of the page type's schema returns
    ``None``.
    """

    def __init__(self):
        self._fields = {}
        self._validator = None

    def set(self, name, value):
        if not isinstance(value, (BaseField, RepeatableContainer)):
            raise TypeError(
                f"Page content must be a field, group or RepeatableContainer, `{type(value).__name__}` given"
            )
        self._fields[name] = value
        return self

    def get(self, name):
        return self._fields.get(name)

    def get_validator(self):
        return self._validator

    def set_validator(self, validator):
        self._validator = validator
        return self

    def values(self):
        return {name: slot.get_value() for name, slot in self._fields.items()}

    def get_errors(self):
        errors = {}
        if self._validator is not None:
            errors.update(self._validator.validate(self.values()))

        for name, slot in self._fields.items():
            if isinstance(slot, RepeatableContainer):
                template = slot.get_template()
                minimum, maximum = template.get_min() or 0, template.get_max()
                if len(slot) < minimum:
                    errors.setdefault(name, []).append(
                        f"`{template.get_label()}` needs at least {minimum} item(s)"
                    )
                if maximum is not None and len(slot) > maximum:
                    errors.setdefault(name, []).append(
                        f"`{template.get_label()}` allows at most {maximum} item(s)"
                    )
                for sequence, group in enumerate(slot):
                    for field_name, messages in group.validate().items():
                        errors.setdefault(f"{name}[{sequence}].{field_name}", []).extend(messages)
            elif isinstance(slot, Group):
                for field_name, messages in slot.validate().items():
                    errors.setdefault(f"{name}.{field_name}", []).extend(messages)
        return errors

    def validate(self):
        errors = self.get_errors()
        if errors:
            raise ValidationError("Page content is not valid", errors)

    def is_valid(self):
        try:
            self.validate()
        except ValidationError:
            return False
        return True

    def __contains__(self, name):
        return name in self._fields

    def __iter__(self):
        return iter(self._fields.items())

    def __len__(self):
        return len(self._fields)
