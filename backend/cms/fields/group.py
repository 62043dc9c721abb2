import copy

from cms.domain.exceptions import ConfigurationError
from cms.fields.base import BaseField
from cms.fields.validation import Validator


class Group(BaseField):
    """
    An ordered, named collection of fields.

    A group owns its own validator so that rules defined for its fields do
    not leak into the page level scope.
    """

    def __init__(self, name, label=None, validator=None):
        super().__init__(name, label)
        self._fields = {}
        self._repeatable = False
        self._min = 0
        self._max = None
        self._group_validator = validator if validator is not None else Validator()

    def add(self, field):
        if field.get_name() in self._fields:
            raise ConfigurationError(
                f"A field with the name `{field.get_name()}` already exists in group `{self._name}`"
            )
        field.set_validator(self._group_validator)
        self._fields[field.get_name()] = field
        return self

    def get(self, name):
        return self._fields.get(name)

    def get_fields(self):
        return dict(self._fields)

    def get_group_validator(self):
        return self._group_validator

    def items(self):
        return self._fields.items()

    def set_repeatable(self, repeatable=True, min=0, max=None):
        self._repeatable = bool(repeatable)
        self._min = min
        self._max = max
        return self

    def is_repeatable(self):
        return self._repeatable

    def get_min(self):
        return self._min

    def get_max(self):
        return self._max

    def get_value(self):
        return {name: field.get_value() for name, field in self._fields.items()}

    def reset(self):
        for field in self._fields.values():
            field.reset()

    def validate(self):
        return self._group_validator.validate(self.get_value())

    def clone(self):
        """Return an independent copy of this group with every value cleared."""
        group = copy.deepcopy(self)
        group.reset()
        return group

    def __contains__(self, name):
        return name in self._fields

    def __iter__(self):
        return iter(self._fields.values())

    def __len__(self):
        return len(self._fields)

    def __repr__(self):
        return f"<Group {self._name} fields={list(self._fields)}>"


class RepeatableContainer:
    """
    Holds the instances of a repeatable group, indexed by sequence.

    The wrapped group is only used as a template; every instance is a clone
    of it. Sequences are kept dense: asking for a sequence past the end
    creates the empty groups in between.
    """

    def __init__(self, group):
        self._template = group
        self._groups = []

    def get_name(self):
        return self._template.get_name()

    def get_label(self):
        return self._template.get_label()

    def get_template(self):
        return self._template

    def add(self, group=None):
        group = group if group is not None else self._template.clone()
        self._groups.append(group)
        return group

    def get(self, sequence):
        if 0 <= sequence < len(self._groups):
            return self._groups[sequence]
        return None

    def get_or_create(self, sequence):
        if sequence < 0:
            raise ValueError(f"Sequence must not be negative, {sequence} given")
        while self.get(sequence) is None:
            self.add()
        return self._groups[sequence]

    def set(self, sequence, group):
        self.get_or_create(sequence)
        self._groups[sequence] = group
        return self

    def clear(self):
        self._groups = []
        return self

    def get_value(self):
        return [group.get_value() for group in self._groups]

    def __iter__(self):
        return iter(self._groups)

    def __len__(self):
        return len(self._groups)

    def __repr__(self):
        return f"<RepeatableContainer {self.get_name()} x{len(self._groups)}>"
