import copy
import re


class Validator:
    """
    Holds validation rules per field name.

    A rule is a ``(check, message)`` pair where ``check`` receives the field
    value and returns ``True`` when the value is acceptable.
    """

    def __init__(self):
        self._rules = {}

    def add_rule(self, field_name, check, message):
        self._rules.setdefault(field_name, []).append((check, message))
        return self

    def get_rules(self, field_name):
        return list(self._rules.get(field_name, []))

    def has_rules(self):
        return bool(self._rules)

    def clone(self):
        return copy.deepcopy(self)

    def clear(self):
        self._rules = {}
        return self

    def validate(self, values):
        errors = {}
        for field_name, rules in self._rules.items():
            value = values.get(field_name)
            for check, message in rules:
                if not check(value):
                    errors.setdefault(field_name, []).append(message)
        return errors


def _is_blank(value):
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, dict):
        return all(_is_blank(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def required_rule(value):
    return not _is_blank(value)


def max_length_rule(length):
    def check(value):
        return _is_blank(value) or len(str(value)) <= length
    return check


def pattern_rule(regex):
    compiled = re.compile(regex)

    def check(value):
        return _is_blank(value) or compiled.fullmatch(str(value)) is not None
    return check
