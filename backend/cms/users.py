"""Minimal user and group descriptors the page loader and authorisation work with."""
from dataclasses import dataclass, field
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class Group:
    name: str
    description: str = ""

    def get_name(self):
        return self.name


class GroupCollection:
    def __init__(self, groups=()):
        self._groups = {}
        for group in groups:
            self.add(group)

    def add(self, group):
        self._groups[group.get_name()] = group
        return self

    def get(self, name):
        return self._groups.get(name)

    def __iter__(self):
        return iter(self._groups.values())

    def __len__(self):
        return len(self._groups)


@dataclass(frozen=True)
class User:
    id: Optional[int]
    groups: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_guest(self):
        return self.id is None

    def in_group(self, name):
        return name in self.groups


class AnonymousUser(User):
    def __init__(self):
        super().__init__(None, frozenset())
