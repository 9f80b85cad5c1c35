"""Declared fields and the change notification they emit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldChanged:
    """A field's value differed from its prior value and was updated."""

    name: str


class Field:
    """Named value slot declared in the body of an ObservableSettings class.

    ``key`` is the name used in the persisted JSON; it defaults to the
    attribute name.
    """

    def __init__(self, default: Any = None, *, key: str | None = None):
        self.default = default
        self.key = key
        self.name: str | None = None

    def __set_name__(self, owner, name: str) -> None:
        self.name = name
        if self.key is None:
            self.key = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance.get_field(self.name)

    def __set__(self, instance, value) -> None:
        instance.set_field(self.name, value)

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, key={self.key!r}, default={self.default!r})"


class BoolField(Field):
    def __init__(self, default: bool = False, *, key: str | None = None):
        super().__init__(default, key=key)
