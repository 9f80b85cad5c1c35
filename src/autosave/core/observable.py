"""Observable state container.

Holds declared field values and notifies subscribers, synchronously and in
subscription order, whenever a set actually changes a value. Subscribers run
after the new value is stored, so reading the container from a handler sees
the change already in effect.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .fields import Field, FieldChanged
from .ports import ChangeHandler

logger = logging.getLogger(__name__)


class ObservableSettings:
    """Base class for settings objects built from ``Field`` declarations."""

    _fields: dict[str, Field] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        for name, attr in vars(cls).items():
            if isinstance(attr, Field):
                _check_field_name(cls, name)

        fields: dict[str, Field] = {}
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, Field):
                    fields[name] = attr
        cls._fields = fields

    def __init__(self):
        self._values: dict[str, Any] = {
            name: f.default for name, f in self._fields.items()
        }
        self._handlers: list[ChangeHandler] = []

    # Fields ---------------------------------------------------------------
    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(cls._fields)

    def get_field(self, name: str) -> Any:
        return self._values[name]

    def set_field(self, name: str, value: Any) -> bool:
        """Store value and notify subscribers if it differs from the current one.

        Returns True when the value changed. Unknown names raise KeyError.
        """
        if name not in self._fields:
            raise KeyError(f"{type(self).__name__} has no field {name!r}")

        if self._values[name] == value:
            return False

        self._values[name] = value
        self._notify(FieldChanged(name))
        return True

    # Subscriptions --------------------------------------------------------
    def subscribe(self, handler: ChangeHandler) -> None:
        self._handlers.append(handler)

    def unsubscribe(self, handler: ChangeHandler) -> None:
        # Most recent registration goes first, unknown handlers are ignored
        for i in range(len(self._handlers) - 1, -1, -1):
            if self._handlers[i] == handler:
                del self._handlers[i]
                return

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def _notify(self, event: FieldChanged) -> None:
        logger.debug("%s changed on %s", event.name, type(self).__name__)
        for handler in tuple(self._handlers):
            handler(event)

    # Snapshots ------------------------------------------------------------
    def snapshot(self) -> dict[str, Any]:
        """Storage key -> value for every field, in declaration order."""
        return {f.key: self._values[name] for name, f in self._fields.items()}

    def restore(self, values: Mapping[str, Any]) -> None:
        """Apply persisted values by storage key without notifying anyone."""
        for name, f in self._fields.items():
            if f.key in values:
                self._values[name] = values[f.key]

    def describe(self) -> str:
        return "".join(f"{key} - {value}\n" for key, value in self.snapshot().items())

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={value!r}" for name, value in self._values.items())
        return f"{type(self).__name__}({inner})"


def _check_field_name(cls: type, name: str) -> None:
    if name.startswith("_"):
        raise TypeError(f"{cls.__name__}.{name}: field names must not start with '_'")
    for base in cls.__mro__[1:]:
        inherited = vars(base).get(name)
        if inherited is not None and not isinstance(inherited, Field):
            raise TypeError(
                f"{cls.__name__}.{name}: field would shadow {base.__name__}.{name}"
            )
