"""
Binding store: marker name -> Scalar | ValueList.

Bindings persist across repeated executions of the same template until the
session sets a new template (which calls ``clear()``).
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Scalar:
    """A single bound value. ``None`` binds SQL NULL."""

    value: Any

    def __len__(self) -> int:
        return 1

    @property
    def values(self) -> tuple[Any, ...]:
        return (self.value,)


@dataclass(frozen=True)
class ValueList:
    """An ordered, non-empty list of values, expanded to one placeholder each (IN lists)."""

    values: tuple[Any, ...]

    def __len__(self) -> int:
        return len(self.values)


Binding = Union[Scalar, ValueList]


def to_binding(values: tuple[Any, ...]) -> Binding:
    """
    Build a binding from the positional values given to ``bind(name, *values)``.

    - one value -> Scalar, unless it is a list or tuple (then ValueList)
    - several values -> ValueList
    """
    if len(values) == 1:
        (value,) = values
        if isinstance(value, (list, tuple)):
            values = tuple(value)
        else:
            return Scalar(value)
    if not values:
        raise ValueError("bind() needs at least one value; an empty list cannot be rendered")
    return ValueList(tuple(values))


class BindingStore:
    """Mapping of marker name to binding. Rebinding a name overwrites only that name."""

    def __init__(self) -> None:
        self._bindings: dict[str, Binding] = {}

    def bind(self, name: str, *values: Any) -> Binding:
        if not name:
            raise ValueError("Parameter name must not be empty")
        binding = to_binding(values)
        self._bindings[name] = binding
        return binding

    def get(self, name: str) -> Binding | None:
        return self._bindings.get(name)

    def clear(self) -> None:
        self._bindings.clear()

    def names(self) -> list[str]:
        return list(self._bindings)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __repr__(self) -> str:
        return f"BindingStore({self._bindings!r})"
