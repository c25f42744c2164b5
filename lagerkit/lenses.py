"""Composable lenses: a focus on a part of an immutable whole.

A lens views a part of a value and puts a new part back, returning an
updated copy of the whole and leaving the original untouched.
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Callable, Hashable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Lens:
    """A pair of a getter and a setter over some whole value."""

    __slots__ = ("_getter", "_setter")

    def __init__(
        self,
        getter: Callable[[Any], Any],
        setter: Callable[[Any, Any], Any],
    ) -> None:
        self._getter = getter
        self._setter = setter

    def view(self, whole: Any) -> Any:
        """Return the part of ``whole`` this lens focuses on."""
        return self._getter(whole)

    def put(self, whole: Any, part: Any) -> Any:
        """Return a copy of ``whole`` with its focused part replaced by ``part``."""
        return self._setter(whole, part)

    def over(self, whole: Any, fn: Callable[[Any], Any]) -> Any:
        """Return a copy of ``whole`` with ``fn`` applied to the focused part."""
        return self.put(whole, fn(self.view(whole)))

    def compose(self, other: Lens) -> Lens:
        """Return a lens focusing through this lens and then ``other``."""

        def getter(whole: Any) -> Any:
            return other.view(self.view(whole))

        def setter(whole: Any, part: Any) -> Any:
            return self.put(whole, other.put(self.view(whole), part))

        return Lens(getter, setter)

    def __or__(self, other: Lens) -> Lens:
        return self.compose(other)


@dataclass(frozen=True)
class Box(Generic[T]):
    """An immutable holder of a single value."""

    value: T


def view(lens: Lens, whole: Any) -> Any:
    """Return the part of ``whole`` focused by ``lens``."""
    return lens.view(whole)


def put(lens: Lens, whole: Any, part: Any) -> Any:
    """Return ``whole`` with the part focused by ``lens`` replaced by ``part``."""
    return lens.put(whole, part)


def over(lens: Lens, whole: Any, fn: Callable[[Any], Any]) -> Any:
    """Return ``whole`` with ``fn`` applied to the part focused by ``lens``."""
    return lens.over(whole, fn)


def identity() -> Lens:
    """A lens whose part is the whole itself."""
    return Lens(lambda whole: whole, lambda whole, part: part)


def _replace_attr(whole: Any, name: str, value: Any) -> Any:
    if dataclasses.is_dataclass(whole) and not isinstance(whole, type):
        return dataclasses.replace(whole, **{name: value})
    if hasattr(whole, "_replace"):
        return whole._replace(**{name: value})
    result = copy.copy(whole)
    setattr(result, name, value)
    return result


def attr(name: str) -> Lens:
    """A lens on the attribute ``name``."""
    return Lens(
        lambda whole: getattr(whole, name),
        lambda whole, part: _replace_attr(whole, name, part),
    )


def unbox() -> Lens:
    """A lens from a :class:`Box` to the value inside it."""
    return Lens(lambda whole: whole.value, lambda whole, part: type(whole)(part))


def alternative(kind: type) -> Lens:
    """A lens on a value if it is of type ``kind``, else ``None``.

    Putting a part only replaces the whole when it already is of ``kind``
    and the part is not ``None``.
    """

    def getter(whole: Any) -> Any:
        return whole if isinstance(whole, kind) else None

    def setter(whole: Any, part: Any) -> Any:
        if part is not None and isinstance(whole, kind):
            return part
        return whole

    return Lens(getter, setter)


def _lookup(whole: Any, key: Hashable) -> Any:
    if isinstance(whole, Sequence) and isinstance(key, int) and key < 0:
        raise IndexError(key)
    return whole[key]


def _contains(whole: Any, key: Hashable) -> bool:
    try:
        _lookup(whole, key)
    except LookupError:
        return False
    return True


def _assoc(whole: Any, key: Any, value: Any) -> Any:
    if isinstance(whole, tuple):
        items = list(whole)
        items[key] = value
        if hasattr(whole, "_make"):
            return whole._make(items)
        return type(whole)(items)
    result = copy.copy(whole)
    result[key] = value
    return result


def at(key: Hashable) -> Lens:
    """A lens on the element at ``key``, or ``None`` when it is missing.

    Putting ``None``, or putting at a missing key, leaves the whole unchanged.
    """

    def getter(whole: Any) -> Any:
        try:
            return _lookup(whole, key)
        except LookupError:
            return None

    def setter(whole: Any, part: Any) -> Any:
        if part is None or not _contains(whole, key):
            return whole
        return _assoc(whole, key, part)

    return Lens(getter, setter)


def at_or(key: Hashable, default: Any = None) -> Lens:
    """A lens on the element at ``key``, viewing ``default`` when it is missing.

    Putting at a missing key leaves the whole unchanged.
    """

    def getter(whole: Any) -> Any:
        try:
            return _lookup(whole, key)
        except LookupError:
            return default

    def setter(whole: Any, part: Any) -> Any:
        if not _contains(whole, key):
            return whole
        return _assoc(whole, key, part)

    return Lens(getter, setter)