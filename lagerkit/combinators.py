"""Lens combinators for optional values and for tuples of lenses."""

from __future__ import annotations

import copy
from collections.abc import Iterable
from functools import reduce
from typing import Any

from lagerkit.lenses import Lens, attr


def _opt_impl(lens: Lens) -> Lens:
    def getter(whole: Any) -> Any:
        if whole is None:
            return None
        return lens.view(whole)

    def setter(whole: Any, part: Any) -> Any:
        if whole is None or part is None:
            return whole
        return lens.put(whole, part)

    return Lens(getter, setter)


def map_opt(lens: Lens) -> Lens:
    """Lift a lens on ``W`` to a lens on an optional ``W``.

    Viewing ``None`` gives ``None``; putting ``None``, or putting into
    ``None``, leaves the whole unchanged.
    """
    return _opt_impl(lens)


def bind_opt(lens: Lens) -> Lens:
    """Lift a lens whose part is already optional to an optional whole."""
    return _opt_impl(lens)


def with_opt(lens: Lens) -> Lens:
    """Lift a lens with an optional or a plain part to an optional whole."""
    return _opt_impl(lens)


def value_or(default: Any) -> Lens:
    """A lens from an optional value to the value, viewing ``default`` for ``None``."""
    return Lens(
        lambda whole: default if whole is None else whole,
        lambda whole, part: part,
    )


def force_opt() -> Lens:
    """A lens from a value to an optional value; putting ``None`` keeps the whole."""
    return Lens(
        lambda whole: whole,
        lambda whole, part: whole if part is None else part,
    )


def _rebuild(like: Any, items: Iterable[Any]) -> Any:
    items = list(items)
    if hasattr(like, "_make"):
        return like._make(items)
    return type(like)(items)


def zipped(*args: Lens) -> Lens:
    """Combine lenses into one over a tuple of wholes, focusing a tuple of parts.

    The ``i``-th lens works on the ``i``-th element; extra elements are dropped.
    """
    lenses = args

    def getter(whole: Any) -> Any:
        return _rebuild(whole, (lens.view(w) for lens, w in zip(lenses, whole)))

    def setter(whole: Any, part: Any) -> Any:
        return _rebuild(
            whole, (lens.put(w, p) for lens, w, p in zip(lenses, whole, part))
        )

    return Lens(getter, setter)


def fan(*args: Lens) -> Lens:
    """Combine lenses on the same whole into one focusing a tuple of their parts.

    The parts should not overlap; where they do, the first lens wins on put.
    """
    lenses = args

    def getter(whole: Any) -> tuple[Any, ...]:
        return tuple(lens.view(whole) for lens in lenses)

    def setter(whole: Any, part: Any) -> Any:
        pairs = list(zip(lenses, part))
        return reduce(lambda acc, pair: pair[0].put(acc, pair[1]), reversed(pairs), whole)

    return Lens(getter, setter)


def attrs(*args: str) -> Lens:
    """A lens focusing the tuple of the named attributes, which should be distinct."""
    return fan(*(attr(name) for name in args))


def element(index: int) -> Lens:
    """A lens on the element at ``index`` of a tuple, list or similar sequence."""

    def setter(whole: Any, part: Any) -> Any:
        if isinstance(whole, tuple):
            items = list(whole)
            items[index] = part
            return _rebuild(whole, items)
        result = copy.copy(whole)
        result[index] = part
        return result

    return Lens(lambda whole: whole[index], setter)