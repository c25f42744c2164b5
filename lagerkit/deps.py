"""A bag of keyed dependencies that can be narrowed, widened and merged.

A :class:`Deps` object holds values under keys (usually types).  Each entry
is described by a :class:`Spec` that says whether the dependency is required
and whether it is provided indirectly through a zero-argument callable.
A :class:`Deps` can be built from another one (or several) as long as every
required key of the target is required in at least one of the sources.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from typing import Any


class MissingDependencyError(RuntimeError):
    """Raised when a dependency that is not present is requested."""


@dataclass(frozen=True)
class Spec:
    """Describes one dependency: its key and how it is stored."""

    key: Hashable
    required: bool = True
    indirect: bool = False

    def unwrap(self, stored: Any) -> Any:
        """Return the dependency value from its stored form."""
        return stored() if self.indirect else stored


@dataclass(frozen=True)
class Provided:
    """A value paired with the specification it is provided under."""

    spec: Spec
    value: Any


def to_spec(item: Any) -> Spec:
    """Return ``item`` if it is a :class:`Spec`, else a required spec keyed by it."""
    if isinstance(item, Spec):
        return item
    return Spec(key=item)


def opt(item: Any) -> Spec:
    """Make the dependency described by ``item`` optional."""
    return dataclasses.replace(to_spec(item), required=False)


def fn(item: Any) -> Spec:
    """Make the dependency described by ``item`` provided through a callable."""
    return dataclasses.replace(to_spec(item), indirect=True)


def key(tag: Hashable, item: Any) -> Spec:
    """Associate the dependency described by ``item`` with the key ``tag``."""
    return dataclasses.replace(to_spec(item), key=tag)


def as_spec(spec: Any, value: Any) -> Provided:
    """Pair ``value`` with the specification ``spec`` for use in :func:`make_deps`."""
    return Provided(to_spec(spec), value)


def _constant(value: Any) -> Callable[[], Any]:
    return lambda: value


def _convert(source: Spec, stored: Any, target: Spec) -> Any:
    if source.indirect and not target.indirect:
        return stored()
    if target.indirect and not source.indirect:
        return _constant(stored)
    return stored


class Deps:
    """An immutable collection of dependencies addressed by key.

    For optional specs, a value of ``None`` means the dependency is absent.
    """

    __slots__ = ("_specs", "_values")

    def __init__(self, specs: Iterable[Any] = (), values: Iterable[Any] = ()) -> None:
        spec_list = [to_spec(s) for s in specs]
        value_list = list(values)
        if len(spec_list) != len(value_list):
            raise ValueError(
                f"expected {len(spec_list)} dependency values, got {len(value_list)}"
            )
        self._specs = self._index(spec_list)
        self._values: dict[Hashable, Any] = {}
        for spec, value in zip(spec_list, value_list):
            if value is None and not spec.required:
                continue
            if spec.indirect and not callable(value):
                raise TypeError(f"dependency {spec.key!r} must be provided by a callable")
            self._values[spec.key] = value

    @staticmethod
    def _index(specs: Iterable[Spec]) -> dict[Hashable, Spec]:
        index: dict[Hashable, Spec] = {}
        for spec in specs:
            if spec.key in index:
                raise ValueError(
                    f"duplicate dependency key {spec.key!r}; use key() to disambiguate"
                )
            index[spec.key] = spec
        return index

    @classmethod
    def _from_storage(cls, specs: dict[Hashable, Spec], values: dict[Hashable, Any]) -> Deps:
        result = cls.__new__(cls)
        result._specs = specs
        result._values = values
        return result

    @classmethod
    def extract(cls, specs: Iterable[Any], *args: Deps) -> Deps:
        """Build a :class:`Deps` with ``specs`` picking values from ``args``.

        When several sources provide the same key, the last one wins.
        """
        if not args:
            raise TypeError("extract() needs at least one source of dependencies")
        target = cls._index(to_spec(s) for s in specs)

        providers: dict[Hashable, Deps] = {}
        required_keys: set[Hashable] = set()
        for source in args:
            for k, spec in source._specs.items():
                providers[k] = source
                if spec.required:
                    required_keys.add(k)

        values: dict[Hashable, Any] = {}
        for k, spec in target.items():
            if spec.required and k not in required_keys:
                raise MissingDependencyError(
                    f"required dependency {k!r} is not required by the source"
                )
            source = providers.get(k)
            if source is None or k not in source._values:
                if spec.required:
                    raise MissingDependencyError(f"missing dependency {k!r}")
                continue
            values[k] = _convert(source._specs[k], source._values[k], spec)
        return cls._from_storage(target, values)

    def _spec(self, key_: Hashable) -> Spec:
        try:
            return self._specs[key_]
        except KeyError:
            raise KeyError(f"no dependency declared with key {key_!r}") from None

    def get(self, key: Hashable) -> Any:
        """Return the dependency stored under ``key``."""
        spec = self._spec(key)
        if key not in self._values:
            raise MissingDependencyError(f"missing dependency {key!r}")
        return spec.unwrap(self._values[key])

    def has(self, key: Hashable) -> bool:
        """Return whether the dependency under ``key`` is satisfied."""
        spec = self._spec(key)
        return spec.required or key in self._values

    def merge(self, other: Deps) -> Deps:
        """Return dependencies from both objects; ``other`` wins on shared keys."""
        specs = {**self._specs, **other._specs}
        return type(self).extract(specs.values(), self, other)

    def keys(self) -> tuple[Hashable, ...]:
        """Return the declared keys in declaration order."""
        return tuple(self._specs)

    def __copy__(self) -> Deps:
        return self._from_storage(dict(self._specs), dict(self._values))

    def __repr__(self) -> str:
        inner = ", ".join(
            f"{k!r}={self._values[k]!r}" if k in self._values else f"{k!r}=<absent>"
            for k in self._specs
        )
        return f"Deps({inner})"


def make_deps(*args: Any) -> Deps:
    """Build a :class:`Deps` from values keyed by their type, or from :class:`Provided`."""
    specs: list[Spec] = []
    values: list[Any] = []
    for arg in args:
        if isinstance(arg, Provided):
            specs.append(arg.spec)
            values.append(arg.value)
        else:
            specs.append(Spec(key=type(arg)))
            values.append(arg)
    return Deps(specs, values)


def get(deps: Deps, key: Hashable) -> Any:
    """Return the dependency of ``deps`` stored under ``key``."""
    return deps.get(key)


def has(deps: Deps, key: Hashable) -> bool:
    """Return whether ``deps`` satisfies the dependency under ``key``."""
    return deps.has(key)


def is_deps(obj: Any) -> bool:
    """Return whether ``obj`` is a :class:`Deps`."""
    return isinstance(obj, Deps)