import copy
from dataclasses import dataclass

import pytest

from lagerkit.deps import (
    Deps,
    MissingDependencyError,
    Provided,
    Spec,
    as_spec,
    fn,
    get,
    has,
    is_deps,
    key,
    make_deps,
    opt,
    to_spec,
)


@dataclass
class Foo:
    x: int = 0


@dataclass
class Bar:
    s: str = "lol"


@dataclass
class Yas:
    z: float = 42.0


class Foo1:
    pass


class Foo2:
    pass


def test_empty():
    d = Deps()
    assert d.keys() == ()


def test_basic():
    d = Deps([Foo, Bar], [Foo(), Bar()])
    assert d.get(Foo).x == 0
    assert get(d, Bar).s == "lol"


def test_reference():
    f = Foo()
    d = Deps([Foo, Bar], [f, Bar()])
    f.x = 42
    assert d.get(Foo).x == 42
    assert d.get(Bar).s == "lol"


def test_copiable():
    f = Foo()
    x1 = Deps([Foo, Bar], [f, Bar()])
    f.x = 42
    assert x1.get(Foo).x == 42
    assert x1.get(Bar).s == "lol"

    x2 = copy.copy(x1)
    assert x2.get(Foo).x == 42
    assert x2.get(Bar).s == "lol"


def test_subsets():
    d1 = Deps([Foo, Bar, Yas], [Foo(42), Bar("hehe"), Yas(15.0)])

    d2 = Deps.extract([Foo, Yas], d1)
    assert d2.get(Foo).x == 42
    assert d2.get(Yas).z == 15.0

    d3 = Deps.extract([Bar], d1)
    assert d3.get(Bar).s == "hehe"

    d4 = Deps.extract([Yas, Foo], d2)
    assert d4.get(Foo).x == 42
    assert d4.get(Yas).z == 15.0
    assert d4.keys() == (Yas, Foo)


def test_merging():
    d1 = Deps([Bar], [Bar("yeah")])
    d2 = Deps([Foo], [Foo(42)])

    d3 = d1.merge(d2)
    assert d3.get(Foo).x == 42
    assert d3.get(Bar).s == "yeah"

    d4 = Deps.extract([Foo, Bar], d1, d2)
    assert d4.get(Foo).x == 42
    assert d4.get(Bar).s == "yeah"


def test_merge_prefers_other():
    d1 = Deps([Bar], [Bar("first")])
    d2 = Deps([Bar], [Bar("second")])
    assert d1.merge(d2).get(Bar).s == "second"
    assert Deps.extract([Bar], d1, d2).get(Bar).s == "second"


def test_type_deduction_and_references():
    f = Foo()
    d1 = make_deps(f, Bar())
    d2 = Deps.extract([Foo, Bar], d1)

    f.x = 42
    assert d1.get(Foo).x == 42
    assert d1.get(Bar).s == "lol"
    assert d2.get(Foo).x == 42
    assert d2.get(Bar).s == "lol"


def test_keys():
    f1 = Foo()
    d = Deps([key(Foo1, Foo), key(Foo2, Foo)], [f1, Foo(13)])
    f1.x = 42
    assert d.get(Foo1).x == 42
    assert d.get(Foo2).x == 13


def test_optionals():
    f1 = Foo()
    d1 = Deps([key(Foo1, Foo), key(Foo2, Foo), Bar], [f1, Foo(13), Bar("lol")])
    d2 = Deps.extract([key(Foo2, Foo), opt(key(Foo1, Foo)), opt(Yas)], d1)

    f1.x = 42
    assert d2.has(Foo1)
    assert d2.get(Foo1).x == 42
    assert not d2.has(Yas)
    with pytest.raises(MissingDependencyError):
        d2.get(Yas)

    d3 = Deps.extract([opt(key(Foo1, Foo)), opt(Yas)], d2)
    f1.x = 13
    assert d3.has(Foo1)
    assert d3.get(Foo1).x == 13
    assert not has(d3, Yas)
    with pytest.raises(MissingDependencyError):
        d3.get(Yas)


def test_specs_in_factories():
    d1 = make_deps(as_spec(key(Foo1, int), 42))
    d2 = Deps.extract([key(Foo1, int)], d1)
    assert d1.get(Foo1) == 42
    assert d2.get(Foo1) == 42


def test_function_to_reference():
    f1 = Foo()
    d1 = make_deps(as_spec(fn(Foo), lambda: f1))
    rf = d1.get(Foo)
    f1.x = 13
    assert rf.x == 13


def test_keyed_function():
    d1 = make_deps(as_spec(key(Foo1, fn(int)), lambda: 42))
    assert d1.get(Foo1) == 42


def test_extracting_from_function():
    f1 = Foo()
    d1 = make_deps(as_spec(fn(Foo), lambda: f1))
    d2 = Deps.extract([Foo], d1)
    f1.x = 13
    assert d2.get(Foo).x == 13


def test_function_is_called_on_each_get():
    counter = iter(range(10))
    d = Deps([fn(int)], [lambda: next(counter)])
    assert [d.get(int), d.get(int), d.get(int)] == [0, 1, 2]


def test_spec_builders():
    assert to_spec(Foo) == Spec(key=Foo)
    assert opt(fn(key(Foo1, Foo))) == Spec(key=Foo1, required=False, indirect=True)
    assert as_spec(Foo, 3) == Provided(Spec(key=Foo), 3)


def test_duplicate_keys_rejected():
    with pytest.raises(ValueError):
        Deps([Foo, Foo], [Foo(), Foo()])


def test_value_count_must_match():
    with pytest.raises(ValueError):
        Deps([Foo, Bar], [Foo()])


def test_indirect_requires_callable():
    with pytest.raises(TypeError):
        Deps([fn(Foo)], [Foo()])


def test_missing_required_on_extract():
    d1 = Deps([Foo], [Foo()])
    with pytest.raises(MissingDependencyError):
        Deps.extract([Bar], d1)


def test_optional_source_cannot_satisfy_required():
    d1 = Deps([opt(Foo)], [Foo(1)])
    with pytest.raises(MissingDependencyError):
        Deps.extract([Foo], d1)


def test_optional_absent_with_none():
    d = Deps([opt(Foo), Bar], [None, Bar()])
    assert d.has(Bar) is True
    assert d.has(Foo) is False


def test_unknown_key():
    d = Deps([Foo], [Foo()])
    with pytest.raises(KeyError):
        d.get(Bar)
    with pytest.raises(KeyError):
        d.has(Bar)


def test_is_deps():
    assert is_deps(make_deps(Foo())) is True
    assert is_deps(Foo()) is False