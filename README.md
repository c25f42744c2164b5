# lagerkit

Small functional building blocks for interactive programs. The package has
no third-party dependencies.

- **`lagerkit.deps`** holds bags of keyed dependencies that components narrow
  down to what they need. It provides `Deps`, `make_deps`, the spec helpers
  `to_spec`, `opt`, `fn`, `key` and `as_spec`, the functions `get`, `has` and
  `is_deps`, and `MissingDependencyError`.
- **`lagerkit.lenses`** has the `Lens` class with `view`, `put`, `over` and
  `compose`, where `a | b` is the same as `a.compose(b)`. It also has the
  free functions `view`, `put` and `over`, the basic lenses `identity`,
  `attr`, `at`, `at_or`, `unbox` and `alternative`, and the `Box` holder.
- **`lagerkit.combinators`** works on optional values with `map_opt`,
  `bind_opt`, `with_opt`, `value_or` and `force_opt`, where `None` stands for
  "no value". It combines lenses with `zipped`, `fan`, `attrs` and `element`.
- **`lagerkit.event_loop`** has four event loops, which decide when posted
  callables run: `ManualEventLoop`, `QueueEventLoop`, `SafeQueueEventLoop`
  and `ExecutorEventLoop`.
- **`lagerkit.todo`** is a small to-do model with pure update functions and
  JSON `save`/`load`.

## Dependencies

A `Deps` holds values under keys, which are usually types. Each entry is
described by a spec with the following helpers:

- `opt(...)` makes an entry optional. For an optional entry, `None` means
  absent.
- `fn(...)` makes the entry provided by a zero-argument callable.
- `key(tag, ...)` gives the entry an explicit key.

`Deps.extract(specs, *sources)` builds a new bag from one or more others.
When several sources have the same key, the last source wins. It raises
`MissingDependencyError` when a required key is not required by any source.

```python
from lagerkit.deps import Deps, make_deps, opt, MissingDependencyError

class Database: ...
class Logger: ...
class Cache: ...

root = make_deps(Database(), Logger())
needed = Deps.extract([Database, opt(Logger), opt(Cache)], root)
db = needed.get(Database)
needed.has(Cache)          # False
try:
    needed.get(Cache)
except MissingDependencyError:
    pass
```

`a.merge(b)` returns a bag with the entries of both. When both have a key,
the entry from `b` wins. `Deps(specs, values)` builds a bag directly. It
raises `ValueError` on duplicate keys or a wrong number of values.

## Lenses

```python
from dataclasses import dataclass
from lagerkit.lenses import attr, at, at_or, view, put, over

@dataclass(frozen=True)
class Point:
    x: int
    y: int

x = attr("x")
p = put(x, Point(1, 2), 10)      # Point(x=10, y=2)
over(x, p, lambda v: v + 1)      # Point(x=11, y=2)
view(at(1), [1, 2, 3])           # 2
view(at(9), [1, 2, 3])           # None
view(at_or(9, 0), [1, 2, 3])     # 0
```

Putting into a missing key returns the whole unchanged, both with `at` and
with `at_or`. Putting `None` through `at` also returns the whole unchanged.
Wholes are copied and never changed in place. For example,
`attr("todos") | at(0)` focuses on the first to-do of a model.

### Combinators

```python
from lagerkit.combinators import fan, element, value_or
from lagerkit.lenses import attr, view, put

both = fan(attr("x"), attr("y"))
view(both, Point(1, 2))              # (1, 2)
put(element(0), (1, 2), 5)           # (5, 2)
view(value_or(0), None)              # 0
```

## Event loops

Every loop has `post`, `run_async`, `finish`, `pause` and `resume`. An
operation a loop cannot perform raises `RuntimeError`.

- `ManualEventLoop` runs posted callables at once, in order. A callable
  posted from inside a running one is run after it. `finish`, `pause` and
  `resume` only set its `finished` and `paused` attributes.
- `QueueEventLoop` queues callables until `step()` runs them. If a callable
  raises, `step` propagates the error. The callables that have not run yet
  stay queued, so calling `step` again finishes the queue.
- `SafeQueueEventLoop` accepts posts from any thread. `step()` must be
  called on the owning thread, which is the creating thread or the thread
  that last called `adopt()`.
- `ExecutorEventLoop(executor, stop=None)` submits posts to `executor.submit`.
  `run_async` starts a background thread and `finish` calls `stop`.

```python
from lagerkit.event_loop import QueueEventLoop

loop = QueueEventLoop()
loop.post(lambda: print("later"))
loop.step()  # prints "later"
```

## To-do model

The model is built from these parts:

- `Item`, which has `done` and `text`.
- `Model`, a tuple of items with the newest first.
- The actions `AddTodo`, `ItemAt`, `ToggleItem` and `RemoveItem`.

`update_model` ignores empty texts. For an out-of-range index it prints a
message on stderr and returns the model unchanged. `load` raises
`ValueError` on a malformed document.

```python
from lagerkit.todo import Model, AddTodo, ItemAt, ToggleItem, update_model, save, load

m = update_model(Model(), AddTodo("write docs"))
m = update_model(m, ItemAt(0, ToggleItem()))
save("list.todo", m)
assert load("list.todo") == m
```

## What is not included

There is no store here: nothing holds the current state, dispatches actions
to a reducer, runs effects, or notifies watchers. The event loops, the
dependency bags and the update functions are pieces to wire together
yourself. The to-do model has no user interface and no command.

## Tests

The tests use pytest, available through the `test` extra.