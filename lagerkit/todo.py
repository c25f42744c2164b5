"""A small to-do list model with pure update functions and JSON persistence."""

from __future__ import annotations

import dataclasses
import json
import sys
from dataclasses import dataclass
from os import PathLike
from typing import Any, Union


@dataclass(frozen=True)
class Item:
    """One entry of the to-do list."""

    done: bool = False
    text: str = ""


@dataclass(frozen=True)
class ToggleItem:
    """Flip the done flag of an item."""


@dataclass(frozen=True)
class RemoveItem:
    """Remove an item from the list."""


ItemAction = Union[ToggleItem, RemoveItem]


@dataclass(frozen=True)
class Model:
    """The whole to-do list, newest entries first."""

    todos: tuple[Item, ...] = ()


@dataclass(frozen=True)
class AddTodo:
    """Add a new entry with the given text."""

    text: str


@dataclass(frozen=True)
class ItemAt:
    """Apply an item action to the entry at ``index``."""

    index: int
    action: ItemAction


ModelAction = Union[AddTodo, ItemAt]


def update_item(item: Item, action: ItemAction) -> Item:
    """Return ``item`` updated by ``action``."""
    match action:
        case ToggleItem():
            return dataclasses.replace(item, done=not item.done)
        case RemoveItem():
            return item
        case _:
            raise TypeError(f"unknown item action {action!r}")


def update_model(model: Model, action: ModelAction) -> Model:
    """Return ``model`` updated by ``action``.

    Empty texts are not added; an out-of-range index is reported on stderr
    and leaves the model unchanged.
    """
    match action:
        case AddTodo(text=text):
            if not text:
                return model
            return dataclasses.replace(model, todos=(Item(False, text), *model.todos))
        case ItemAt(index=index, action=item_action):
            if not 0 <= index < len(model.todos):
                print("Invalid item action index!", file=sys.stderr)
                return model
            todos = list(model.todos)
            if isinstance(item_action, RemoveItem):
                del todos[index]
            else:
                todos[index] = update_item(todos[index], item_action)
            return dataclasses.replace(model, todos=tuple(todos))
        case _:
            raise TypeError(f"unknown model action {action!r}")


def _to_json(model: Model) -> dict[str, Any]:
    return {"todos": [{"done": i.done, "text": i.text} for i in model.todos]}


def _from_json(data: Any) -> Model:
    try:
        entries = data["todos"]
        items = tuple(Item(bool(e["done"]), str(e["text"])) for e in entries)
    except (KeyError, TypeError) as err:
        raise ValueError(f"malformed to-do document: {err}") from err
    return Model(items)


def save(path: str | PathLike[str], model: Model) -> None:
    """Write ``model`` as JSON to ``path``."""
    with open(path, "w", encoding="utf-8") as out:
        json.dump(_to_json(model), out, indent=4)


def load(path: str | PathLike[str]) -> Model:
    """Read a model written by :func:`save` from ``path``."""
    with open(path, encoding="utf-8") as src:
        try:
            data = json.load(src)
        except json.JSONDecodeError as err:
            raise ValueError(f"malformed to-do document: {err}") from err
    return _from_json(data)