"""Dependency bags, lenses, lens combinators, event loops and a to-do model."""

__version__ = "0.1.0"
__all__ = ["combinators", "deps", "event_loop", "lenses", "todo"]