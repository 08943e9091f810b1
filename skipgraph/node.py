"""Node records stored in the skip graph arena.

A node never holds a reference to another node object. Each link slot keeps
the *key* of the next node at that level, which the owning graph resolves
through its arena. This keeps ownership flat (graph → nodes) and avoids the
head ↔ node cycles a pointer-based layout would create.
"""
from __future__ import annotations

from typing import Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

__all__ = ["HEAD", "Edge", "Node"]


class _Head:
    """Reserved key of the sentinel node; never equal to a user key."""

    _instance: Optional["_Head"] = None

    def __new__(cls) -> "_Head":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "HEAD"


HEAD = _Head()


class Edge:
    """Directed link to the next node at one level."""

    __slots__ = ("target", "weight", "reverse_weight")

    def __init__(self, target: Hashable, weight: float, reverse_weight: float):
        self.target = target
        self.weight = weight
        self.reverse_weight = reverse_weight

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return (self.target, self.weight, self.reverse_weight) == (
            other.target,
            other.weight,
            other.reverse_weight,
        )

    def __repr__(self) -> str:  # pragma: no cover
        return f"Edge<{self.target!r} w={self.weight!r} rw={self.reverse_weight!r}>"


class Node(Generic[K, V]):
    """Key/value record participating in levels ``0..height``."""

    __slots__ = ("key", "value", "height", "links")

    def __init__(self, key: K, value: V, height: int):
        if height < 0:
            raise ValueError(f"height must be >= 0, got {height}")
        self.key = key
        self.value = value
        self.height = height
        self.links: list[Optional[Edge]] = [None] * (height + 1)

    @property
    def is_head(self) -> bool:
        return self.key is HEAD

    def next_key(self, level: int) -> Optional[Hashable]:
        """Key of the following node at ``level`` or ``None`` at the tail."""
        if level > self.height:
            return None
        edge = self.links[level]
        return None if edge is None else edge.target

    def neighbors(self, level: int) -> list[tuple[Hashable, float]]:
        """Ordered ``(neighbor_key, weight)`` pairs at ``level``."""
        if level < 0 or level > self.height:
            return []
        edge = self.links[level]
        return [] if edge is None else [(edge.target, edge.weight)]

    def __repr__(self) -> str:  # pragma: no cover
        return f"Node<{self.key!r}:{self.value!r} h={self.height}>"
