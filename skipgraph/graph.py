"""Weighted skip graph: the multi-level ordered index.

Every level ``L`` is a singly linked chain rooted at the sentinel head and
holds exactly the nodes whose height is ``>= L``, sorted by key. Each link
carries two numbers produced by a caller supplied weight function: the
forward ``weight`` ``w(a, b)`` and the ``reverse_weight`` ``w(b, a)``.

Complexities (average case):
    • insert / delete   – O(log n) predecessor search + O(height) splicing
    • get / contains    – O(1) (arena lookup)
    • graph_structure   – O(n) for level 0, shrinking geometrically above

Predecessors are found by descending from the top level, dropping a level
whenever the next key would overshoot. The predecessor found at each level is
the same node a rescan of that level from the head would return.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, Hashable, Optional, TypeVar

from .levels import DEFAULT_MAX_LEVEL, biased_random_level
from .node import HEAD, Edge, Node

__all__ = [
    "SkipGraph",
    "WeightFn",
    "default_weight",
    "new",
    "insert",
    "delete",
    "graph_structure",
    "enumerate_level",
]

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

WeightFn = Callable[[Any, Any], float]


def default_weight(_a: Any, _b: Any) -> int:
    """Constant weight reproducing an unweighted skip list."""
    return 1


class SkipGraph(Generic[K, V]):
    """Skip list whose level links carry caller supplied weights.

    Parameters
    ----------
    max_level: int
        Ceiling on node height. The head participates in levels
        ``0..max_level``.
    """

    def __init__(self, max_level: int = DEFAULT_MAX_LEVEL):
        if isinstance(max_level, bool) or not isinstance(max_level, int) or max_level < 0:
            raise ValueError(f"max_level must be a non-negative integer, got {max_level!r}")
        self._max_level = max_level
        self._size = 0
        self._head: Node[Any, None] = Node(HEAD, None, max_level)
        self._nodes: dict[K, Node[K, V]] = {}

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def max_level(self) -> int:
        return self._max_level

    @property
    def size(self) -> int:
        return self._size

    @property
    def head(self) -> Node[Any, None]:
        return self._head

    # ------------------------------------------------------------------
    # Mutation API
    # ------------------------------------------------------------------
    def insert(
        self,
        key: K,
        value: V,
        weight_fn: WeightFn = default_weight,
        *,
        level: Optional[int] = None,
    ) -> "SkipGraph[K, V]":
        """Insert ``key`` with ``value`` and return the graph.

        ``level`` pins the node height instead of drawing it at random. If
        ``key`` is already present only its value is replaced.
        All weights are computed before any link changes, so an exception
        raised by ``weight_fn`` leaves the graph untouched.
        """
        self._check_key(key)
        existing = self._nodes.get(key)
        if existing is not None:
            existing.value = value
            logger.debug("Replaced value of %r", key)
            return self

        update = self._find_predecessors(key)
        if level is None:
            height = biased_random_level(self._max_level)
        else:
            height = self._check_level(level)
        node: Node[K, V] = Node(key, value, height)

        splices: list[tuple[Node, Edge, Optional[Edge]]] = []
        for lvl in range(height + 1):
            pred = update[lvl]
            succ = pred.next_key(lvl)
            inbound = Edge(key, weight_fn(pred.key, key), weight_fn(key, pred.key))
            outbound = None
            if succ is not None:
                outbound = Edge(succ, weight_fn(key, succ), weight_fn(succ, key))
            splices.append((pred, inbound, outbound))

        for lvl, (pred, inbound, outbound) in enumerate(splices):
            node.links[lvl] = outbound
            pred.links[lvl] = inbound
        self._nodes[key] = node
        self._size += 1
        logger.debug("Inserted %r at height %d", key, height)
        return self

    def delete(self, key: K, weight_fn: WeightFn = default_weight) -> "SkipGraph[K, V]":
        """Remove ``key`` and return the graph; absent keys are ignored.

        The predecessor's link to the new successor is re-weighted with
        ``weight_fn`` at every level the removed node occupied.
        """
        node = None if key is HEAD else self._nodes.get(key)
        if node is None:
            logger.debug("Delete of absent key %r ignored", key)
            return self

        update = self._find_predecessors(key)
        relinks: list[Optional[Edge]] = []
        for lvl in range(node.height + 1):
            pred = update[lvl]
            succ = node.next_key(lvl)
            if succ is None:
                relinks.append(None)
            else:
                relinks.append(Edge(succ, weight_fn(pred.key, succ), weight_fn(succ, pred.key)))

        for lvl, edge in enumerate(relinks):
            update[lvl].links[lvl] = edge
        del self._nodes[key]
        self._size -= 1
        logger.debug("Deleted %r from levels 0..%d", key, node.height)
        return self

    def rebuild(self, max_level: int, weight_fn: WeightFn = default_weight) -> "SkipGraph[K, V]":
        """Return a new graph with ceiling ``max_level`` holding the same items.

        Heights are drawn afresh; this graph is left as it is.
        """
        graph: SkipGraph[K, V] = SkipGraph(max_level)
        for key, value in self.items():
            graph.insert(key, value, weight_fn)
        logger.debug("Rebuilt %d nodes with max_level %d -> %d", self._size, self._max_level, max_level)
        return graph

    @classmethod
    def from_structure(
        cls,
        max_level: int,
        head_weights: list,
        entries: Iterable[tuple[K, V, int, list]],
    ) -> "SkipGraph[K, V]":
        """Relink a graph from an exact structural description.

        ``head_weights[L]`` is ``(weight, reverse_weight)`` of the head's link
        at level ``L`` or ``None`` when that level is empty. ``entries`` are
        ``(key, value, height, weights)`` in strictly ascending key order,
        with ``weights`` laid out like ``head_weights`` for that node. No
        weight function is called and no height is drawn. Inconsistent
        input raises ``ValueError``.
        """
        graph: SkipGraph[K, V] = cls(max_level)
        if len(head_weights) != max_level + 1:
            raise ValueError("head level count mismatch")

        # Tail of each level chain so far, with the weights of its outgoing link.
        tails: list[tuple[Node, Any]] = [(graph._head, w) for w in head_weights]
        prev_key: Any = None
        for i, (key, value, height, weights) in enumerate(entries):
            graph._check_key(key)
            if i and not prev_key < key:
                raise ValueError(f"keys out of order at {key!r}")
            if not graph._in_range(height) or len(weights) != height + 1:
                raise ValueError(f"bad height {height!r} for {key!r}")
            node: Node[K, V] = Node(key, value, height)
            for lvl in range(height + 1):
                tail, stored = tails[lvl]
                if stored is None:
                    raise ValueError(f"missing link into {key!r} at level {lvl}")
                tail.links[lvl] = Edge(key, stored[0], stored[1])
                tails[lvl] = (node, weights[lvl])
            graph._nodes[key] = node
            graph._size += 1
            prev_key = key

        if any(stored is not None for _, stored in tails):
            raise ValueError("dangling link at chain tail")
        return graph

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------
    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        node = None if key is HEAD else self._nodes.get(key)
        return default if node is None else node.value

    def node(self, key: K) -> Node[K, V]:
        """Return the stored node for ``key`` or raise ``KeyError``."""
        if key is HEAD:
            raise KeyError(key)
        return self._nodes[key]

    def graph_structure(self, level: int) -> list[K]:
        """Keys present at ``level`` in chain order.

        Out of range levels yield an empty list; non-integer levels raise
        ``ValueError``.
        """
        if not self._in_range(level):
            return []
        keys: list[K] = []
        nxt = self._head.next_key(level)
        while nxt is not None:
            keys.append(nxt)
            nxt = self._nodes[nxt].next_key(level)
        return keys

    enumerate_level = graph_structure

    def edges(self, level: int) -> list[tuple[Any, K, float]]:
        """``(from_key, to_key, weight)`` triples along ``level`` from the head."""
        if not self._in_range(level):
            return []
        triples: list[tuple[Any, K, float]] = []
        x: Node = self._head
        while (edge := x.links[level]) is not None:
            triples.append((x.key, edge.target, edge.weight))
            x = self._nodes[edge.target]
        return triples

    def irange(self, start: Optional[K] = None, stop: Optional[K] = None) -> Iterator[tuple[K, V]]:
        """Yield ``(key, value)`` for ``start <= key < stop`` in key order."""
        if start is None:
            x: Node = self._head
        else:
            x = self._find_predecessors(start)[0]
        nxt = x.next_key(0)
        while nxt is not None and (stop is None or nxt < stop):
            node = self._nodes[nxt]
            yield node.key, node.value
            nxt = node.next_key(0)

    def items(self) -> Iterator[tuple[K, V]]:
        return self.irange()

    def height_histogram(self) -> list[int]:
        """Number of nodes per height, indexed ``0..max_level``."""
        counts = [0] * (self._max_level + 1)
        for node in self._nodes.values():
            counts[node.height] += 1
        return counts

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return key is not HEAD and key in self._nodes

    def __iter__(self) -> Iterator[tuple[K, V]]:
        return self.irange()

    def __repr__(self) -> str:  # pragma: no cover
        return f"SkipGraph<max_level={self._max_level} size={self._size}>"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _find_predecessors(self, key: K) -> list[Node]:
        """Rightmost node with a key below ``key`` at every level."""
        update: list[Node] = [self._head] * (self._max_level + 1)
        x: Node = self._head
        for i in reversed(range(self._max_level + 1)):
            while (nxt := x.next_key(i)) is not None and nxt < key:
                x = self._nodes[nxt]
            update[i] = x
        return update

    def _check_key(self, key: Any) -> None:
        if key is None or key is HEAD:
            raise ValueError(f"{key!r} is reserved and cannot be used as a key")

    def _check_level(self, level: int) -> int:
        if not self._in_range(level):
            raise ValueError(f"level must be an integer in [0, {self._max_level}], got {level!r}")
        return level

    def _in_range(self, level: int) -> bool:
        """Whether ``level`` is an integer within ``0..max_level``.

        Non-integer levels raise ``ValueError``.
        """
        if isinstance(level, bool) or not isinstance(level, int):
            raise ValueError(f"level must be an integer, got {level!r}")
        return 0 <= level <= self._max_level


# ----------------------------------------------------------------------
# Functional interface
# ----------------------------------------------------------------------
def new(max_level: int = DEFAULT_MAX_LEVEL) -> SkipGraph:
    """Create an empty graph containing only the head."""
    return SkipGraph(max_level)


def insert(graph: SkipGraph, key: Any, value: Any, weight_fn: WeightFn = default_weight) -> SkipGraph:
    return graph.insert(key, value, weight_fn)


def delete(graph: SkipGraph, key: Any, weight_fn: WeightFn = default_weight) -> SkipGraph:
    return graph.delete(key, weight_fn)


def graph_structure(graph: SkipGraph, level: int) -> list:
    return graph.graph_structure(level)


enumerate_level = graph_structure
