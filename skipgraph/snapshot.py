"""msgpack snapshot of a skip graph.

The snapshot captures the exact structure (every node height and every stored
link weight), so decoding reproduces identical level chains without calling a
weight function or drawing new heights. Only bytes are produced; where they
are kept is up to the caller.

Layout (msgpack map)::

    {
        "version":   1,
        "max_level": int,
        "head":      [[weight, reverse_weight] | nil, ...],      # per level
        "nodes":     [[key, value, height, [[w, rw] | nil, ...]], ...],
    }

Nodes are listed in ascending key order. Values decode as msgpack returns
them (arrays as lists); array keys come back as tuples so that composite keys
remain hashable.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import msgpack

from .graph import SkipGraph
from .node import Node

__all__ = ["SNAPSHOT_VERSION", "dumps", "loads"]

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


def _weights(node: Node) -> list[Optional[tuple[float, float]]]:
    return [None if e is None else (e.weight, e.reverse_weight) for e in node.links]


def dumps(graph: SkipGraph) -> bytes:
    """Encode ``graph`` to bytes."""
    nodes = [
        (key, value, graph.node(key).height, _weights(graph.node(key)))
        for key, value in graph.items()
    ]
    payload = {
        "version": SNAPSHOT_VERSION,
        "max_level": graph.max_level,
        "head": _weights(graph.head),
        "nodes": nodes,
    }
    return msgpack.packb(payload, use_bin_type=True)


def loads(blob: bytes) -> SkipGraph:
    """Decode bytes produced by :func:`dumps`."""
    try:
        payload = msgpack.unpackb(blob, raw=False, strict_map_key=False)
    except ValueError as exc:
        raise ValueError(f"corrupt snapshot: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError("corrupt snapshot: expected a map")
    version = payload.get("version")
    if version != SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version {version!r}")
    try:
        entries = [
            (_hashable(key), value, height, weights)
            for key, value, height, weights in payload["nodes"]
        ]
        graph: SkipGraph = SkipGraph.from_structure(payload["max_level"], payload["head"], entries)
    except (KeyError, TypeError) as exc:
        raise ValueError(f"corrupt snapshot: {exc!r}") from exc
    logger.debug("Loaded snapshot with %d nodes", graph.size)
    return graph


def _hashable(key: Any) -> Any:
    """Turn decoded msgpack arrays back into tuples so keys stay hashable."""
    if isinstance(key, list):
        return tuple(_hashable(item) for item in key)
    return key
