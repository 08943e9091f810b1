"""Tests for the msgpack snapshot codec."""
import msgpack
import pytest

from skipgraph import HEAD, SkipGraph, dumps, loads
from skipgraph.snapshot import SNAPSHOT_VERSION


def _dist(a, b):
    if HEAD in (a, b):
        return 0.0
    return float(abs(a - b))


@pytest.fixture
def weighted():
    g = SkipGraph(4)
    for k in (20, 5, 13, 8, 1, 34, 2, 3, 21):
        g.insert(k, {"id": k, "tags": ["x", k]}, _dist)
    return g


def test_structure_preserved(weighted):
    """Every level chain and every weight survives the round trip."""
    restored = loads(dumps(weighted))
    assert restored.max_level == weighted.max_level
    assert restored.size == weighted.size
    for lvl in range(weighted.max_level + 1):
        assert restored.graph_structure(lvl) == weighted.graph_structure(lvl)
        assert restored.edges(lvl) == weighted.edges(lvl)
    for key, _ in weighted:
        assert restored.node(key).height == weighted.node(key).height
        assert restored.node(key).links == weighted.node(key).links


def test_values_decoded(weighted):
    restored = loads(dumps(weighted))
    assert restored.get(13) == {"id": 13, "tags": ["x", 13]}


def test_restored_graph_is_mutable(weighted):
    restored = loads(dumps(weighted))
    restored.insert(4, "four", _dist).delete(20, _dist)
    assert restored.graph_structure(0) == [1, 2, 3, 4, 5, 8, 13, 21, 34]


def test_empty_graph():
    restored = loads(dumps(SkipGraph(3)))
    assert restored.size == 0
    assert restored.max_level == 3


def test_tuple_keys():
    g = SkipGraph(2)
    g.insert(("b", 1), "x").insert(("a", 2), "y")
    restored = loads(dumps(g))
    assert restored.graph_structure(0) == [("a", 2), ("b", 1)]


def test_unsupported_version():
    blob = msgpack.packb({"version": SNAPSHOT_VERSION + 1}, use_bin_type=True)
    with pytest.raises(ValueError):
        loads(blob)


def test_corrupt_payloads():
    with pytest.raises(ValueError):
        loads(b"\xc1")
    with pytest.raises(ValueError):
        loads(msgpack.packb([1, 2, 3]))
    with pytest.raises(ValueError):
        loads(msgpack.packb({"version": SNAPSHOT_VERSION}))


def test_out_of_order_keys_rejected():
    payload = {
        "version": SNAPSHOT_VERSION,
        "max_level": 0,
        "head": [[1, 1]],
        "nodes": [[2, "b", 0, [[1, 1]]], [1, "a", 0, [None]]],
    }
    with pytest.raises(ValueError):
        loads(msgpack.packb(payload, use_bin_type=True))


def test_dangling_link_rejected():
    payload = {
        "version": SNAPSHOT_VERSION,
        "max_level": 0,
        "head": [[1, 1]],
        "nodes": [[1, "a", 0, [[1, 1]]]],
    }
    with pytest.raises(ValueError):
        loads(msgpack.packb(payload, use_bin_type=True))


def test_list_values_round_trip():
    """Lists stored as values come back as lists."""
    g = SkipGraph(2)
    g.insert("k", [1, 2, 3]).insert("m", [[1, 2], {"a": [3]}])
    restored = loads(dumps(g))
    assert restored.get("k") == [1, 2, 3]
    assert restored.get("m") == [[1, 2], {"a": [3]}]


def test_nested_tuple_keys():
    g = SkipGraph(2)
    g.insert(("a", (1, 2)), "x").insert(("a", (0, 5)), "y")
    restored = loads(dumps(g))
    assert restored.graph_structure(0) == [("a", (0, 5)), ("a", (1, 2))]
    assert restored.get(("a", (1, 2))) == "x"


@pytest.mark.parametrize(
    "nodes",
    [
        [[None, "a", 0, [None]]],
        [[None, "a", 0, [[1, 1]]], [1, "b", 0, [None]]],
        [[1, "a", 0, [[1, 1]]], [None, "b", 0, [None]]],
    ],
)
def test_reserved_key_rejected(nodes):
    """A nil key cannot appear in a snapshot."""
    payload = {
        "version": SNAPSHOT_VERSION,
        "max_level": 0,
        "head": [[1, 1]],
        "nodes": nodes,
    }
    with pytest.raises(ValueError):
        loads(msgpack.packb(payload, use_bin_type=True))


def test_duplicate_keys_rejected():
    payload = {
        "version": SNAPSHOT_VERSION,
        "max_level": 0,
        "head": [[1, 1]],
        "nodes": [[1, "a", 0, [[1, 1]]], [1, "b", 0, [None]]],
    }
    with pytest.raises(ValueError):
        loads(msgpack.packb(payload, use_bin_type=True))
