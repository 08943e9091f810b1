"""Unit tests for node records."""
import pytest

from skipgraph.node import HEAD, Edge, Node


def test_creation():
    """A node has one link slot per level 0..height."""
    node = Node("test_key", "test_value", 3)
    assert node.key == "test_key"
    assert node.value == "test_value"
    assert node.height == 3
    assert len(node.links) == 4
    assert all(edge is None for edge in node.links)


def test_negative_height_rejected():
    with pytest.raises(ValueError):
        Node("k", "v", -1)


def test_neighbors():
    """Neighbors list the next key and forward weight at a level."""
    node = Node(1, "one", 1)
    node.links[0] = Edge(2, 0.5, 0.25)
    assert node.neighbors(0) == [(2, 0.5)]
    assert node.neighbors(1) == []
    assert node.neighbors(5) == []
    assert node.next_key(0) == 2
    assert node.next_key(1) is None
    assert node.next_key(7) is None


def test_head_sentinel():
    """The head key is a singleton distinct from user keys."""
    head = Node(HEAD, None, 2)
    assert head.is_head
    assert not Node("HEAD", None, 0).is_head
    assert type(HEAD)() is HEAD
    assert repr(HEAD) == "HEAD"


def test_edge_equality():
    assert Edge("a", 1, 2) == Edge("a", 1, 2)
    assert Edge("a", 1, 2) != Edge("a", 2, 1)
