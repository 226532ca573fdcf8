import pytest

from ringview.core.models.node import NodeDescriptor
from ringview.core.space.layout import RingLayout
from ringview.core.space.ring import Ring
from tests.utils import make_raw_node


def make_node(identifier: int, port: int = 9000) -> NodeDescriptor:
    return NodeDescriptor.from_raw(make_raw_node(f"10.0.0.1:{port}", identifier), RingLayout())


@pytest.mark.ut
def test_ring_sorts_by_identifier():
    ring = Ring([make_node(300), make_node(100), make_node(200)])

    assert [n.identifier for n in ring] == [100, 200, 300]
    assert len(ring) == 3
    assert ring[0].identifier == 100


@pytest.mark.ut
@pytest.mark.parametrize("identifier, expected", [
    (0, 100),
    (100, 200),
    (150, 200),
    (299, 300),
    (300, 100),
    (10 ** 30, 100),
])
def test_find_successor_wraps(identifier, expected):
    ring = Ring([make_node(300), make_node(100), make_node(200)])

    assert ring.find_successor(identifier).identifier == expected


@pytest.mark.ut
@pytest.mark.parametrize("identifier, expected", [
    (0, 300),
    (100, 300),
    (101, 100),
    (300, 200),
    (301, 300),
])
def test_find_predecessor_wraps(identifier, expected):
    ring = Ring([make_node(300), make_node(100), make_node(200)])

    assert ring.find_predecessor(identifier).identifier == expected


@pytest.mark.ut
def test_find_match():
    ring = Ring([make_node(100), make_node(200)])

    assert ring.find_match(200).identifier == 200
    assert ring.find_match(150) is None
    assert ring.find_match(300) is None


@pytest.mark.ut
def test_empty_ring_lookups():
    ring = Ring()

    assert len(ring) == 0
    assert ring.find_successor(1) is None
    assert ring.find_predecessor(1) is None
    assert ring.find_match(1) is None


@pytest.mark.ut
def test_iter_from_wraps():
    a, b, c = make_node(100), make_node(200), make_node(300)
    ring = Ring([c, a, b])

    assert [n.identifier for n in ring.iter_from(b)] == [200, 300, 100]


@pytest.mark.ut
def test_ring_accepts_explicit_none():
    ring = Ring(None)

    assert list(ring) == []
    assert ring.find_successor(0) is None
