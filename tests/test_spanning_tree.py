import random

import pytest

from dungeon_levelgen.geometry import Edge, Vertex, vertex_key
from dungeon_levelgen.generators import minimum_spanning_tree, reduce_graph, triangulate


def _vertices(edges):
    return {vertex_key(e.u) for e in edges} | {vertex_key(e.v) for e in edges}


def _connected(edges):
    if not edges:
        return True
    adjacency = {}
    for e in edges:
        a, b = vertex_key(e.u), vertex_key(e.v)
        adjacency.setdefault(a, set()).add(b)
        adjacency.setdefault(b, set()).add(a)
    start = next(iter(adjacency))
    seen, stack = {start}, [start]
    while stack:
        for other in adjacency[stack.pop()]:
            if other not in seen:
                seen.add(other)
                stack.append(other)
    return len(seen) == len(adjacency)


@pytest.fixture
def square_edges():
    a, b, c, d = Vertex(0, 0), Vertex(10, 0), Vertex(10, 10), Vertex(0, 10)
    return [Edge(a, b), Edge(b, c), Edge(c, d), Edge(d, a), Edge(a, c)]


def test_empty_input():
    assert minimum_spanning_tree([]) == []
    graph = reduce_graph([], 100, random.Random(0))
    assert graph.edges == []
    assert len(graph) == 0


def test_tree_spans_square(square_edges):
    tree = minimum_spanning_tree(square_edges)
    assert len(tree) == 3
    assert _vertices(tree) == _vertices(square_edges)
    # The diagonal is longer than every side
    assert square_edges[4] not in tree


def test_ties_keep_first_candidate(square_edges):
    tree = minimum_spanning_tree(square_edges)
    # From (0,0) both (0,0)-(10,0) and (0,10)-(0,0) have length 10
    assert tree[0] is square_edges[0]


def test_start_vertex_override(square_edges):
    tree = minimum_spanning_tree(square_edges, start=Vertex(10, 10))
    assert tree[0].has_endpoint(Vertex(10, 10))
    assert len(tree) == 3


def test_tree_picks_shortest_edges():
    a, b, c = Vertex(0, 0), Vertex(1, 0), Vertex(0, 5)
    edges = [Edge(a, c), Edge(b, c), Edge(a, b)]
    tree = minimum_spanning_tree(edges)
    assert sum(e.length for e in tree) == pytest.approx(1 + 5)


@pytest.mark.parametrize("seed", [3, 5, 8])
def test_tree_connects_triangulation(seed):
    rng = random.Random(seed)
    points = [Vertex(rng.randrange(80), rng.randrange(80)) for _ in range(15)]
    edges = triangulate(points)
    tree = minimum_spanning_tree(edges)
    assert _vertices(tree) == _vertices(edges)
    assert len(tree) == len(_vertices(edges)) - 1
    assert _connected(tree)


def test_chance_zero_keeps_only_tree(square_edges):
    graph = reduce_graph(square_edges, 0, random.Random(1))
    assert graph.extras == []
    assert graph.edges == graph.tree


def test_chance_hundred_keeps_everything(square_edges):
    graph = reduce_graph(square_edges, 100, random.Random(1))
    assert len(graph.edges) == len(square_edges)
    assert graph.edges[:3] == graph.tree


def test_reduce_is_deterministic(square_edges):
    first = reduce_graph(square_edges, 50, random.Random(4))
    second = reduce_graph(square_edges, 50, random.Random(4))
    assert [e.key() for e in first.edges] == [e.key() for e in second.edges]
