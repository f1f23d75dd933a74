import networkx as nx
import pytest

from jabeja.graph_build import (
    build_jabeja_graph, check_adjacency, graph_from_edges, initial_colors, synthetic_graph,
)
from jabeja.models import GraphInitColorPolicy, Node


class TestInitialColors:
    def test_round_robin(self):
        assert initial_colors([1, 2, 3, 4, 5], 2) == {1: 0, 2: 1, 3: 0, 4: 1, 5: 0}

    def test_batch(self):
        colors = initial_colors([1, 2, 3, 4, 5], 2, GraphInitColorPolicy.BATCH)
        assert colors == {1: 0, 2: 0, 3: 0, 4: 1, 5: 1}

    def test_random_is_seeded(self):
        ids = list(range(1, 200))
        a = initial_colors(ids, 4, GraphInitColorPolicy.RANDOM, seed=9)
        b = initial_colors(ids, 4, GraphInitColorPolicy.RANDOM, seed=9)
        assert a == b
        assert set(a.values()) == {0, 1, 2, 3}

    def test_rejects_zero_partitions(self):
        with pytest.raises(ValueError):
            initial_colors([1, 2], 0)


def test_build_jabeja_graph():
    G = graph_from_edges([(3, 1), (1, 2), (2, 4)], nodes=[5])
    graph = build_jabeja_graph(G, 2)
    assert list(graph) == [1, 2, 3, 4, 5]
    assert graph[1].neighbours == [2, 3]
    assert graph[5].neighbours == []
    assert all(node.init_color == node.color for node in graph.values())
    assert [graph[u].color for u in graph] == [0, 1, 0, 1, 0]


def test_self_loops_dropped():
    G = nx.Graph([(1, 1), (1, 2)])
    assert build_jabeja_graph(G, 2)[1].neighbours == [2]


class TestCheckAdjacency:
    def test_asymmetric(self):
        graph = {1: Node(id=1, color=0, neighbours=[2]), 2: Node(id=2, color=1)}
        with pytest.raises(ValueError, match="symmetric"):
            check_adjacency(graph)

    def test_dangling(self):
        graph = {1: Node(id=1, color=0, neighbours=[7])}
        with pytest.raises(ValueError, match="unknown"):
            check_adjacency(graph)

    def test_duplicate_neighbour(self):
        graph = {1: Node(id=1, color=0, neighbours=[2, 2]), 2: Node(id=2, color=1, neighbours=[1])}
        with pytest.raises(ValueError, match="twice"):
            check_adjacency(graph)


def test_synthetic_graph_is_one_based():
    G = synthetic_graph(20, 0.2, seed=1)
    assert sorted(G.nodes()) == list(range(1, 21))
    assert synthetic_graph(20, 0.2, seed=1).edges() == G.edges()
