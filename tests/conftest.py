from typing import Dict

import pytest

from jabeja.graph_build import build_jabeja_graph, synthetic_graph
from jabeja.models import Config, Node


def make_graph(colors: Dict[int, int], edges) -> Dict[int, Node]:
    adj = {u: [] for u in colors}
    for u, v in edges:
        adj[u].append(v)
        adj[v].append(u)
    return {u: Node(id=u, color=c, neighbours=sorted(adj[u])) for u, c in colors.items()}


@pytest.fixture
def path_graph() -> Dict[int, Node]:
    """3 - 1 - 2 - 4 colored B A B A: three cut edges, one swap (1<->2) leaves one."""
    return make_graph({1: 0, 2: 1, 3: 1, 4: 0}, [(3, 1), (1, 2), (2, 4)])


@pytest.fixture
def random_graph():
    G = synthetic_graph(60, 0.1, seed=3)
    return build_jabeja_graph(G, 4)


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(rounds=10, output_dir=str(tmp_path / "out"), graph_path="test.graph")
