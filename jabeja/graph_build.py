import math
import random
from typing import Dict, List, Optional, Sequence

import networkx as nx

from .models import GraphInitColorPolicy, Node


def initial_colors(node_ids: Sequence[int], num_partitions: int,
                   policy: GraphInitColorPolicy = GraphInitColorPolicy.ROUND_ROBIN,
                   seed: Optional[int] = None) -> Dict[int, int]:
    if num_partitions <= 0:
        raise ValueError("num_partitions must be positive")
    if policy is GraphInitColorPolicy.ROUND_ROBIN:
        return {u: i % num_partitions for i, u in enumerate(node_ids)}
    if policy is GraphInitColorPolicy.RANDOM:
        rng = random.Random(seed)
        return {u: rng.randrange(num_partitions) for u in node_ids}
    if policy is GraphInitColorPolicy.BATCH:
        batch = max(1, math.ceil(len(node_ids) / num_partitions))
        return {u: i // batch for i, u in enumerate(node_ids)}
    raise ValueError(f"unknown initial color policy: {policy!r}")


def check_adjacency(graph: Dict[int, Node]) -> None:
    """Raise ValueError unless every neighbour exists and links back."""
    for nid, node in graph.items():
        if len(set(node.neighbours)) != len(node.neighbours):
            raise ValueError(f"node {nid} lists a neighbour twice")
        for v in node.neighbours:
            if v == nid:
                raise ValueError(f"node {nid} is its own neighbour")
            if v not in graph:
                raise ValueError(f"node {nid} references unknown node {v}")
            if nid not in graph[v].neighbours:
                raise ValueError(f"edge {nid}-{v} is not symmetric")


def build_jabeja_graph(G: nx.Graph, num_partitions: int,
                       policy: GraphInitColorPolicy = GraphInitColorPolicy.ROUND_ROBIN,
                       seed: Optional[int] = None) -> Dict[int, Node]:
    """Turn a networkx graph into the id -> Node mapping the simulation mutates.

    Nodes are keyed in ascending id order and that order drives both the
    round sweep and the initial coloring.
    """
    node_ids: List[int] = sorted(G.nodes())
    colors = initial_colors(node_ids, num_partitions, policy, seed)
    graph = {
        u: Node(id=u, color=colors[u], neighbours=sorted(v for v in G.neighbors(u) if v != u))
        for u in node_ids
    }
    check_adjacency(graph)
    return graph


def graph_from_edges(edges, nodes=None) -> nx.Graph:
    G = nx.Graph()
    if nodes is not None:
        G.add_nodes_from(nodes)
    G.add_edges_from(edges)
    return G


def synthetic_graph(n: int, p: float, seed: Optional[int] = None) -> nx.Graph:
    """Erdos-Renyi graph with 1-based ids, matching METIS numbering."""
    G = nx.gnp_random_graph(n, p, seed=seed)
    return nx.relabel_nodes(G, lambda x: x + 1)
