from collections import Counter
from typing import Dict

from ..models import Node, RoundMetrics


def gray_links(graph: Dict[int, Node]) -> int:
    """Ordered (node, neighbour) pairs whose colors differ; each cut edge counts twice."""
    return sum(
        1
        for node in graph.values()
        for n in node.neighbours
        if graph[n].color != node.color
    )


def edge_cut(graph: Dict[int, Node]) -> int:
    return gray_links(graph) // 2


def migrations(graph: Dict[int, Node]) -> int:
    return sum(1 for node in graph.values() if node.color != node.init_color)


def color_counts(graph: Dict[int, Node]) -> Dict[int, int]:
    return dict(Counter(node.color for node in graph.values()))


def compute_metrics(graph: Dict[int, Node], round_idx: int, swaps: int) -> RoundMetrics:
    return RoundMetrics(
        round=round_idx,
        edge_cut=edge_cut(graph),
        swaps=swaps,
        migrations=migrations(graph),
    )
