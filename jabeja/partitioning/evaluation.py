from typing import Dict, Optional

from ..models import Node, RoundMetrics, SimulationState
from .metrics import color_counts, edge_cut, migrations


def summary(graph: Dict[int, Node], state: SimulationState, final: Optional[RoundMetrics] = None) -> str:
    n = len(graph)
    m = sum(len(node.neighbours) for node in graph.values()) // 2
    sizes = color_counts(graph)
    sizes_txt = ", ".join(f"{c}:{sizes[c]}" for c in sorted(sizes))
    cut = final.edge_cut if final is not None else edge_cut(graph)
    migr = final.migrations if final is not None else migrations(graph)
    return (
        f"Nodes: {n}  Edges: {m}\n"
        f"Partitions: {len(sizes)}  Sizes: {sizes_txt}\n"
        f"Rounds run: {state.round}  Final temperature: {state.temperature:.4f}\n"
        f"Edge cut: {cut}  Swaps: {state.swaps}  Migrations: {migr}\n"
    )
