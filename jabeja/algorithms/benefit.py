import math
import random
from typing import Dict, Iterable, Optional, Tuple

from ..models import AnnealingPolicy, Node


def degree(graph: Dict[int, Node], node: Node, color: int) -> int:
    """Number of `node`'s neighbours currently holding `color`."""
    return sum(1 for n in node.neighbours if graph[n].color == color)


def swap_benefit(graph: Dict[int, Node], p: Node, q: Node, alpha: float) -> Tuple[float, float]:
    """Return (old, swapped) cohesion of the pair before and after exchanging colors."""
    dpp = degree(graph, p, p.color)
    dqq = degree(graph, q, q.color)
    dpq = degree(graph, p, q.color)
    dqp = degree(graph, q, p.color)
    old = math.pow(dpp, alpha) + math.pow(dqq, alpha)
    swapped = math.pow(dpq, alpha) + math.pow(dqp, alpha)
    return old, swapped


def acceptance_probability(old: float, swapped: float, T: float) -> float:
    try:
        return math.exp((swapped - old) / T)
    except OverflowError:
        return math.inf


def find_partner(graph: Dict[int, Node], node_id: int, candidates: Iterable[int], alpha: float,
                 T: float, policy: AnnealingPolicy, rng: random.Random) -> Optional[Tuple[int, float]]:
    """Pick the best swap partner for `node_id` among `candidates`.

    LINEAR keeps the candidate with the highest post-swap cohesion that
    beats the current one scaled by T. EXPONENTIAL keeps the candidate with
    the highest Boltzmann acceptance probability that also passes a uniform
    draw; a swap that leaves cohesion unchanged is never taken.

    Returns (partner_id, benefit) or None when nobody qualifies. The first
    candidate wins ties.
    """
    p = graph[node_id]
    best: Optional[int] = None
    highest = 0.0

    if policy is AnnealingPolicy.LINEAR:
        for cid in candidates:
            old, swapped = swap_benefit(graph, p, graph[cid], alpha)
            if swapped * T > old and swapped > highest:
                best = cid
                highest = swapped
    elif policy is AnnealingPolicy.EXPONENTIAL:
        for cid in candidates:
            old, swapped = swap_benefit(graph, p, graph[cid], alpha)
            prob = acceptance_probability(old, swapped, T)
            # draw only once the candidate could improve on the best so far
            if prob > highest and prob > rng.random() and swapped != old:
                best = cid
                highest = prob
    else:
        raise ValueError(f"unknown annealing policy: {policy!r}")

    if best is None:
        return None
    return best, highest
