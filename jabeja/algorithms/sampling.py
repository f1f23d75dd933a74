import random
from typing import List, Sequence

from ..models import Node


def _draw_distinct(pool: Sequence[int], count: int, rng: random.Random, exclude=None) -> List[int]:
    """Rejection-sample `count` distinct ids from `pool`, keeping draw order.

    Callers must cap `count` to the eligible population first, otherwise
    the loop never finishes.
    """
    picked: List[int] = []
    seen = set()
    size = len(pool)
    while len(picked) < count:
        cand = pool[rng.randrange(size)]
        if cand == exclude or cand in seen:
            continue
        seen.add(cand)
        picked.append(cand)
    return picked


def neighbor_sample(node: Node, size: int, rng: random.Random) -> List[int]:
    """Up to `size` distinct neighbours of `node`; all of them when it has few."""
    neighbours = node.neighbours
    if len(neighbours) <= size:
        return list(neighbours)
    return _draw_distinct(neighbours, size, rng)


def global_sample(node_id: int, node_ids: Sequence[int], size: int, rng: random.Random) -> List[int]:
    """Up to `size` distinct ids drawn uniformly from the whole graph, never `node_id`.

    `node_id` is expected to be one of `node_ids`, so at most
    ``len(node_ids) - 1`` ids are eligible.
    """
    count = min(size, len(node_ids) - 1)
    if count <= 0:
        return []
    return _draw_distinct(node_ids, count, rng, exclude=node_id)
