import math
import random

import pytest

from jabeja.algorithms.benefit import acceptance_probability, degree, find_partner, swap_benefit
from jabeja.models import AnnealingPolicy

from conftest import make_graph


class CountingRandom(random.Random):
    def __init__(self, seed=0):
        super().__init__(seed)
        self.draws = 0

    def random(self):
        self.draws += 1
        return super().random()


@pytest.fixture
def star():
    """Center 1 colored 0 with two leaves colored 1."""
    return make_graph({1: 0, 2: 1, 3: 1}, [(1, 2), (1, 3)])


def test_degree_counts_current_colors(path_graph):
    assert degree(path_graph, path_graph[1], 1) == 2
    assert degree(path_graph, path_graph[1], 0) == 0
    path_graph[2].color = 0
    assert degree(path_graph, path_graph[1], 0) == 1
    assert degree(path_graph, path_graph[4], 0) == 1


def test_swap_benefit(path_graph):
    old, swapped = swap_benefit(path_graph, path_graph[1], path_graph[2], 2.0)
    assert old == 0.0
    assert swapped == 8.0


def test_swap_benefit_fractional_alpha(star):
    old, swapped = swap_benefit(star, star[1], star[2], 0.5)
    assert old == 0.0
    assert swapped == pytest.approx(math.sqrt(2) + 1)


class TestLinear:
    def test_picks_highest_benefit(self, path_graph):
        found = find_partner(path_graph, 1, [3, 2], 2.0, 1.0, AnnealingPolicy.LINEAR, random.Random(0))
        assert found == (2, 8.0)

    @pytest.mark.parametrize("order", [[2, 3], [3, 2]])
    def test_ties_go_to_first_candidate(self, star, order):
        found = find_partner(star, 1, order, 2.0, 1.0, AnnealingPolicy.LINEAR, random.Random(0))
        assert found == (order[0], 5.0)

    def test_no_improvement_no_partner(self, path_graph):
        path_graph[1].color, path_graph[2].color = 1, 0
        assert find_partner(path_graph, 2, [1, 4], 2.0, 1.0, AnnealingPolicy.LINEAR, random.Random(0)) is None

    def test_high_temperature_accepts_equal_cohesion(self, path_graph):
        path_graph[1].color, path_graph[2].color = 1, 0
        found = find_partner(path_graph, 2, [1], 2.0, 1.5, AnnealingPolicy.LINEAR, random.Random(0))
        assert found == (1, 2.0)

    def test_no_randomness_consumed(self, star):
        rng = CountingRandom()
        find_partner(star, 1, [2, 3], 2.0, 1.0, AnnealingPolicy.LINEAR, rng)
        assert rng.draws == 0


class TestExponential:
    def test_picks_highest_probability(self, path_graph):
        rng = CountingRandom()
        found = find_partner(path_graph, 1, [2, 3], 2.0, 1.0, AnnealingPolicy.EXPONENTIAL, rng)
        assert found[0] == 2
        assert found[1] == pytest.approx(math.exp(8.0))
        # the second candidate cannot beat the first, so no draw is made for it
        assert rng.draws == 1

    def test_neutral_swap_is_never_taken(self, path_graph):
        # nodes 1 and 3 share a color: old == swapped
        path_graph[1].color = 1
        found = find_partner(path_graph, 1, [3], 2.0, 1.0, AnnealingPolicy.EXPONENTIAL, random.Random(0))
        assert found is None

    def test_harmful_swap_rejected_when_cold(self):
        graph = make_graph({1: 0, 2: 0, 3: 1, 4: 1}, [(1, 2), (3, 4)])
        found = find_partner(graph, 1, [3], 2.0, 1e-4, AnnealingPolicy.EXPONENTIAL, random.Random(0))
        assert found is None

    def test_probability_overflow_saturates(self):
        assert acceptance_probability(0.0, 8.0, 1e-4) == math.inf
        assert acceptance_probability(2.0, 2.0, 1e-4) == 1.0


def test_unknown_policy(star):
    with pytest.raises(ValueError):
        find_partner(star, 1, [2], 2.0, 1.0, "LINEAR-ish", random.Random(0))
