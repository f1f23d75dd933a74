import logging
import random
from typing import Dict, List, Optional

from ..algorithms.annealing import Annealer
from ..algorithms.benefit import find_partner
from ..algorithms.sampling import global_sample, neighbor_sample
from ..io_utils import ReportWriter
from ..models import Config, Node, NodeSelectionPolicy, RoundMetrics, SimulationState
from .metrics import compute_metrics

logger = logging.getLogger(__name__)


class JabejaSimulation:
    """Round driver: every node samples, evaluates and swaps once per round.

    Swaps are applied in place as the sweep goes, so a node evaluated later
    in the round already sees the colors produced by earlier swaps.

    `report` receives the metrics of every round; pass None to keep the run
    in memory only. `rng` defaults to a generator seeded from the config and
    is the single source of randomness for sampling and acceptance.
    """

    def __init__(self, graph: Dict[int, Node], config: Config,
                 report: Optional[ReportWriter] = None, rng: Optional[random.Random] = None):
        self.graph = graph
        self.node_ids: List[int] = list(graph.keys())
        self.config = config.validate()
        self.report = report
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.annealer = Annealer(config.temperature, config.delta, config.annealing_policy, config.restart)
        self.state = SimulationState(temperature=config.temperature)

    def _search(self, node_id: int, candidates: List[int]) -> Optional[int]:
        found = find_partner(
            self.graph, node_id, candidates, self.config.alpha,
            self.state.temperature, self.config.annealing_policy, self.rng,
        )
        return None if found is None else found[0]

    def sample_and_swap(self, node_id: int) -> Optional[int]:
        """Run one node's step; returns the partner it swapped with, if any."""
        policy = self.config.node_selection_policy
        node = self.graph[node_id]
        partner = None

        if policy in (NodeSelectionPolicy.LOCAL, NodeSelectionPolicy.HYBRID):
            partner = self._search(node_id, neighbor_sample(node, self.config.neighbor_sample_size, self.rng))

        if partner is None and policy in (NodeSelectionPolicy.RANDOM, NodeSelectionPolicy.HYBRID):
            candidates = global_sample(node_id, self.node_ids, self.config.random_sample_size, self.rng)
            partner = self._search(node_id, candidates)

        if partner is not None:
            other = self.graph[partner]
            node.color, other.color = other.color, node.color
            self.state.swaps += 1
        return partner

    def run_round(self) -> RoundMetrics:
        round_idx = self.state.round
        for node_id in self.node_ids:
            self.sample_and_swap(node_id)

        self.state.temperature = self.annealer.cool_down(round_idx)

        metrics = compute_metrics(self.graph, round_idx, self.state.swaps)
        logger.info("round: %d, edge cut: %d, swaps: %d, migrations: %d",
                    metrics.round, metrics.edge_cut, metrics.swaps, metrics.migrations)
        if self.report is not None:
            self.report.write(metrics)
            self.state.report_created = True
        self.state.round += 1
        return metrics

    def run(self) -> List[RoundMetrics]:
        history: List[RoundMetrics] = []
        while self.state.round < self.config.rounds:
            history.append(self.run_round())
        return history
