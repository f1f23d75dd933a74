from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class AnnealingPolicy(str, Enum):
    LINEAR = "LINEAR"
    EXPONENTIAL = "EXPONENTIAL"


class NodeSelectionPolicy(str, Enum):
    LOCAL = "LOCAL"
    RANDOM = "RANDOM"
    HYBRID = "HYBRID"


class GraphInitColorPolicy(str, Enum):
    ROUND_ROBIN = "ROUND_ROBIN"
    RANDOM = "RANDOM"
    BATCH = "BATCH"


@dataclass
class Node:
    id: int
    color: int
    neighbours: List[int] = field(default_factory=list)
    init_color: Optional[int] = None  # captured from color when omitted

    def __post_init__(self):
        if self.init_color is None:
            self.init_color = self.color


@dataclass
class Config:
    rounds: int = 1000
    temperature: float = 2.0
    delta: float = 0.003
    annealing_policy: AnnealingPolicy = AnnealingPolicy.LINEAR
    node_selection_policy: NodeSelectionPolicy = NodeSelectionPolicy.HYBRID
    neighbor_sample_size: int = 3
    random_sample_size: int = 6
    alpha: float = 2.0
    restart: int = 0  # 0 disables restarts
    seed: int = 0
    # run identification / output
    graph_path: str = "graph"
    output_dir: str = "output"
    num_partitions: int = 4
    init_color_policy: GraphInitColorPolicy = GraphInitColorPolicy.ROUND_ROBIN

    def validate(self) -> "Config":
        if self.rounds <= 0:
            raise ValueError("rounds must be positive")
        if self.num_partitions <= 0:
            raise ValueError("num_partitions must be positive")
        if self.neighbor_sample_size < 0 or self.random_sample_size < 0:
            raise ValueError("sample sizes must be non-negative")
        if self.restart < 0:
            raise ValueError("restart must be 0 (disabled) or positive")
        if self.temperature <= 0:
            raise ValueError("temperature must be positive")
        if self.delta <= 0:
            raise ValueError("delta must be positive")
        if self.alpha < 0:
            raise ValueError("alpha must be non-negative")
        if self.annealing_policy is AnnealingPolicy.EXPONENTIAL and self.delta > 1:
            raise ValueError("EXPONENTIAL annealing needs delta in (0, 1]")
        return self


@dataclass
class SimulationState:
    round: int = 0
    swaps: int = 0  # cumulative over the whole run
    temperature: float = 0.0
    report_created: bool = False


@dataclass
class RoundMetrics:
    round: int
    edge_cut: int
    swaps: int
    migrations: int
