from ..models import AnnealingPolicy

LINEAR_T_MIN = 1.0
EXPONENTIAL_T_MIN = 1e-4


def t_min(policy: AnnealingPolicy) -> float:
    return LINEAR_T_MIN if policy is AnnealingPolicy.LINEAR else EXPONENTIAL_T_MIN


class Annealer:
    """Temperature schedule, stepped once after every round's sweep.

    LINEAR subtracts `delta`, EXPONENTIAL multiplies by it; both stop at
    the policy floor. With `restart > 0` the temperature jumps back to its
    initial value after every round whose index is a multiple of `restart`.
    """

    def __init__(self, initial: float, delta: float, policy: AnnealingPolicy, restart: int = 0):
        self.initial = initial
        self.delta = delta
        self.policy = policy
        self.restart = restart
        self.T = initial

    @property
    def t_min(self) -> float:
        return t_min(self.policy)

    def cool_down(self, round_idx: int) -> float:
        floor = self.t_min
        if self.T > floor:
            if self.policy is AnnealingPolicy.LINEAR:
                self.T = max(self.T - self.delta, floor)
            else:
                self.T = max(self.T * self.delta, floor)
        else:
            self.T = floor
        if self.restart > 0 and round_idx % self.restart == 0:
            self.T = self.initial
        return self.T
