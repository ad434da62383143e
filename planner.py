# planner.py

from dataclasses import dataclass, field
from enum import Enum
import numpy as np


class PlannerStatus(Enum):
    """Outcome of a planning run."""
    EXACT_SOLUTION = "exact_solution"
    APPROXIMATE_SOLUTION = "approximate_solution"
    NO_SOLUTION = "no_solution"


@dataclass
class PlannerResult:
    """
    Result reported by ``OptRRT.solve``.

    ``path`` runs from the start to the last motion, empty when there is no
    solution. ``reaches_goal`` tells an approximate solution that satisfies
    the goal but exceeds ``max_path_length`` from one that stops short of the
    goal.
    """
    status: PlannerStatus
    path: np.ndarray = field(default_factory=lambda: np.empty((0, 0)))
    cost: float = np.inf
    reaches_goal: bool = False
    goal_distance: float = np.inf
    iterations: int = 0
    motions: int = 0
    elapsed: float = 0.0

    @property
    def solved(self):
        return self.status is not PlannerStatus.NO_SOLUTION

    @property
    def exact(self):
        return self.status is PlannerStatus.EXACT_SOLUTION


def best_solution(goal_motions):
    """Minimum-cost motion among those satisfying the goal, or None."""
    if not goal_motions:
        return None
    return min(goal_motions, key=lambda m: m.cost)


def is_sufficiently_short(cost, max_path_length):
    return max_path_length is None or cost <= max_path_length


def extract_solution(tree, goal_motions, approx_motion, approx_distance,
                     max_path_length=None,
                     approximate_solutions=True):
    """
    Classify the state of the search and build the reported path.

    Parameters
    ----------
    tree : Tree
    goal_motions : list of Motion
        Every motion found to satisfy the goal.
    approx_motion : Motion or None
        Motion closest to the goal seen so far.
    approx_distance : float
        Its goal distance.
    max_path_length : float, optional
        Cost threshold separating exact from approximate goal solutions.
    approximate_solutions : bool
        Whether a path that stops short of the goal may be reported.

    Returns
    -------
    status, motion, reaches_goal
    """
    solution = best_solution(goal_motions)
    if solution is not None:
        if is_sufficiently_short(solution.cost, max_path_length):
            return PlannerStatus.EXACT_SOLUTION, solution, True
        return PlannerStatus.APPROXIMATE_SOLUTION, solution, True

    if approximate_solutions and approx_motion is not None and len(tree) > 1 \
            and np.isfinite(approx_distance):
        return PlannerStatus.APPROXIMATE_SOLUTION, approx_motion, False

    return PlannerStatus.NO_SOLUTION, None, False
