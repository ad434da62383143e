# opt_rrt.py

import logging
import time
from dataclasses import replace

import numpy as np

from config import PlannerConfig, PlannerConfigError
from tree import Tree
from rewiring import choose_parent, rewire
from planner import PlannerResult, PlannerStatus, best_solution, extract_solution, is_sufficiently_short
from sampler import sample
from spatial_index import default_index_factory
from steer import steer
from termination import as_condition

logger = logging.getLogger(__name__)


class OptRRT:
    """
    RRT that rewires its exploration tree while growing it, so the path
    found converges to the shortest one (with respect to the metric of the
    state space) as more time is spent (Karaman and Frazzoli, RSS 2010).

    If a solution no longer than ``max_path_length`` is found the planner
    stops before the termination condition fires. The algorithm is fairly
    sensitive to ``ball_radius_max`` and ``ball_radius_constant``.

    Parameters
    ----------
    space : state space
        ``RealVectorSpace``, ``SE2Space`` or any object with the same
        interface.
    checker : validity checker
        Provides ``is_valid(x)`` and ``is_valid_segment(a, b)``.
    x_start : array-like
        Start configuration.
    goal : goal
        Provides ``is_satisfied``, ``distance_goal``, ``can_sample`` and
        ``sample_goal``.
    config : PlannerConfig, optional
    nearest_neighbors : callable, optional
        ``factory(space) -> index``; R-tree for Euclidean spaces by default.

    Example
    -------
    >>> space = RealVectorSpace([[0, 10], [0, 10]])
    >>> planner = OptRRT(space, ObstacleValidityChecker(bounds=space.bounds),
    ...                  [1, 1], GoalState(space, [9, 9], 0.5),
    ...                  PlannerConfig(max_distance=1.0))
    >>> result = planner.solve(termination.timed(1.0))
    """

    name = "OptRRT"

    def __init__(self, space, checker, x_start, goal, config=None, nearest_neighbors=None):
        self.space = space
        self.checker = checker
        self.x_start = np.asarray(x_start, dtype=float)
        self.goal = goal
        self.config = config or PlannerConfig()
        self.nearest_neighbors = nearest_neighbors or default_index_factory

        self._run_config = None
        self.rng = None
        self.tree = None
        self.goal_motions = []
        self.best_cost = np.inf
        self.approx_motion = None
        self.approx_distance = np.inf
        self.iterations = 0

    # ---- Parameters ----

    def _set(self, **changes):
        self.config = replace(self.config, **changes)
        self._run_config = None

    @property
    def goal_bias(self):
        return self.config.goal_bias

    @goal_bias.setter
    def goal_bias(self, value):
        self._set(goal_bias=value)

    @property
    def max_distance(self):
        """Maximum length of a motion added to the tree."""
        if self._run_config is not None:
            return self._run_config.max_distance
        return self.config.max_distance

    @max_distance.setter
    def max_distance(self, value):
        self._set(max_distance=value)

    @property
    def ball_radius_constant(self):
        return self.config.ball_radius_constant

    @ball_radius_constant.setter
    def ball_radius_constant(self, value):
        self._set(ball_radius_constant=value)

    @property
    def max_ball_radius(self):
        return self.config.ball_radius_max

    @max_ball_radius.setter
    def max_ball_radius(self, value):
        self._set(ball_radius_max=value)

    # ---- Lifecycle ----

    def setup(self):
        """
        Validate the configuration and the start state.

        Raises
        ------
        PlannerConfigError
            If the planner cannot run with the current settings.
        """
        run_config = self.config.validate(self.space)
        if self.x_start.shape != (self.space.dimension,):
            raise PlannerConfigError(
                f"start state has shape {self.x_start.shape}, "
                f"the state space has dimension {self.space.dimension}")
        if not self.checker.is_valid(self.x_start):
            raise PlannerConfigError(f"start state {self.x_start} is not valid")

        if self.config.max_distance is None:
            logger.info("%s: range computed as %.6f", self.name, run_config.max_distance)
        if self.rng is None:
            self.rng = np.random.default_rng(run_config.seed)
        self._run_config = run_config

    def clear(self):
        """Drop the tree and every recorded solution."""
        if self.tree is not None:
            self.tree.clear()
        self.tree = None
        self.goal_motions = []
        self.best_cost = np.inf
        self.approx_motion = None
        self.approx_distance = np.inf
        self.iterations = 0
        self._run_config = None
        self.rng = None

    def set_problem(self, x_start, goal):
        self.clear()
        self.x_start = np.asarray(x_start, dtype=float)
        self.goal = goal

    def _ensure_tree(self):
        if self.tree is not None:
            return
        self.tree = Tree(self.x_start, self.space, self.nearest_neighbors(self.space))
        self._record_goal_progress(self.tree.root)

    def _record_goal_progress(self, motion):
        dist = self.goal.distance_goal(motion.state)
        if self.goal.is_satisfied(motion.state):
            self.goal_motions.append(motion)
            self.best_cost = min(self.best_cost, motion.cost)
        if dist < self.approx_distance:
            self.approx_distance = dist
            self.approx_motion = motion

    # ---- Search ----

    def solve(self, ptc):
        """
        Grow the tree until ``ptc`` returns True or a sufficiently short
        solution is found. Calling it again continues with the same tree.

        Parameters
        ----------
        ptc : TerminationCondition, callable or float
            Polled once per iteration; a float is a time budget in seconds.

        Returns
        -------
        PlannerResult
        """
        if self._run_config is None:
            self.setup()
        ptc = as_condition(ptc)
        cfg = self._run_config
        self._ensure_tree()

        start_time = time.perf_counter()
        start_iterations = self.iterations
        logger.info("%s: Starting with %d motions", self.name, len(self.tree))

        while not self._sufficiently_short(cfg) and not ptc():
            self.iterations += 1
            self.extend(cfg)

        status, motion, reaches_goal = extract_solution(
            self.tree, self.goal_motions, self.approx_motion, self.approx_distance,
            max_path_length=cfg.max_path_length,
            approximate_solutions=cfg.approximate_solutions)

        result = PlannerResult(
            status=status,
            iterations=self.iterations - start_iterations,
            motions=len(self.tree),
            elapsed=time.perf_counter() - start_time,
        )
        if motion is not None:
            result.path = self.tree.reconstruct_path(motion)
            result.cost = motion.cost
            result.reaches_goal = reaches_goal
            result.goal_distance = self.goal.distance_goal(motion.state)

        if status is PlannerStatus.APPROXIMATE_SOLUTION and not reaches_goal:
            logger.info("%s: Found approximate solution, %.6f away from the goal",
                        self.name, result.goal_distance)
        elif status is PlannerStatus.NO_SOLUTION:
            logger.info("%s: No solution found", self.name)
        logger.info("%s: Created %d motions in %d iterations, best cost %.6f",
                    self.name, len(self.tree), result.iterations, result.cost)
        return result

    def _sufficiently_short(self, cfg):
        if cfg.max_path_length is None:
            return False
        return np.isfinite(self.best_cost) and is_sufficiently_short(self.best_cost, cfg.max_path_length)

    def extend(self, cfg):
        """
        One sample / steer / insert / rewire step. Returns the inserted
        motion, or None when the iteration was discarded.
        """
        tree = self.tree
        x_rand = sample(self.space, self.goal, cfg.goal_bias, self.rng)
        if x_rand is None:
            logger.debug("Goal cannot be sampled, skipping iteration")
            return None

        n_nearest = tree.nearest_motion(x_rand)
        x_new, d = steer(self.space, n_nearest.state, x_rand, cfg.max_distance)

        if d == 0.0:
            logger.debug("Sample coincides with motion %d", n_nearest.id)
            return None
        if not self.checker.is_valid_segment(n_nearest.state, x_new):
            return None

        radius = tree.neighbor_radius(cfg.ball_radius_constant, cfg.ball_radius_max)
        near = tree.nearby(x_new, n_nearest, radius)

        parent, cost, distances = choose_parent(x_new, near, self.space, self.checker,
                                               validated=n_nearest)
        if parent is None:
            return None

        motion = tree.add_motion(x_new, parent, cost)
        if rewire(tree, motion, near, self.space, self.checker, distances) and self.goal_motions:
            # Rewiring can lower the cost of recorded goal motions
            self.best_cost = best_solution(self.goal_motions).cost
        if cfg.check_invariants:
            tree.check_invariants()

        self._record_goal_progress(motion)
        return motion
