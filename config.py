# config.py

import json
import math
from dataclasses import dataclass, asdict, fields, replace
from typing import Optional

from scipy.special import gamma

# Sampling parameters
GOAL_BIAS = 0.05   # probability of sampling the goal instead of the whole space

# Rewiring neighborhood
BALL_RADIUS_CONST = 1.0   # multiplier of the shrinking radius
BALL_RADIUS_MAX = 0.0     # upper bound on the radius, 0 means unbounded

# Fraction of the space extent used as range when none is configured
RANGE_EXTENT_FRACTION = 0.2


class PlannerConfigError(ValueError):
    """Raised when the planner is configured in a way that cannot run."""


@dataclass(frozen=True)
class PlannerConfig:
    """
    Parameters of a planning run. Immutable for the duration of a run.

    Parameters
    ----------
    goal_bias : float
        Probability in [0, 1] of sampling a goal configuration.
    max_distance : float or None
        Maximum length of a motion added to the tree (the range). When None it
        is derived from the extent of the space in ``validate``.
    ball_radius_constant : float
        Multiplicative factor of the rewiring radius.
    ball_radius_max : float
        Upper bound of the rewiring radius, 0 for unbounded.
    max_path_length : float or None
        Stop as soon as a solution of at most this cost is found.
    approximate_solutions : bool
        Report the path to the motion closest to the goal when no motion
        satisfies the goal.
    seed : int or None
        Seed of the random generator.
    check_invariants : bool
        Verify the whole tree after every rewire. Slow, meant for debugging.
    """
    goal_bias: float = GOAL_BIAS
    max_distance: Optional[float] = None
    ball_radius_constant: float = BALL_RADIUS_CONST
    ball_radius_max: float = BALL_RADIUS_MAX
    max_path_length: Optional[float] = None
    approximate_solutions: bool = True
    seed: Optional[int] = None
    check_invariants: bool = False

    @classmethod
    def from_dict(cls, data):
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise PlannerConfigError(f"unknown planner parameters: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_json(cls, path):
        with open(path, "r") as f:
            return cls.from_dict(json.load(f))

    def to_dict(self):
        return asdict(self)

    def validate(self, space):
        """
        Check every parameter against ``space`` and return a config with
        ``max_distance`` resolved.

        Raises
        ------
        PlannerConfigError
            If a parameter is out of range or the range cannot be derived.
        """
        if space.dimension <= 0:
            raise PlannerConfigError("state space has zero dimension")
        if not 0.0 <= self.goal_bias <= 1.0:
            raise PlannerConfigError(f"goal_bias must be in [0, 1], got {self.goal_bias}")
        if not self.ball_radius_constant > 0.0:
            raise PlannerConfigError(
                f"ball_radius_constant must be positive, got {self.ball_radius_constant}")
        if not self.ball_radius_max >= 0.0:
            raise PlannerConfigError(
                f"ball_radius_max must be non-negative, got {self.ball_radius_max}")
        if self.max_path_length is not None and not self.max_path_length >= 0.0:
            raise PlannerConfigError(
                f"max_path_length must be non-negative, got {self.max_path_length}")

        max_distance = self.max_distance
        if max_distance is None:
            extent = space.extent()
            if not (math.isfinite(extent) and extent > 0.0):
                raise PlannerConfigError(
                    "max_distance is not set and the state space has no finite extent")
            max_distance = RANGE_EXTENT_FRACTION * extent
        if not (math.isfinite(max_distance) and max_distance > 0.0):
            raise PlannerConfigError(f"max_distance must be positive, got {max_distance}")

        return replace(self, max_distance=float(max_distance))


def unit_ball_volume(dimension):
    """Volume of the unit ball in R^d."""
    return math.pi ** (dimension / 2.0) / gamma(dimension / 2.0 + 1.0)


def optimal_ball_radius_constant(measure, dimension):
    """
    Smallest rewiring constant for which RRT* is asymptotically optimal
    (Karaman and Frazzoli, 2011):

        gamma* = 2 (1 + 1/d)^(1/d) (mu(X_free) / zeta_d)^(1/d)

    ``measure`` is the volume of the free space, an upper bound such as the
    measure of the whole space is fine.
    """
    if dimension <= 0:
        raise PlannerConfigError("state space has zero dimension")
    d = float(dimension)
    return 2.0 * (1.0 + 1.0 / d) ** (1.0 / d) * (measure / unit_ball_volume(dimension)) ** (1.0 / d)
