"""
conftest.py: pytest fixtures shared across the test suite.

Provides the standard spaces, validity checkers and goals used by the
planner scenarios so individual test modules stay short.
"""

import numpy as np
import pytest

from collision import ObstacleValidityChecker
from goal import GoalState
from state_space import RealVectorSpace


# =========================================================================
# Spaces
# =========================================================================

@pytest.fixture()
def line_space():
    """Unobstructed 1-D segment [0, 10]."""
    return RealVectorSpace([[0.0, 10.0]])


@pytest.fixture()
def plane_space():
    return RealVectorSpace([[0.0, 10.0], [0.0, 10.0]])


# =========================================================================
# Checkers and goals
# =========================================================================

@pytest.fixture()
def line_checker(line_space):
    return ObstacleValidityChecker(bounds=line_space.bounds)


@pytest.fixture()
def plane_checker(plane_space):
    return ObstacleValidityChecker(bounds=plane_space.bounds)


@pytest.fixture()
def line_goal(line_space):
    """The single point 10."""
    return GoalState(line_space, [10.0], threshold=0.0)


@pytest.fixture()
def rng():
    return np.random.default_rng(1234)
