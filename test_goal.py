# test_goal.py

import numpy as np
import pytest

from goal import GoalRegion, GoalState, GoalStates
from sampler import sample
from state_space import RealVectorSpace, SE2Space


def test_goal_state(plane_space, rng):
    goal = GoalState(plane_space, [9.0, 9.0], threshold=0.5)
    assert goal.is_satisfied([9.0, 9.4])
    assert not goal.is_satisfied([9.0, 9.6])
    assert goal.distance_goal([9.0, 8.0]) == pytest.approx(1.0)
    assert goal.can_sample()

    s = goal.sample_goal(rng)
    np.testing.assert_array_equal(s, [9.0, 9.0])
    s[0] = 0.0
    np.testing.assert_array_equal(goal.state, [9.0, 9.0])


def test_goal_states(plane_space, rng):
    goal = GoalStates(plane_space, [[1.0, 1.0], [9.0, 9.0]], threshold=0.1)
    assert goal.is_satisfied([1.0, 1.05])
    assert goal.is_satisfied([9.0, 9.0])
    assert goal.distance_goal([8.0, 9.0]) == pytest.approx(1.0)
    seen = {tuple(goal.sample_goal(rng)) for _ in range(50)}
    assert seen == {(1.0, 1.0), (9.0, 9.0)}

    empty = GoalStates(plane_space, [])
    assert not empty.can_sample()
    assert empty.sample_goal(rng) is None


def test_goal_region_cannot_sample(rng):
    goal = GoalRegion(lambda x: abs(x[0] - 10.0), threshold=0.5)
    assert goal.is_satisfied([9.6])
    assert not goal.can_sample()
    assert goal.sample_goal(rng) is None


def test_goal_state_in_se2_wraps_heading():
    space = SE2Space([[0, 10], [0, 10]])
    goal = GoalState(space, [5.0, 5.0, np.pi - 0.05], threshold=0.2)
    assert goal.is_satisfied([5.0, 5.0, -np.pi + 0.05])


def test_sample_goal_bias(plane_space, rng):
    goal = GoalState(plane_space, [9.0, 9.0])
    for _ in range(20):
        np.testing.assert_array_equal(sample(plane_space, goal, 1.0, rng), [9.0, 9.0])
    for _ in range(20):
        x = sample(plane_space, goal, 0.0, rng)
        assert plane_space.satisfies_bounds(x)


def test_sample_skips_unsampleable_goal(rng):
    space = RealVectorSpace([[0.0, 10.0]])
    goal = GoalRegion(lambda x: abs(x[0] - 10.0))
    assert all(sample(space, goal, 1.0, rng) is None for _ in range(10))
