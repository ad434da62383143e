# goal.py

import numpy as np


class GoalRegion:
    """
    Goal defined by a distance function: a state satisfies the goal when its
    distance to the region is at most ``threshold``. A region of this kind
    cannot be sampled, so goal-biased iterations are skipped.
    """

    def __init__(self, distance_fn, threshold=0.0):
        self._distance_fn = distance_fn
        self.threshold = float(threshold)

    def distance_goal(self, x):
        return float(self._distance_fn(x))

    def is_satisfied(self, x):
        return self.distance_goal(x) <= self.threshold

    def can_sample(self):
        return False

    def sample_goal(self, rng):
        return None


class GoalState(GoalRegion):
    """A single goal configuration with a tolerance in the space's metric."""

    def __init__(self, space, state, threshold=0.0):
        self.space = space
        self.state = np.asarray(state, dtype=float)
        super().__init__(lambda x: space.distance(x, self.state), threshold)

    def can_sample(self):
        return True

    def sample_goal(self, rng):
        return self.state.copy()


class GoalStates(GoalRegion):
    """Several goal configurations; sampling picks one uniformly."""

    def __init__(self, space, states, threshold=0.0):
        self.space = space
        self.states = [np.asarray(s, dtype=float) for s in states]
        super().__init__(
            lambda x: min((space.distance(x, s) for s in self.states), default=np.inf), threshold)

    def can_sample(self):
        return len(self.states) > 0

    def sample_goal(self, rng):
        if not self.states:
            return None
        return self.states[rng.integers(len(self.states))].copy()
