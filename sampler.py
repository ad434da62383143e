# sampler.py

import numpy as np


def sample_uniform(bounds, rng):
    """Uniform sample inside an axis-aligned box given as (d, 2) bounds."""
    bounds = np.asarray(bounds, dtype=float)
    return rng.uniform(bounds[:, 0], bounds[:, 1])


def sample(space, goal, goal_bias, rng):
    """
    Goal-biased sample.

    With probability ``goal_bias`` a goal configuration is drawn from
    ``goal``, otherwise a uniform sample of ``space``. Returns None when the
    goal branch is taken but the goal cannot be sampled; the caller skips the
    iteration.
    """
    if goal_bias > 0.0 and rng.random() < goal_bias:
        if not goal.can_sample():
            return None
        return goal.sample_goal(rng)
    return space.sample_uniform(rng)
