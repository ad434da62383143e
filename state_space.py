# state_space.py

import numpy as np

from sampler import sample_uniform


def wrap_angle(theta):
    """Wrap an angle to [-pi, pi)."""
    return (theta + np.pi) % (2.0 * np.pi) - np.pi


class RealVectorSpace:
    """
    Axis-aligned box in R^d with the Euclidean metric.

    Parameters
    ----------
    bounds : array-like, shape (d, 2)
        Lower and upper bound per dimension, e.g. ``[[0, 30], [0, 30]]``.
    """

    is_euclidean = True

    def __init__(self, bounds):
        self.bounds = np.atleast_2d(np.asarray(bounds, dtype=float))
        if self.bounds.shape[1] != 2:
            raise ValueError("bounds must have shape (d, 2)")
        if np.any(self.bounds[:, 1] < self.bounds[:, 0]):
            raise ValueError("upper bounds must not be below lower bounds")

    @property
    def dimension(self):
        return self.bounds.shape[0]

    def sample_uniform(self, rng):
        return sample_uniform(self.bounds, rng)

    def distance(self, a, b):
        return float(np.linalg.norm(np.asarray(b, dtype=float) - np.asarray(a, dtype=float)))

    def interpolate(self, a, b, t):
        a = np.asarray(a, dtype=float)
        return a + t * (np.asarray(b, dtype=float) - a)

    def satisfies_bounds(self, x):
        x = np.asarray(x, dtype=float)
        return bool(np.all(x >= self.bounds[:, 0]) and np.all(x <= self.bounds[:, 1]))

    def extent(self):
        """Largest distance between two states of the space."""
        return float(np.linalg.norm(self.bounds[:, 1] - self.bounds[:, 0]))

    def measure(self):
        return float(np.prod(self.bounds[:, 1] - self.bounds[:, 0]))


class SE2Space:
    """
    Planar pose space (x, y, theta).

    The distance is the Euclidean distance of the positions plus
    ``heading_weight`` times the shortest angular difference, so it is a
    metric and the R-tree cannot be used with it.
    """

    is_euclidean = False

    def __init__(self, bounds, heading_weight=1.0):
        self.bounds = np.asarray(bounds, dtype=float)
        if self.bounds.shape != (2, 2):
            raise ValueError("SE2Space expects position bounds of shape (2, 2)")
        self.heading_weight = float(heading_weight)

    @property
    def dimension(self):
        return 3

    def sample_uniform(self, rng):
        pos = sample_uniform(self.bounds, rng)
        theta = rng.uniform(-np.pi, np.pi)
        return np.append(pos, theta)

    def distance(self, a, b):
        a = np.asarray(a, dtype=float)
        b = np.asarray(b, dtype=float)
        heading_diff = abs(wrap_angle(b[2] - a[2]))
        return float(np.linalg.norm(b[:2] - a[:2]) + self.heading_weight * heading_diff)

    def interpolate(self, a, b, t):
        a = np.asarray(a, dtype=float)
        b = np.asarray(b, dtype=float)
        pos = a[:2] + t * (b[:2] - a[:2])
        theta = wrap_angle(a[2] + t * wrap_angle(b[2] - a[2]))
        return np.append(pos, theta)

    def satisfies_bounds(self, x):
        x = np.asarray(x, dtype=float)
        return bool(np.all(x[:2] >= self.bounds[:, 0]) and np.all(x[:2] <= self.bounds[:, 1]))

    def extent(self):
        return float(np.linalg.norm(self.bounds[:, 1] - self.bounds[:, 0]) + self.heading_weight * np.pi)

    def measure(self):
        return float(np.prod(self.bounds[:, 1] - self.bounds[:, 0]) * 2.0 * np.pi)
