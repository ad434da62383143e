# collision.py

import numpy as np


def line_collision_free(x1, x2, obstacles):
    """
    Return True if the straight segment x1 -> x2 misses every spherical
    obstacle. ``obstacles`` is a list of (center, radius) tuples; touching the
    surface counts as free.
    """
    x1 = np.asarray(x1, dtype=float)
    x2 = np.asarray(x2, dtype=float)
    v = x2 - x1
    vv = np.dot(v, v)
    for center, radius in obstacles:
        # Distance from segment to obstacle center
        w = np.asarray(center, dtype=float) - x1
        t = 0.0 if vv == 0.0 else max(0.0, min(1.0, np.dot(v, w) / vv))
        closest = x1 + t * v
        if np.linalg.norm(closest - center) < radius:
            return False
    return True


def segment_box_collision_free(x1, x2, box_min, box_max):
    """
    Slab test: True if the segment x1 -> x2 does not enter the open box
    (box_min, box_max).
    """
    x1 = np.asarray(x1, dtype=float)
    x2 = np.asarray(x2, dtype=float)
    box_min = np.asarray(box_min, dtype=float)
    box_max = np.asarray(box_max, dtype=float)
    d = x2 - x1

    t_enter, t_exit = 0.0, 1.0
    for i in range(len(x1)):
        if d[i] == 0.0:
            # Parallel to the slab, either always inside or never
            if x1[i] <= box_min[i] or x1[i] >= box_max[i]:
                return True
            continue
        t0 = (box_min[i] - x1[i]) / d[i]
        t1 = (box_max[i] - x1[i]) / d[i]
        if t0 > t1:
            t0, t1 = t1, t0
        t_enter = max(t_enter, t0)
        t_exit = min(t_exit, t1)
        if t_enter >= t_exit:
            return True
    return False


class ObstacleValidityChecker:
    """
    Validity checker for spherical and box obstacles inside world bounds.

    Only the first ``position_dims`` coordinates of a state are checked, so
    the same checker works for poses (x, y, theta) with ``position_dims=2``.

    Parameters
    ----------
    spheres : list of (center, radius)
        Spherical (circular in 2D) obstacles.
    boxes : list of (min_corner, max_corner)
        Axis-aligned box obstacles.
    bounds : array-like, shape (k, 2), optional
        World bounds of the checked coordinates. States outside are invalid.
    position_dims : int, optional
        Number of leading coordinates to check. All of them by default.
    """

    def __init__(self, spheres=(), boxes=(), bounds=None, position_dims=None):
        self.spheres = [(np.asarray(c, dtype=float), float(r)) for c, r in spheres]
        self.boxes = [(np.asarray(lo, dtype=float), np.asarray(hi, dtype=float)) for lo, hi in boxes]
        self.bounds = None if bounds is None else np.atleast_2d(np.asarray(bounds, dtype=float))
        self.position_dims = position_dims

    def _position(self, x):
        x = np.asarray(x, dtype=float)
        return x if self.position_dims is None else x[:self.position_dims]

    def _in_bounds(self, p):
        if self.bounds is None:
            return True
        return bool(np.all(p >= self.bounds[:, 0]) and np.all(p <= self.bounds[:, 1]))

    def is_valid(self, x):
        p = self._position(x)
        return self.is_valid_segment(p, p) if self._in_bounds(p) else False

    def is_valid_segment(self, a, b):
        p1 = self._position(a)
        p2 = self._position(b)
        # Bounds are convex, checking the endpoints is enough
        if not (self._in_bounds(p1) and self._in_bounds(p2)):
            return False
        if not line_collision_free(p1, p2, self.spheres):
            return False
        for box_min, box_max in self.boxes:
            if not segment_box_collision_free(p1, p2, box_min, box_max):
                return False
        return True

