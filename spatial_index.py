# spatial_index.py

import numpy as np

from rtree_module import RTreeSpatialIndex


class LinearSpatialIndex:
    """
    Brute-force nearest-neighbor index. Works with any metric given as
    ``distance(a, b)``; with no metric the Euclidean distance is evaluated
    on all stored points at once.
    """

    def __init__(self, distance=None):
        self.distance = distance
        self.handles = []
        self.points = []
        self._stacked = None

    def __len__(self):
        return len(self.handles)

    def insert(self, handle, point):
        self.handles.append(handle)
        self.points.append(np.asarray(point, dtype=float))
        self._stacked = None

    def clear(self):
        self.handles = []
        self.points = []
        self._stacked = None

    def _distances(self, point):
        point = np.asarray(point, dtype=float)
        if self.distance is not None:
            return np.array([self.distance(p, point) for p in self.points])
        if self._stacked is None:
            self._stacked = np.vstack(self.points)
        return np.linalg.norm(self._stacked - point, axis=1)

    def nearest(self, point):
        if not self.handles:
            raise LookupError("nearest() on an empty index")
        return self.handles[int(np.argmin(self._distances(point)))]

    def radius_search(self, point, radius):
        if not self.handles:
            return []
        dists = self._distances(point)
        return [self.handles[i] for i in np.flatnonzero(dists <= radius)]


def default_index_factory(space):
    """R-tree for Euclidean spaces, linear scan with the space metric otherwise."""
    if getattr(space, "is_euclidean", False):
        return RTreeSpatialIndex(space.dimension)
    return LinearSpatialIndex(space.distance)
