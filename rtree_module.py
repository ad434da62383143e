import rtree.index as index
import numpy as np


class RTreeSpatialIndex:
    """
    Nearest-neighbor index over point states stored in an R-tree.

    Only integer handles are kept in the tree; the caller maps them back to
    its own objects. Distances are Euclidean, radius candidates come from a
    bounding-box query and are filtered with the exact distance.
    """

    def __init__(self, dimension):
        self.dimension = int(dimension)
        # libspatialindex needs at least two dimensions, pad with zeros
        self._dims = max(2, self.dimension)
        self._points = {}
        self.idx = self._new_index()

    def _new_index(self):
        p = index.Property()
        p.dimension = self._dims
        return index.Index(properties=p)

    def _coords(self, point):
        point = np.asarray(point, dtype=float).ravel()
        coords = np.zeros(self._dims)
        coords[:len(point)] = point
        return coords

    def _bbox(self, coords, radius=0.0):
        # Rtree requires bounding boxes (min coords, max coords)
        return tuple(coords - radius) + tuple(coords + radius)

    def __len__(self):
        return len(self._points)

    def insert(self, handle, point):
        coords = self._coords(point)
        self.idx.insert(handle, self._bbox(coords))
        self._points[handle] = coords

    def clear(self):
        self.idx.close()
        self.idx = self._new_index()
        self._points = {}

    def nearest(self, point):
        """Return the handle of the stored point closest to ``point``."""
        if not self._points:
            raise LookupError("nearest() on an empty index")
        coords = self._coords(point)
        # Ties may yield more than one handle, any of them is a nearest
        return next(self.idx.nearest(self._bbox(coords), 1))

    def radius_search(self, point, radius):
        """Return the handles of all stored points within ``radius``."""
        coords = self._coords(point)
        # Slightly enlarged box so rounding never drops a point on the sphere
        slack = radius * 1e-9 + 1e-12
        candidates = self.idx.intersection(self._bbox(coords, radius + slack))

        out = []
        for handle in candidates:
            if np.linalg.norm(self._points[handle] - coords) <= radius:
                out.append(handle)
        return out
