# tree.py

import logging
import math

import numpy as np

from motion import Motion

logger = logging.getLogger(__name__)


class TreeInvariantError(RuntimeError):
    """The tree is corrupted: a cycle, a negative cost or a broken child link."""


class Tree:
    """
    Store of all motions of the exploration tree.

    Motions live in an arena (``self.motions``) and are addressed by their
    position in it, ``motion.id``. The spatial index only holds these handles.

    Parameters
    ----------
    x0 : array-like
        Start configuration, becomes the root.
    space : state space
        Provides ``distance`` and ``dimension``.
    index : spatial index
        Empty nearest-neighbor index with ``insert``/``nearest``/
        ``radius_search``/``clear``.
    """

    def __init__(self, x0, space, index):
        self.space = space
        self.index = index
        self.motions = []
        self.root = None
        self.add_motion(x0, parent=None, cost=0.0)

    def __len__(self):
        return len(self.motions)

    def add_motion(self, x_new, parent, cost):
        if cost < 0.0:
            raise TreeInvariantError(f"negative cost {cost} for new motion")
        n = Motion(x_new, cost=cost)
        n.id = len(self.motions)
        if parent is None:
            if self.root is not None:
                raise TreeInvariantError("tree already has a root")
            self.root = n
        else:
            parent.add_child(n)
        self.motions.append(n)
        self.index.insert(n.id, n.state)
        return n

    def nearest_motion(self, x):
        return self.motions[self.index.nearest(x)]

    def radius_search(self, x, radius):
        return [self.motions[i] for i in self.index.radius_search(x, radius)]

    def neighbor_radius(self, ball_radius_constant, ball_radius_max=0.0):
        """
        Shrinking rewiring radius  r = C * (log(n) / n)^(1/d), capped by
        ``ball_radius_max`` unless it is 0. None when the tree has a single
        motion, meaning only the nearest motion is a neighbor.
        """
        n = len(self.motions)
        if n <= 1:
            return None
        r = ball_radius_constant * (math.log(n) / n) ** (1.0 / self.space.dimension)
        if ball_radius_max > 0.0:
            r = min(r, ball_radius_max)
        return r

    def nearby(self, x, nearest, radius):
        """Motions within ``radius`` of ``x``, always including ``nearest``."""
        if radius is None:
            return [nearest]
        near = self.radius_search(x, radius)
        if not any(m is nearest for m in near):
            near.append(nearest)
        return near

    def reparent(self, motion, new_parent, new_cost):
        """
        Attach ``motion`` to ``new_parent`` with cost ``new_cost`` and update
        the cost of every descendant. Returns the number of descendants
        updated.
        """
        old_parent = motion.parent
        if old_parent is None:
            raise TreeInvariantError("cannot re-parent the root")
        if not old_parent.remove_child(motion):
            raise TreeInvariantError(f"{motion!r} missing from the children of its parent")
        if new_cost < 0.0:
            raise TreeInvariantError(f"negative cost {new_cost} for {motion!r}")

        new_parent.add_child(motion)
        motion.cost = new_cost

        # Iterative so deep trees do not hit the recursion limit
        updated = 0
        stack = list(motion.children)
        while stack:
            child = stack.pop()
            if child is new_parent:
                raise TreeInvariantError(f"cycle through {motion!r} after re-parenting")
            parent = child.parent
            child.cost = parent.cost + self.space.distance(parent.state, child.state)
            updated += 1
            if updated > len(self.motions):
                raise TreeInvariantError("cost propagation visited more motions than the tree holds")
            stack.extend(child.children)
        return updated

    def backtrack(self, motion):
        """Motions from the root to ``motion``."""
        path = []
        current = motion
        while current is not None:
            path.append(current)
            if len(path) > len(self.motions):
                raise TreeInvariantError(f"cycle in the parent chain of {motion!r}")
            current = current.parent
        path.reverse()
        return path

    def reconstruct_path(self, motion):
        """States from the root to ``motion`` as an array of shape (k, d)."""
        return np.array([m.state for m in self.backtrack(motion)])

    def clear(self):
        logger.debug("Clearing tree of %d motions", len(self.motions))
        for m in self.motions:
            m.parent = None
            m.children = []
        self.motions = []
        self.root = None
        self.index.clear()

    def check_invariants(self, tol=1e-9):
        """
        Verify the tree shape, cost consistency and the index size. Raises
        TreeInvariantError on the first violation.
        """
        if len(self.index) != len(self.motions):
            raise TreeInvariantError(
                f"index holds {len(self.index)} motions, the tree {len(self.motions)}")
        for m in self.motions:
            if m.cost < 0.0:
                raise TreeInvariantError(f"negative cost in {m!r}")
            self.backtrack(m)
            for c in m.children:
                if c.parent is not m:
                    raise TreeInvariantError(f"{c!r} listed as child of {m!r} with another parent")
            if m.parent is None:
                if m is not self.root:
                    raise TreeInvariantError(f"{m!r} has no parent but is not the root")
                continue
            if not any(c is m for c in m.parent.children):
                raise TreeInvariantError(f"{m!r} missing from the children of its parent")
            expected = m.parent.cost + self.space.distance(m.parent.state, m.state)
            if abs(m.cost - expected) > tol * max(1.0, expected):
                raise TreeInvariantError(f"{m!r} cost differs from parent cost + edge ({expected})")
