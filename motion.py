# motion.py

import numpy as np


class Motion:
    def __init__(self, state, parent=None, cost=0.0):
        """
        Node of the exploration tree.

        Parameters
        ----------
        state : array-like
            Configuration reached by this motion. Copied, the motion owns it.
        parent : Motion, optional
            Motion this one was reached from, None for the root.
        cost : float
            Cost-to-come from the root.
        """
        self.state = np.array(state, dtype=float)
        self.parent = parent
        self.children = []
        self.cost = float(cost)
        self.id = None   # handle into the tree store, set on insertion

    @property
    def is_root(self):
        return self.parent is None

    def add_child(self, child):
        self.children.append(child)
        child.parent = self

    def remove_child(self, child):
        for i, c in enumerate(self.children):
            if c is child:
                del self.children[i]
                return True
        return False

    def __repr__(self):
        return f"Motion(id={self.id}, state={self.state}, cost={self.cost:.4f})"
