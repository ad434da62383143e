# rewiring.py

import logging

import numpy as np

logger = logging.getLogger(__name__)


def choose_parent(x_new, near, space, checker, validated=None):
    """
    Pick the neighbor giving ``x_new`` the lowest cost-to-come over a
    feasible segment. ``near`` must contain the nearest motion.
    ``validated`` is a neighbor whose segment to ``x_new`` is already known
    to be valid and is not checked again.

    Returns
    -------
    parent : Motion or None
        None if ``x_new`` duplicates a stored state or no neighbor connects
        feasibly.
    cost : float
        Cost of ``x_new`` through ``parent``.
    distances : dict
        Distance from ``x_new`` to each neighbor, keyed by motion id, reused
        when rewiring.
    """
    distances = {n.id: space.distance(n.state, x_new) for n in near}
    if any(d == 0.0 for d in distances.values()):
        logger.debug("New state duplicates an existing motion")
        return None, np.inf, distances

    # Cheapest candidate first, the first feasible one wins
    candidates = sorted(near, key=lambda n: n.cost + distances[n.id])
    for n in candidates:
        if n is validated or checker.is_valid_segment(n.state, x_new):
            return n, n.cost + distances[n.id], distances
    return None, np.inf, distances


def rewire(tree, motion, near, space, checker, distances=None):
    """Attempt to make ``motion`` the parent of each neighbor."""
    rewired = 0
    for n in near:
        if n is motion or n is motion.parent or n is tree.root:
            continue
        d = distances.get(n.id) if distances else None
        if d is None:
            d = space.distance(motion.state, n.state)
        new_cost = motion.cost + d
        if new_cost < n.cost and checker.is_valid_segment(motion.state, n.state):
            old_cost = n.cost
            updated = tree.reparent(n, motion, new_cost)
            rewired += 1
            logger.debug("Rewired motion %d: cost %.6f -> %.6f, %d descendants updated",
                         n.id, old_cost, new_cost, updated)
    return rewired
