# steer.py


def steer(space, x_from, x_to, max_distance):
    """
    Simple geometric steering.
    Moves from ``x_from`` toward ``x_to`` by at most ``max_distance``.

    Returns
    -------
    x_new : np.ndarray
        ``x_to`` itself when it is within range, otherwise the state at
        exactly ``max_distance`` along the interpolation toward it.
    distance : float
        Distance from ``x_from`` to ``x_new``.
    """
    distance = space.distance(x_from, x_to)
    if distance <= max_distance:
        return x_to, distance
    x_new = space.interpolate(x_from, x_to, max_distance / distance)
    return x_new, space.distance(x_from, x_new)
