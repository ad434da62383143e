# test_spatial_index.py

import numpy as np
import pytest

from rtree_module import RTreeSpatialIndex
from spatial_index import LinearSpatialIndex, default_index_factory
from state_space import RealVectorSpace, SE2Space


def _filled(index, points):
    for i, p in enumerate(points):
        index.insert(i, p)
    return index


@pytest.fixture(params=["rtree", "linear"])
def make_index(request):
    def make(dimension):
        if request.param == "rtree":
            return RTreeSpatialIndex(dimension)
        return LinearSpatialIndex()
    return make


@pytest.mark.parametrize("dimension", [1, 2, 3])
def test_nearest_is_minimum_distance(make_index, rng, dimension):
    points = rng.uniform(-5, 5, size=(200, dimension))
    index = _filled(make_index(dimension), points)

    for _ in range(25):
        q = rng.uniform(-5, 5, size=dimension)
        handle = index.nearest(q)
        dists = np.linalg.norm(points - q, axis=1)
        assert dists[handle] == pytest.approx(dists.min())


@pytest.mark.parametrize("dimension", [1, 2, 3])
def test_radius_search_matches_brute_force(make_index, rng, dimension):
    points = rng.uniform(-5, 5, size=(300, dimension))
    index = _filled(make_index(dimension), points)

    for r in (0.0, 0.3, 1.0, 2.5):
        q = rng.uniform(-5, 5, size=dimension)
        expected = set(np.flatnonzero(np.linalg.norm(points - q, axis=1) <= r))
        assert set(index.radius_search(q, r)) == expected


def test_radius_search_includes_point_on_the_sphere(make_index):
    index = _filled(make_index(2), [[0.0, 0.0], [3.0, 4.0], [3.0, 4.1]])
    assert sorted(index.radius_search([0.0, 0.0], 5.0)) == [0, 1]


def test_empty_index(make_index):
    index = make_index(2)
    assert len(index) == 0
    assert index.radius_search([0.0, 0.0], 10.0) == []
    with pytest.raises(LookupError):
        index.nearest([0.0, 0.0])


def test_clear_empties_index(make_index, rng):
    index = _filled(make_index(2), rng.uniform(size=(20, 2)))
    assert len(index) == 20
    index.clear()
    assert len(index) == 0
    assert index.radius_search([0.5, 0.5], 10.0) == []

    index.insert(7, [0.25, 0.25])
    assert index.nearest([0.0, 0.0]) == 7


def test_insertions_visible_immediately(make_index):
    index = _filled(make_index(2), [[0.0, 0.0]])
    assert index.nearest([5.0, 5.0]) == 0
    index.insert(1, [4.0, 4.0])
    assert index.nearest([5.0, 5.0]) == 1


def test_linear_index_uses_given_metric():
    space = SE2Space([[0, 10], [0, 10]], heading_weight=1.0)
    index = LinearSpatialIndex(space.distance)
    index.insert(0, [1.0, 0.0, 0.0])
    index.insert(1, [0.0, 0.0, 3.0])

    # Heading 3.0 is close to -3.0 through the wrap, position 1.0 is not
    assert index.nearest([0.0, 0.0, -3.0]) == 1
    assert index.radius_search([0.0, 0.0, -3.0], 0.5) == [1]


def test_default_index_factory():
    assert isinstance(default_index_factory(RealVectorSpace([[0, 1], [0, 1]])), RTreeSpatialIndex)
    assert isinstance(default_index_factory(SE2Space([[0, 1], [0, 1]])), LinearSpatialIndex)
