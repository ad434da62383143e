# test_config.py

import json
import math

import numpy as np
import pytest

from config import (PlannerConfig, PlannerConfigError, RANGE_EXTENT_FRACTION,
                    optimal_ball_radius_constant, unit_ball_volume)
from state_space import RealVectorSpace


def test_defaults():
    cfg = PlannerConfig()
    assert cfg.goal_bias == 0.05
    assert cfg.max_distance is None
    assert cfg.ball_radius_constant == 1.0
    assert cfg.ball_radius_max == 0.0


def test_validate_keeps_explicit_range(plane_space):
    cfg = PlannerConfig(max_distance=0.5).validate(plane_space)
    assert cfg.max_distance == 0.5


def test_validate_derives_range_from_extent(plane_space):
    cfg = PlannerConfig().validate(plane_space)
    assert cfg.max_distance == pytest.approx(RANGE_EXTENT_FRACTION * math.hypot(10, 10))


def test_validate_does_not_mutate(plane_space):
    cfg = PlannerConfig()
    cfg.validate(plane_space)
    assert cfg.max_distance is None


@pytest.mark.parametrize("changes", [
    {"goal_bias": -0.1},
    {"goal_bias": 1.5},
    {"max_distance": 0.0},
    {"max_distance": -1.0},
    {"max_distance": float("inf")},
    {"ball_radius_constant": 0.0},
    {"ball_radius_max": -1.0},
    {"max_path_length": -2.0},
])
def test_validate_rejects_out_of_range(plane_space, changes):
    with pytest.raises(PlannerConfigError):
        PlannerConfig(**changes).validate(plane_space)


def test_validate_rejects_zero_dimension():
    space = RealVectorSpace(np.zeros((0, 2)))
    with pytest.raises(PlannerConfigError):
        PlannerConfig(max_distance=1.0).validate(space)


def test_validate_rejects_underivable_range():
    space = RealVectorSpace([[0.0, 0.0], [0.0, 0.0]])
    with pytest.raises(PlannerConfigError):
        PlannerConfig().validate(space)


def test_from_dict_and_json(tmp_path):
    data = {"goal_bias": 0.1, "max_distance": 2.0, "ball_radius_max": 3.0, "seed": 7}
    path = tmp_path / "planner.json"
    path.write_text(json.dumps(data))

    cfg = PlannerConfig.from_json(path)
    assert cfg == PlannerConfig.from_dict(data)
    assert cfg.seed == 7
    assert cfg.to_dict()["ball_radius_max"] == 3.0


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(PlannerConfigError):
        PlannerConfig.from_dict({"range": 1.0})


def test_config_is_immutable():
    cfg = PlannerConfig()
    with pytest.raises(AttributeError):
        cfg.goal_bias = 0.5


def test_unit_ball_volume():
    assert unit_ball_volume(1) == pytest.approx(2.0)
    assert unit_ball_volume(2) == pytest.approx(math.pi)
    assert unit_ball_volume(3) == pytest.approx(4.0 / 3.0 * math.pi)


def test_optimal_ball_radius_constant():
    # d = 2: 2 * sqrt(3/2) * sqrt(mu / pi)
    expected = 2.0 * math.sqrt(1.5) * math.sqrt(100.0 / math.pi)
    assert optimal_ball_radius_constant(100.0, 2) == pytest.approx(expected)
    with pytest.raises(PlannerConfigError):
        optimal_ball_radius_constant(1.0, 0)
