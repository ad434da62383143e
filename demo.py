# demo.py

import logging

import numpy as np

import termination
from collision import ObstacleValidityChecker
from config import PlannerConfig, optimal_ball_radius_constant
from goal import GoalState
from opt_rrt import OptRRT
from state_space import RealVectorSpace

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

bounds = np.array([[0, 100],
                   [0, 100]])

x_start = np.array([10, 10])
x_goal = np.array([90, 90])

obstacles = [
    (np.array([50, 50]), 10),
    (np.array([30, 70]), 8)
]

space = RealVectorSpace(bounds)
checker = ObstacleValidityChecker(spheres=obstacles, bounds=bounds)
goal = GoalState(space, x_goal, threshold=1.0)
config = PlannerConfig(
    max_distance=5.0,
    ball_radius_constant=optimal_ball_radius_constant(space.measure(), space.dimension),
    ball_radius_max=20.0,
    seed=0,
)

planner = OptRRT(space, checker, x_start, goal, config)

# Anytime: each call keeps growing the same tree
for step in range(5):
    result = planner.solve(termination.iterations(2000))
    print(f"Step {step}: {result.status.value}, cost={result.cost:.3f}, "
          f"{result.motions} motions, {len(result.path)} waypoints")
