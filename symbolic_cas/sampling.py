"""
Point sampling for plotting front ends.

Plotters evaluate an expression once per grid point and draw whatever
survives; a point whose evaluation fails (log of a negative number, division
by zero, ...) or is not finite is simply left out rather than aborting the
plot.
"""

import numpy as np
from typing import Mapping, Optional, Tuple

from .errors import EvaluationError
from .expression_tree.core.node import Node
from .logging_system import log_debug

DEFAULT_SAMPLE_POINTS = 200


def sample_grid(x_min: float, x_max: float, num_points: int = DEFAULT_SAMPLE_POINTS) -> np.ndarray:
    if num_points < 2:
        raise ValueError(f"num_points must be at least 2, got {num_points}")
    if not x_min < x_max:
        raise ValueError(f"Empty sampling range [{x_min}, {x_max}]")
    return np.linspace(x_min, x_max, num_points)


def sample_expression(node: Node, variable: str, x_min: float, x_max: float,
                      num_points: int = DEFAULT_SAMPLE_POINTS,
                      bindings: Optional[Mapping[str, float]] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Evaluate `node` across an evenly spaced grid of `variable` values.

    Args:
        node: Expression to sample
        variable: Name bound to each grid value
        x_min, x_max: Sampling range, inclusive
        num_points: Grid size
        bindings: Values for any other variables in the expression

    Returns:
        (xs, ys) arrays holding only the points that evaluated to a finite value
    """
    grid = sample_grid(x_min, x_max, num_points)
    env = dict(bindings or {})

    xs = []
    ys = []
    skipped = 0
    for x in grid:
        env[variable] = float(x)
        try:
            y = node.evaluate(env)
        except EvaluationError:
            skipped += 1
            continue
        if not np.isfinite(y):
            skipped += 1
            continue
        xs.append(x)
        ys.append(y)

    if skipped:
        log_debug(f"Skipped {skipped}/{len(grid)} sample points of {node.to_string()}")

    return np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64)
