"""Cubic Bezier curve sampling."""

import numpy as np

_BERNSTEIN = np.array([1.0, 3.0, 3.0, 1.0])


def bezier_steps(n=50):
    if n < 2:
        raise ValueError(f"A curve needs at least 2 samples, got {n}")
    return np.linspace(0.0, 1.0, n)


def bezier(t, px, py):
    """
    Points of the cubic Bezier curve with control points (px[i], py[i]).

    Returns an array of shape (len(t), 2) with x in the first column.
    """
    px = np.asarray(px, dtype=float)
    py = np.asarray(py, dtype=float)
    if px.shape != (4,) or py.shape != (4,):
        raise ValueError("A cubic Bezier curve needs exactly 4 control points")
    t = np.atleast_1d(np.asarray(t, dtype=float))[:, None]
    k = np.arange(4)
    basis = _BERNSTEIN * t ** k * (1.0 - t) ** (3 - k)
    return np.column_stack([basis @ px, basis @ py])
