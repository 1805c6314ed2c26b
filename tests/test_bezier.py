"""Tests for Bezier sampling."""

import numpy as np
import pytest

from karyoplot.bezier import bezier, bezier_steps


class TestBezier:
    """Cubic curves through four control points."""

    def test_endpoints(self):
        curve = bezier(bezier_steps(50), [0, 0, 1, 1], [0, 2, 2, 0])
        assert curve.shape == (50, 2)
        np.testing.assert_allclose(curve[0], [0, 0])
        np.testing.assert_allclose(curve[-1], [1, 0])

    def test_midpoint(self):
        curve = bezier([0.5], [0, 0, 1, 1], [0, 2, 2, 0])
        np.testing.assert_allclose(curve[0], [0.5, 1.5])

    def test_straight_line(self):
        t = bezier_steps(5)
        curve = bezier(t, [0, 1, 2, 3], [0, 1, 2, 3])
        np.testing.assert_allclose(curve[:, 0], 3 * t)
        np.testing.assert_allclose(curve[:, 0], curve[:, 1])

    def test_steps(self):
        t = bezier_steps()
        assert len(t) == 50
        assert t[0] == 0.0 and t[-1] == 1.0
        with pytest.raises(ValueError):
            bezier_steps(1)

    def test_wrong_number_of_points(self):
        with pytest.raises(ValueError):
            bezier([0.5], [0, 1, 2], [0, 1, 2])
