"""
Tests for Vec3 - unit projection and vector arithmetic.
"""

import math

import pytest

from geco.models.errors import InvalidPosition
from geco.models.vector import Vec3


class TestUnitProjection:
    """Vec3.unit() projects raw input onto the unit sphere."""

    def test_scales_to_unit_length(self):
        v = Vec3.unit(3, 0, 4)

        assert v.x == pytest.approx(0.6)
        assert v.y == 0.0
        assert v.z == pytest.approx(0.8)
        assert v.is_unit()

    def test_already_unit_unchanged(self):
        assert Vec3.unit(0, 1, 0) == Vec3(0.0, 1.0, 0.0)

    def test_zero_vector_rejected(self):
        with pytest.raises(InvalidPosition) as exc_info:
            Vec3.unit(0, 0, 0)

        assert exc_info.value.code == "INVALID_POSITION"
        assert exc_info.value.details["reason"] == "zero-length vector"

    @pytest.mark.parametrize("coords", [
        (math.nan, 0.0, 1.0),
        (math.inf, 0.0, 0.0),
        (0.0, -math.inf, 1.0),
    ])
    def test_non_finite_rejected(self, coords):
        with pytest.raises(InvalidPosition) as exc_info:
            Vec3.unit(*coords)

        assert exc_info.value.details["reason"] == "non-finite coordinate"

    @pytest.mark.parametrize("coords, expected", [
        ((1e-100, 0, 0), Vec3(1.0, 0.0, 0.0)),
        ((1e-200, 0, 0), Vec3(1.0, 0.0, 0.0)),
        ((0, 5e-324, 0), Vec3(0.0, 1.0, 0.0)),
        ((1e200, 0, 0), Vec3(1.0, 0.0, 0.0)),
        ((0, 0, -1e308), Vec3(0.0, 0.0, -1.0)),
    ])
    def test_extreme_magnitudes_normalized(self, coords, expected):
        v = Vec3.unit(*coords)

        assert v == expected
        assert v.is_unit()

    def test_large_mixed_components(self):
        v = Vec3.unit(1e308, -1e308, 1e308)

        assert v.is_unit()
        assert v.x == pytest.approx(1 / math.sqrt(3))
        assert v.y == pytest.approx(-1 / math.sqrt(3))

    def test_length_of_large_vector_is_finite(self):
        assert Vec3(3e200, 0.0, 4e200).length() == pytest.approx(5e200)


class TestVectorMath:
    """Arithmetic used by the interpolator."""

    def test_dot_and_cross(self):
        x, y = Vec3.unit_x(), Vec3.unit_y()

        assert x.dot(y) == 0.0
        assert x.cross(y) == Vec3.unit_z()

    def test_operators(self):
        a = Vec3(1.0, 2.0, 3.0)
        b = Vec3(0.5, 0.5, 0.5)

        assert a + b == Vec3(1.5, 2.5, 3.5)
        assert 2 * b == Vec3(1.0, 1.0, 1.0)
        assert -b == Vec3(-0.5, -0.5, -0.5)

    def test_normalized_leaves_zero_vector(self):
        assert Vec3().normalized() == Vec3()

    def test_angle_to_clamps_rounding(self):
        v = Vec3(1.0, 0.0, 0.0)
        assert v.angle_to(Vec3(1.0000000001, 0.0, 0.0)) == 0.0
        assert Vec3.unit_x().angle_to(-Vec3.unit_x()) == pytest.approx(math.pi)

    def test_frozen(self):
        v = Vec3(1.0, 0.0, 0.0)
        with pytest.raises(AttributeError):
            v.x = 2.0
