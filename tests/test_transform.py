"""Unit tests for the transform module.

Tests cover:
- Matrix construction from row-major values
- Inversion and singular matrix detection
- Composition and point transformation
- Read-only results
"""

import numpy as np
import pytest


class TestBuildMatrix:
    """Tests for build_matrix."""

    def test_row_major_layout(self, translation_rows):
        """Test that rows are kept row-major (translation in last column)."""
        from src.frustum_viewer.core.transform import build_matrix

        m = build_matrix(translation_rows)

        assert m.shape == (4, 4)
        assert m.dtype == np.float64
        assert m[0, 3] == 2.0
        assert m[1, 3] == 1.0
        assert m[2, 3] == 2.0

    def test_identity_keeps_point(self, identity_rows):
        """Test that the identity maps (0, 0, -1) to itself."""
        from src.frustum_viewer.core.transform import build_matrix, transform_points

        m = build_matrix(identity_rows)
        result = transform_points(m, [(0.0, 0.0, -1.0)])

        assert result.tolist() == [[0.0, 0.0, -1.0]]

    def test_result_is_read_only(self, identity_rows):
        """Test that built matrices cannot be modified in place."""
        from src.frustum_viewer.core.transform import build_matrix

        m = build_matrix(identity_rows)

        with pytest.raises(ValueError):
            m[0, 0] = 5.0

    def test_wrong_shape_raises(self):
        """Test that non-4x4 input raises ValueError."""
        from src.frustum_viewer.core.transform import build_matrix

        with pytest.raises(ValueError):
            build_matrix([[1, 0, 0], [0, 1, 0], [0, 0, 1]])

    def test_any_real_matrix_accepted(self):
        """Test that non-rigid matrices are accepted unchanged."""
        from src.frustum_viewer.core.transform import build_matrix

        rows = [[2, 0.5, 0, 1], [0, 3, 0, 0], [0, 0, -1, 7], [0, 0, 0, 1]]
        m = build_matrix(rows)

        assert np.array_equal(m, np.array(rows, dtype=np.float64))


class TestInvert:
    """Tests for matrix inversion."""

    def test_translation_inverse(self, translation_rows):
        """Test that a translation inverts to the opposite translation."""
        from src.frustum_viewer.core.transform import build_matrix, invert, matrix_origin

        inv = invert(build_matrix(translation_rows))

        assert matrix_origin(inv) == pytest.approx((-2.0, -1.0, -2.0))

    def test_double_inverse_round_trip(self):
        """Test that invert(invert(M)) equals M within 1e-6."""
        from src.frustum_viewer.core.transform import build_matrix, invert, max_abs_difference

        m = build_matrix([[0, -1, 0, 0.5], [1, 0, 0, -3], [0, 0, 1, 2], [0, 0, 0, 1]])

        assert max_abs_difference(invert(invert(m)), m) < 1e-6

    def test_product_with_inverse_is_identity(self):
        """Test that M @ invert(M) is the identity within 1e-6."""
        from src.frustum_viewer.core.transform import (
            IDENTITY,
            build_matrix,
            compose,
            invert,
            max_abs_difference,
        )

        m = build_matrix([[1, 0, 0, 2], [0, 1, 0, 3], [0, 0, 1, 4], [0, 0, 0, 1]])

        assert max_abs_difference(compose(m, invert(m)), IDENTITY) < 1e-6

    def test_non_rigid_round_trip(self):
        """Test round trip for a scaled and sheared matrix."""
        from src.frustum_viewer.core.transform import (
            IDENTITY,
            build_matrix,
            compose,
            invert,
            max_abs_difference,
        )

        m = build_matrix([[2, 0.3, 0, 1], [0, 0.5, 0.1, -2], [0.2, 0, 3, 0.5], [0, 0, 0, 1]])

        assert max_abs_difference(compose(m, invert(m)), IDENTITY) < 1e-6
        assert max_abs_difference(invert(invert(m)), m) < 1e-6

    def test_singular_raises(self, singular_rows):
        """Test that a singular matrix raises SingularMatrixError."""
        from src.frustum_viewer.core.errors import SingularMatrixError
        from src.frustum_viewer.core.transform import build_matrix, invert

        with pytest.raises(SingularMatrixError):
            invert(build_matrix(singular_rows))

    def test_zero_matrix_raises(self):
        """Test that the zero matrix raises SingularMatrixError."""
        from src.frustum_viewer.core.errors import SingularMatrixError
        from src.frustum_viewer.core.transform import build_matrix, invert

        with pytest.raises(SingularMatrixError):
            invert(build_matrix(np.zeros((4, 4))))

    def test_singular_error_is_value_error(self, singular_rows):
        """Test that SingularMatrixError can be caught as ValueError."""
        from src.frustum_viewer.core.transform import build_matrix, invert

        with pytest.raises(ValueError):
            invert(build_matrix(singular_rows))

    def test_input_not_modified(self, translation_rows):
        """Test that inversion leaves its input unchanged."""
        from src.frustum_viewer.core.transform import build_matrix, invert

        m = build_matrix(translation_rows)
        before = m.copy()
        invert(m)

        assert np.array_equal(m, before)


class TestTransformPoints:
    """Tests for point transformation."""

    def test_translation_moves_points(self, translation_rows):
        """Test that a translation offsets every point."""
        from src.frustum_viewer.core.transform import build_matrix, transform_points

        m = build_matrix(translation_rows)
        result = transform_points(m, [(0, 0, 0), (1, 1, 1)])

        assert np.allclose(result, [[2, 1, 2], [3, 2, 3]])

    def test_points_not_modified(self, translation_rows):
        """Test that the input point array is left untouched."""
        from src.frustum_viewer.core.transform import build_matrix, transform_points

        pts = np.array([[1.0, 2.0, 3.0]])
        transform_points(build_matrix(translation_rows), pts)

        assert pts.tolist() == [[1.0, 2.0, 3.0]]

    def test_zero_w_gives_non_finite(self):
        """Test that a projective matrix sending w to 0 yields non-finite points."""
        from src.frustum_viewer.core.transform import build_matrix, transform_points

        m = build_matrix([[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 0]])
        result = transform_points(m, [(1.0, 1.0, 1.0)])

        assert not np.all(np.isfinite(result))

    def test_compose_order(self, translation_rows):
        """Test that compose(A, B) applies B first, then A."""
        from src.frustum_viewer.core.transform import build_matrix, compose, matrix_origin

        translate = build_matrix(translation_rows)
        rotate_z = build_matrix([[0, -1, 0, 0], [1, 0, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]])

        # rotate (2, 1, 2) by 90 degrees about z
        assert matrix_origin(compose(rotate_z, translate)) == pytest.approx((-1.0, 2.0, 2.0))
        assert matrix_origin(compose(translate, rotate_z)) == pytest.approx((2.0, 1.0, 2.0))
