"""Tests for the Matplotlib preview.

Tests cover:
- Axis mapping from the Y-up world to Matplotlib's Z-up axes
- View angles along the fit diagonal
- Wireframe collections (one color per segment)
- Off-screen rendering size

Note: Tests use the Agg backend (set in conftest) and never open windows.
"""

import math

import numpy as np
import pytest


class TestAxes:
    """Tests for coordinate mapping and view angles."""

    def test_to_display_axes(self):
        """Test (x, y, z) -> (x, -z, y)."""
        from src.frustum_viewer.preview.display import to_display_axes

        result = to_display_axes([(1.0, 2.0, 3.0)])

        assert result.tolist() == [[1.0, -3.0, 2.0]]

    def test_view_angles_along_diagonal(self):
        """Test elevation and azimuth for the (1, 1, 1) fit direction."""
        from src.frustum_viewer.preview.display import view_angles
        from src.frustum_viewer.scene.bounds import BoundingBox, compute_fit_pose

        box = BoundingBox(min=(-1.0, -1.0, -1.0), max=(1.0, 1.0, 1.0))
        elev, azim = view_angles(compute_fit_pose(box, math.radians(50)))

        assert elev == pytest.approx(math.degrees(math.asin(1 / math.sqrt(3))))
        assert azim == pytest.approx(-45.0)


class TestPlotFrustums:
    """Tests for plot_frustums and draw_scene."""

    def test_segments_and_colors(self, default_params):
        """Test that each camera contributes 12 segments in its color."""
        import matplotlib.pyplot as plt

        from src.frustum_viewer.geometry.frustum import frustum_template
        from src.frustum_viewer.preview.display import plot_frustums

        fig = plt.figure()
        ax = fig.add_subplot(projection="3d")
        template = frustum_template(default_params)
        collection = plot_frustums(
            ax, [template, template + 1.0], [(1.0, 0.0, 0.0), (0.0, 0.0, 1.0)]
        )
        # 2D segments are only projected on draw
        fig.canvas.draw()

        assert len(collection.get_segments()) == 24
        colors = collection.get_colors()
        assert np.allclose(colors[0][:3], (1.0, 0.0, 0.0))
        assert np.allclose(colors[-1][:3], (0.0, 0.0, 1.0))
        plt.close(fig)

    def test_mismatched_colors_raise(self, default_params):
        """Test that geometries and colors must match in length."""
        import matplotlib.pyplot as plt

        from src.frustum_viewer.geometry.frustum import frustum_template
        from src.frustum_viewer.preview.display import plot_frustums

        fig = plt.figure()
        ax = fig.add_subplot(projection="3d")
        with pytest.raises(ValueError):
            plot_frustums(ax, [frustum_template(default_params)], [])
        plt.close(fig)

    def test_labels(self, fresh_scene, y_up_config):
        """Test that labels are drawn at camera origins."""
        import matplotlib.pyplot as plt

        from src.frustum_viewer.preview.display import draw_scene

        fresh_scene.load_samples()
        fig = plt.figure()
        ax = fig.add_subplot(projection="3d")
        draw_scene(ax, fresh_scene, y_up_config, show_labels=True)

        texts = [t.get_text() for t in ax.texts]
        assert "train/train_0" in texts
        assert len(texts) == 9
        plt.close(fig)


class TestRenderToArray:
    """Tests for off-screen rendering."""

    def test_shape_and_dtype(self, fresh_scene, y_up_config):
        """Test that the rendered image has the requested size."""
        from src.frustum_viewer.preview.display import render_to_array

        fresh_scene.load_samples()
        image = render_to_array(fresh_scene, y_up_config, width=320, height=240)

        assert image.shape == (240, 320, 3)
        assert image.dtype == np.uint8
        # Frustums are drawn in color on black
        assert image.max() > 0
