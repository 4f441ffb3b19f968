"""Unit tests for the viewer configuration."""

import math

import pytest


class TestViewerConfig:
    """Tests for ViewerConfig defaults and derived values."""

    def test_defaults(self):
        """Test the default display parameters."""
        from src.frustum_viewer.camera.convention import UpAxis
        from src.frustum_viewer.core.config import ViewerConfig

        config = ViewerConfig()

        assert config.aspect == 1.5
        assert config.up_axis is UpAxis.Z
        assert config.invert is False
        assert config.scaled_near == pytest.approx(0.01)
        assert config.scaled_far == pytest.approx(0.2)
        assert config.export_aspect == pytest.approx(4.0 / 3.0)

    def test_scaled_near_floor(self):
        """Test that the scaled near distance never drops below 1e-4."""
        from src.frustum_viewer.core.config import ViewerConfig

        config = ViewerConfig(near=0.001, scale=0.01)

        assert config.scaled_near == 1e-4

    def test_scaled_far_beyond_near(self):
        """Test that scaled far stays beyond scaled near even if far < near."""
        from src.frustum_viewer.core.config import ViewerConfig

        config = ViewerConfig(near=1.0, far=0.5, scale=1.0)

        assert config.scaled_far == pytest.approx(1.0 + 1e-4)
        assert config.frustum_params(0.7).far > config.frustum_params(0.7).near

    def test_frustum_params(self):
        """Test frustum parameters derived for a group FOV."""
        from src.frustum_viewer.core.config import ViewerConfig
        from src.frustum_viewer.geometry.frustum import FrustumParams

        config = ViewerConfig(aspect=2.0, near=0.1, far=2.0, scale=1.0)

        assert config.frustum_params(0.7) == FrustumParams(0.7, 2.0, 0.1, 2.0)

    def test_view_fov_radians(self):
        """Test the viewing FOV conversion."""
        from src.frustum_viewer.core.config import ViewerConfig

        assert ViewerConfig(view_fov_deg=90.0).view_fov == pytest.approx(math.pi / 2)

    def test_dict_round_trip(self):
        """Test to_dict / from_dict, including the up-axis string."""
        from src.frustum_viewer.camera.convention import UpAxis
        from src.frustum_viewer.core.config import ViewerConfig

        config = ViewerConfig(aspect=1.0, invert=True, up_axis=UpAxis.Y)
        data = config.to_dict()

        assert data["up_axis"] == "y"
        assert ViewerConfig.from_dict({**data, "unknown": 1}) == config

    def test_invalid_up_axis(self):
        """Test that an unknown up axis raises ValueError."""
        from src.frustum_viewer.core.config import ViewerConfig

        with pytest.raises(ValueError):
            ViewerConfig(up_axis="w")
