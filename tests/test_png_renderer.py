"""Tests for the PNG renderer module."""

import os
import tempfile

import pytest
from PIL import Image

from linkroute import get_link
from linkroute.geometry import Point
from linkroute.png_renderer import PNGRenderer, bezier_samples, render_to_png


@pytest.fixture
def output_path():
    with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
        path = f.name
    yield path
    if os.path.exists(path):
        os.unlink(path)


class TestPNGRenderer:
    """Tests for PNGRenderer class."""

    def test_render_manhattan(self, s_terminals, blocked_context, output_path):
        """Render an auto-routed link with its obstacles."""
        link = get_link(
            s_terminals,
            {"type": "manhattan", "autoRoute": True},
            end_marker="arrow",
            context=blocked_context,
        )
        renderer = PNGRenderer()

        result = renderer.render([link], blocked_context.boxes, output_path)
        assert result == output_path
        assert os.path.exists(output_path)
        assert os.path.getsize(output_path) > 0

    def test_image_covers_scene(self, s_terminals, source_box, target_box, output_path):
        """Test the image size follows the scene bounds, margin and scale."""
        link = get_link(s_terminals, {"type": "direct"})
        PNGRenderer(scale=1, margin=10).render([link], [source_box, target_box], output_path)

        with Image.open(output_path) as img:
            # x from -20 to 120, y from -10 to 60
            assert img.size == (161, 91)

    def test_render_with_scale(self, s_terminals, output_path):
        """Render with custom scale factor."""
        link = get_link(s_terminals, {"type": "manhattan"})
        PNGRenderer(scale=3, margin=0).render([link], output_path=output_path)

        with Image.open(output_path) as img:
            assert img.size == (301, 151)

    def test_render_bezier(self, s_terminals, output_path):
        """Render a sampled bezier link with markers at both ends."""
        link = get_link(
            s_terminals, {"type": "bezier"}, start_marker="dot", end_marker="arrow"
        )
        PNGRenderer().render([link], output_path=output_path)
        assert os.path.getsize(output_path) > 0

    def test_render_empty(self, output_path):
        """Test nothing to draw still writes an image."""
        PNGRenderer().render([], output_path=output_path)
        with Image.open(output_path) as img:
            assert img.size == (100, 100)

    def test_render_link_outside_render_raises(self, s_terminals):
        """Test drawing needs an open image."""
        link = get_link(s_terminals, {"type": "direct"})
        with pytest.raises(RuntimeError):
            link.render(PNGRenderer())

    def test_draw_released_after_render(self, s_terminals, output_path):
        """Test the drawing context is dropped once the file is saved."""
        renderer = PNGRenderer()
        renderer.render([get_link(s_terminals)], output_path=output_path)
        assert renderer.draw is None


class TestBezierSamples:
    """Tests for bezier_samples()."""

    def test_endpoints_and_count(self):
        """Test the curve starts and ends on the terminals."""
        samples = bezier_samples(
            Point(0, 0), Point(50, 0), Point(50, 50), Point(100, 50), steps=4
        )
        assert len(samples) == 5
        assert samples[0] == Point(0, 0)
        assert samples[-1] == Point(100, 50)
        assert samples[2] == Point(50, 25)


class TestRenderToPng:
    """Tests for render_to_png convenience function."""

    def test_convenience_function(self, s_terminals, output_path):
        """Test render_to_png passes options to the renderer."""
        link = get_link(s_terminals, {"type": "entityRelations"})
        result = render_to_png([link], output_path=output_path, scale=1)
        assert result == output_path
        assert os.path.exists(output_path)
