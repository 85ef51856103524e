"""
Unit tests for scad_dimensions.drawing.line module.

Tests:
- Arrow proportions
- Cap geometry per end type
- Bounding length equals nominal length
- Clamping of short lines
"""

import pytest

from scad_dimensions.context import DrawingContext
from scad_dimensions.drawing.line import LineEnd, arrow_size, draw_line, line_shape
from scad_dimensions.geometry.bounds import bounding_box
from scad_dimensions.geometry.tree import (
    Circle,
    LinearExtrude,
    Polygon,
    Square,
    is_empty,
)

from conftest import nodes_of


class TestArrowSize:
    """Tests for arrow_size function."""

    def test_proportions(self):
        """Test points = 4w and length = 2.4w."""
        points, length = arrow_size(0.5)
        assert points == pytest.approx(2.0)
        assert length == pytest.approx(1.2)


class TestCaps:
    """Tests for end cap geometry."""

    def test_flat_is_single_rectangle(self, unit_ctx):
        """Test flat ends produce only the body rectangle."""
        shape = line_shape(10.0, ctx=unit_ctx)
        assert isinstance(shape.child, Square)
        assert shape.child.width == pytest.approx(10.0)
        assert shape.child.height == pytest.approx(0.1)

    def test_arrow_shortens_body(self, unit_ctx):
        """Test arrow end shortens the body by the arrow length."""
        shape = line_shape(10.0, 1.0, LineEnd.ARROW, LineEnd.FLAT, unit_ctx)
        body = nodes_of(shape, Square)[0]
        assert body.width == pytest.approx(10.0 - 0.24)
        assert len(nodes_of(shape, Polygon)) == 1

    def test_arrow_tip_on_endpoint(self, unit_ctx):
        """Test the arrow tip lies on the nominal endpoint."""
        shape = line_shape(10.0, 1.0, LineEnd.FLAT, LineEnd.ARROW, unit_ctx)
        arrow = nodes_of(shape, Polygon)[0]
        assert arrow.points[0] == (10.0, 0.0)

    def test_round_cap(self, unit_ctx):
        """Test round cap is a circle of diameter w."""
        shape = line_shape(10.0, 1.0, LineEnd.ROUND, LineEnd.FLAT, unit_ctx)
        circle = nodes_of(shape, Circle)[0]
        assert circle.radius == pytest.approx(0.05)

    def test_square_cap(self, unit_ctx):
        """Test square cap has side w."""
        shape = line_shape(10.0, 2.0, LineEnd.FLAT, LineEnd.SQUARE, unit_ctx)
        caps = [s for s in nodes_of(shape, Square) if s.center]
        assert len(caps) == 1
        assert caps[0].width == pytest.approx(0.2)

    def test_string_ends(self, unit_ctx):
        """Test that string end names are accepted."""
        shape = line_shape(5.0, 1.0, 'arrow', 'round', unit_ctx)
        assert nodes_of(shape, Polygon) and nodes_of(shape, Circle)

    def test_unknown_end(self, unit_ctx):
        """Test that an unknown end name raises ValueError."""
        with pytest.raises(ValueError):
            line_shape(5.0, 1.0, 'hook', 'flat', unit_ctx)


class TestBoundingLength:
    """Caps never extend beyond the nominal endpoints."""

    @pytest.mark.parametrize('left', list(LineEnd))
    @pytest.mark.parametrize('right', list(LineEnd))
    @pytest.mark.parametrize('length', [0.05, 0.3, 1.0, 25.0])
    def test_extent_equals_length(self, unit_ctx, left, right, length):
        """Test that the x-extent is exactly [0, length]."""
        x0, _, x1, _ = bounding_box(line_shape(length, 1.5, left, right, unit_ctx))
        assert x0 == pytest.approx(0.0, abs=1e-9)
        assert x1 == pytest.approx(length, abs=1e-9)

    def test_width_from_weight(self, unit_ctx):
        """Test the segment width is line_width * weight."""
        _, y0, _, y1 = bounding_box(line_shape(10.0, 3.0, ctx=unit_ctx))
        assert y1 - y0 == pytest.approx(0.3)


class TestClamping:
    """Tests for degenerate lengths."""

    def test_short_double_arrow_has_no_body(self, unit_ctx):
        """Test that a line shorter than two arrows drops its body."""
        shape = line_shape(0.3, 1.0, LineEnd.ARROW, LineEnd.ARROW, unit_ctx)
        assert not nodes_of(shape, Square)
        assert len(nodes_of(shape, Polygon)) == 2

    def test_short_arrows_shrink(self, unit_ctx):
        """Test arrows shrink to half the length each."""
        shape = line_shape(0.2, 1.0, LineEnd.ARROW, LineEnd.ARROW, unit_ctx)
        left, right = nodes_of(shape, Polygon)
        assert left.points[1][0] == pytest.approx(0.1)
        assert right.points[1][0] == pytest.approx(0.1)

    def test_zero_length_is_empty(self, unit_ctx):
        """Test zero length yields empty geometry."""
        assert is_empty(line_shape(0.0, ctx=unit_ctx))

    def test_negative_length_is_empty(self, unit_ctx):
        """Test negative length is clamped to empty geometry."""
        assert is_empty(line_shape(-4.0, 1.0, 'arrow', 'arrow', unit_ctx))


class TestDrawLine:
    """Tests for draw_line public operation."""

    def test_no_extrusion_by_default(self, unit_ctx):
        """Test that 2D output is returned by default."""
        assert not isinstance(draw_line(5.0, ctx=unit_ctx), LinearExtrude)

    def test_extrusion_flag(self):
        """Test extrude flag wraps the result in a thin slab."""
        ctx = DrawingContext(line_width=0.2, extrude=True)
        node = draw_line(5.0, ctx=ctx)
        assert isinstance(node, LinearExtrude)
        assert node.height == pytest.approx(0.2)
