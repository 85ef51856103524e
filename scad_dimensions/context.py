"""
Ambient options of one drawing call tree (DrawingContext).

Every option is an optional override; the resolved value falls back to a
default derived from the font size. The context is frozen: nested calls
derive a new context with ``override()`` or ``scoped()`` and the caller's
context stays untouched, so an override lasts exactly as long as the
sub-tree that received it.

Usage:
    ctx = DrawingContext(unit='inch', font_size=2.5)
    with ctx.scoped(line_width=0.1) as thin:
        place_dimension(DimensionStyle(length=20), thin)
"""

from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Iterator, Optional

from scad_dimensions.config import (
    DEFAULT_DECIMALS,
    DEFAULT_FONT,
    DEFAULT_FONT_SIZE,
    DEFAULT_PAGE,
    DEFAULT_SEGMENTS,
    DEFAULT_UNIT,
    LINE_WIDTH_RATIO,
    PAGE_MARGIN_BASE,
)


@dataclass(frozen=True)
class DrawingContext:
    """Ambient drawing options with computed defaults.

    Attributes:
        font_size: text height (None → DEFAULT_FONT_SIZE * model_scale).
        line_width: base line thickness (None → font_size * 0.1).
        font: host font name (None → host default).
        extrude: wrap public results into a thin linear extrusion.
        extrude_height: slab thickness (None → line_width).
        unit: display unit name for dimension labels.
        mm_scale: millimetres represented by one model unit.
        model_scale: annotation enlargement when the model is shrunk to fit a page.
        page_name: sheet format name.
        page_margin: sheet margin (None → 10 + font_size).
        decimals: decimals in generated labels.
        segments: circle resolution passed to the host.
    """
    font_size: Optional[float] = None
    line_width: Optional[float] = None
    font: Optional[str] = None
    extrude: bool = False
    extrude_height: Optional[float] = None
    unit: str = DEFAULT_UNIT
    mm_scale: float = 1.0
    model_scale: float = 1.0
    page_name: str = DEFAULT_PAGE
    page_margin: Optional[float] = None
    decimals: int = DEFAULT_DECIMALS
    segments: int = DEFAULT_SEGMENTS

    # ------------------------------------------------------------------
    # Resolved values
    # ------------------------------------------------------------------

    @property
    def text_size(self) -> float:
        if self.font_size is not None:
            return float(self.font_size)
        return DEFAULT_FONT_SIZE * self.model_scale

    @property
    def stroke(self) -> float:
        if self.line_width is not None:
            return float(self.line_width)
        return self.text_size * LINE_WIDTH_RATIO

    @property
    def font_name(self) -> str:
        return self.font if self.font is not None else DEFAULT_FONT

    @property
    def slab_height(self) -> float:
        if self.extrude_height is not None:
            return float(self.extrude_height)
        return self.stroke

    @property
    def margin(self) -> float:
        if self.page_margin is not None:
            return float(self.page_margin)
        return PAGE_MARGIN_BASE + self.text_size

    # ------------------------------------------------------------------
    # Overrides
    # ------------------------------------------------------------------

    def override(self, **overrides: Any) -> 'DrawingContext':
        """Return a copy with the given options replaced.

        Raises:
            TypeError: if an option name is unknown.
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown drawing option(s): {', '.join(sorted(unknown))}")
        return replace(self, **overrides)

    @contextmanager
    def scoped(self, **overrides: Any) -> Iterator['DrawingContext']:
        """Yield a derived context for the duration of a sub-tree."""
        yield self.override(**overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Resolved options, for logging and config round-trips."""
        return {
            'font_size': self.text_size,
            'line_width': self.stroke,
            'font': self.font_name,
            'extrude': self.extrude,
            'extrude_height': self.slab_height,
            'unit': self.unit,
            'mm_scale': self.mm_scale,
            'model_scale': self.model_scale,
            'page_name': self.page_name,
            'page_margin': self.margin,
            'decimals': self.decimals,
            'segments': self.segments,
        }


DEFAULT_CONTEXT = DrawingContext()
