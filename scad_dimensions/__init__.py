"""
scad_dimensions — параметрические 2D-аннотации для OpenSCAD-подобного хоста.

Размерные линии, выноски, маркеры центра, штампы и рамки листов строятся
как дерево геометрии; хост вычисляет его (см. geometry.scad.to_scad).
"""

from scad_dimensions.context import DEFAULT_CONTEXT, DrawingContext
from scad_dimensions.drawing import (
    PAGES,
    UNITS,
    DimensionLocation,
    DimensionStyle,
    LeaderDirection,
    LeaderLineSpec,
    LineEnd,
    Orientation,
    PageSpec,
    TableCell,
    UnitSpec,
    border_layout,
    circle_center,
    draw_line,
    draw_page_border,
    draw_table,
    format_length,
    place_dimension,
    place_leader,
    resolve_page,
    resolve_unit,
    title_block,
    unit_scale,
)
from scad_dimensions.errors import (
    AnnotationError,
    UnknownPage,
    UnknownUnit,
    UnrecognizedLayout,
)
from scad_dimensions.geometry import bounding_box, to_scad, write_scad
from scad_dimensions.logging_config import (
    collect_diagnostics,
    setup_logging,
    timed,
)

__all__ = [
    'DrawingContext',
    'DEFAULT_CONTEXT',
    'UNITS',
    'PAGES',
    'UnitSpec',
    'PageSpec',
    'resolve_unit',
    'resolve_page',
    'unit_scale',
    'format_length',
    'LineEnd',
    'draw_line',
    'DimensionLocation',
    'DimensionStyle',
    'place_dimension',
    'LeaderDirection',
    'LeaderLineSpec',
    'place_leader',
    'circle_center',
    'Orientation',
    'TableCell',
    'draw_table',
    'title_block',
    'border_layout',
    'draw_page_border',
    'AnnotationError',
    'UnknownUnit',
    'UnknownPage',
    'UnrecognizedLayout',
    'bounding_box',
    'to_scad',
    'write_scad',
    'setup_logging',
    'timed',
    'collect_diagnostics',
]
