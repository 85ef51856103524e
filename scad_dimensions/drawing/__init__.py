"""
Построение аннотаций чертежа.

Модули:
  - units:       единицы измерения и форматы листов
  - line:        отрезок с оконечностями
  - dimensions:  размерная линия с надписью
  - leader:      линия-выноска и маркер центра окружности
  - title_block: таблицы и основная надпись
  - sheet:       рамка листа и сетка зон
"""

from scad_dimensions.drawing.dimensions import (
    DimensionLocation,
    DimensionStyle,
    place_dimension,
)
from scad_dimensions.drawing.leader import (
    LeaderDirection,
    LeaderLineSpec,
    circle_center,
    place_leader,
)
from scad_dimensions.drawing.line import LineEnd, draw_line
from scad_dimensions.drawing.sheet import border_layout, draw_page_border
from scad_dimensions.drawing.title_block import (
    Orientation,
    TableCell,
    draw_table,
    title_block,
)
from scad_dimensions.drawing.units import (
    PAGES,
    UNITS,
    PageSpec,
    UnitSpec,
    format_length,
    resolve_page,
    resolve_unit,
    unit_scale,
)

__all__ = [
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
]
