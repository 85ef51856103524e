"""
Рамка листа и сетка зон.

Лист в координатах хоста: (0, 0) — левый нижний угол, y вверх.

  - внешний контур по полю margin (тонкая линия);
  - внутренний контур по margin + band (основная линия), band = 2 * font_size;
  - в полосе между контурами — обозначения зон;
  - от внутреннего контура внутрь — риски зон с шагом 50 мм от середины стороны.

Число рисок на половину стороны (от середины к краю):
    n = round((размер / 2 - margin) / 50)
Риски стоят на расстояниях k * 50 от середины, k = 0 … n-1; k = 0 — центровая
риска. Горизонтальные стороны (верх, низ) нумеруются слева направо 1, 2, …;
вертикальные (лево, право) — буквами сверху вниз по алфавиту без I и O.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union as TypingUnion

from scad_dimensions.config import GRID_BAND_RATIO, GRID_SPACING, REFERENCE_ALPHABET
from scad_dimensions.context import DEFAULT_CONTEXT, DrawingContext
from scad_dimensions.drawing.line import LineEnd, line_shape
from scad_dimensions.drawing.units import PageSpec, resolve_page
from scad_dimensions.geometry.tree import Node, Text, finish, rotate, translate, union
from scad_dimensions.logging_config import timed

logger = logging.getLogger(__name__)

HORIZONTAL_EDGES = ('top', 'bottom')
VERTICAL_EDGES = ('left', 'right')

FRAME_WEIGHT = 2.0
CENTER_TICK_WEIGHT = 2.0


@dataclass(frozen=True)
class GridTick:
    """Риска сетки зон.

    Attributes:
        edge: 'top' | 'bottom' | 'left' | 'right'.
        position: x (верх/низ) или y (лево/право) на листе.
        label: номер или буква зоны.
        is_center: центровая риска.
    """
    edge: str
    position: float
    label: str
    is_center: bool = False


@dataclass(frozen=True)
class BorderLayout:
    """Рассчитанная компоновка рамки (без геометрии)."""
    page: PageSpec
    margin: float
    band: float
    ticks_per_side_h: int
    ticks_per_side_v: int
    ticks: Tuple[GridTick, ...]

    @property
    def inner_margin(self) -> float:
        return self.margin + self.band

    def ticks_on(self, edge: str) -> List[GridTick]:
        return [t for t in self.ticks if t.edge == edge]


def round_half_up(value: float) -> int:
    """Округление половин от нуля (как round в OpenSCAD)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def ticks_per_side(dimension: float, margin: float) -> int:
    """Число рисок на половине стороны длиной dimension."""
    return round_half_up((dimension / 2.0 - margin) / GRID_SPACING)


def reference_letter(index: int) -> str:
    """Буква зоны; после 24-й буквы — удвоение (AA, BB, …)."""
    n = len(REFERENCE_ALPHABET)
    return REFERENCE_ALPHABET[index % n] * (index // n + 1)


def _edge_positions(dimension: float, count: int) -> List[Tuple[float, bool]]:
    mid = dimension / 2.0
    positions = [(mid, True)]
    for k in range(1, count):
        positions.append((mid - k * GRID_SPACING, False))
        positions.append((mid + k * GRID_SPACING, False))
    return sorted(positions)


def border_layout(
    page: TypingUnion[PageSpec, str],
    margin: Optional[float] = None,
    ctx: DrawingContext = DEFAULT_CONTEXT,
) -> BorderLayout:
    """Рассчитать риски и обозначения зон.

    Raises:
        UnknownPage: если имя формата отсутствует в таблице.
    """
    if isinstance(page, str):
        page = resolve_page(page)
    if margin is None:
        margin = ctx.margin

    n_h = ticks_per_side(page.width, margin)
    n_v = ticks_per_side(page.height, margin)
    if n_h < 1 or n_v < 1:
        logger.warning(
            "Margin %.4g leaves no room for grid ticks on %s; only center ticks drawn",
            margin, page.name,
        )

    ticks: List[GridTick] = []
    for i, (x, center) in enumerate(_edge_positions(page.width, n_h)):
        for edge in HORIZONTAL_EDGES:
            ticks.append(GridTick(edge, x, str(i + 1), center))

    # буквы сверху вниз: y по убыванию
    for i, (y, center) in enumerate(reversed(_edge_positions(page.height, n_v))):
        for edge in VERTICAL_EDGES:
            ticks.append(GridTick(edge, y, reference_letter(i), center))

    return BorderLayout(
        page=page,
        margin=margin,
        band=GRID_BAND_RATIO * ctx.text_size,
        ticks_per_side_h=n_h,
        ticks_per_side_v=n_v,
        ticks=tuple(ticks),
    )


# ---------------------------------------------------------------------------
# Геометрия
# ---------------------------------------------------------------------------

def _frame(x0: float, y0: float, x1: float, y1: float, weight: float, ctx: DrawingContext) -> Node:
    """Прямоугольный контур из четырёх линий с квадратными оконечностями.

    Горизонтальные стороны продлены на половину толщины за углы, чтобы
    закрыть углы, не покрытые вертикальными сторонами.
    """
    sq = LineEnd.SQUARE
    half = ctx.stroke * weight / 2.0
    w, h = x1 - x0, y1 - y0
    horizontal = line_shape(w + 2.0 * half, weight, sq, sq, ctx)
    vertical = rotate(90.0, line_shape(h, weight, sq, sq, ctx))
    return union(
        translate(x0 - half, y0, horizontal),
        translate(x0 - half, y1, horizontal),
        translate(x0, y0, vertical),
        translate(x1, y0, vertical),
    )


def _tick(layout: BorderLayout, tick: GridTick, ctx: DrawingContext) -> Node:
    page = layout.page
    inner = layout.inner_margin
    band = layout.band
    weight = CENTER_TICK_WEIGHT if tick.is_center else 1.0
    mark = line_shape(band, weight, LineEnd.FLAT, LineEnd.FLAT, ctx)
    label = Text(tick.label, ctx.text_size, ctx.font_name, 'center', 'center')
    label_offset = layout.margin + band / 2.0

    if tick.edge == 'bottom':
        return union(
            translate(tick.position, inner, rotate(90.0, mark)),
            translate(tick.position, label_offset, label),
        )
    if tick.edge == 'top':
        return union(
            translate(tick.position, page.height - inner, rotate(-90.0, mark)),
            translate(tick.position, page.height - label_offset, label),
        )
    if tick.edge == 'left':
        return union(
            translate(inner, tick.position, mark),
            translate(label_offset, tick.position, label),
        )
    return union(
        translate(page.width - inner, tick.position, rotate(180.0, mark)),
        translate(page.width - label_offset, tick.position, label),
    )


def border_shape(layout: BorderLayout, ctx: DrawingContext = DEFAULT_CONTEXT) -> Node:
    """Плоская геометрия рамки по готовой компоновке."""
    page = layout.page
    m, inner = layout.margin, layout.inner_margin
    parts = [
        _frame(m, m, page.width - m, page.height - m, 1.0, ctx),
        _frame(inner, inner, page.width - inner, page.height - inner, FRAME_WEIGHT, ctx),
    ]
    parts.extend(_tick(layout, t, ctx) for t in layout.ticks)
    return union(*parts)


@timed(operation="draw_page_border")
def draw_page_border(
    page: TypingUnion[PageSpec, str, None] = None,
    margin: Optional[float] = None,
    ctx: DrawingContext = DEFAULT_CONTEXT,
) -> Node:
    """Построить рамку листа с сеткой зон.

    Args:
        page: формат (PageSpec или имя; None → ctx.page_name).
        margin: поле листа (None → ctx.page_margin, по умолчанию 10 + font_size).
        ctx: параметры чертежа.
    """
    layout = border_layout(page if page is not None else ctx.page_name, margin, ctx)
    logger.info(
        "Page border %s %.1fx%.1f: %d/%d ticks per side",
        layout.page.name, layout.page.width, layout.page.height,
        layout.ticks_per_side_h, layout.ticks_per_side_v,
    )
    return finish(border_shape(layout, ctx), ctx)
