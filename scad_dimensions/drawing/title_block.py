"""
Таблицы и основная надпись (штамп).

Таблица задаётся тремя последовательностями ячеек TableCell:
  - lines   — линии сетки (payload — длина, size — множитель толщины)
  - labels  — подписи граф (payload — текст, size — множитель font_size)
  - details — содержимое граф (то же, что labels)

Координаты и длины линий — в единицах толщины линии (ctx.line_width),
поэтому вся таблица масштабируется вместе с толщиной. Вертикальная ячейка
поворачивается на 90° вокруг своей точки привязки.

Готовый штамп title_block() — сетка 600 × 160 единиц:

    y=160 ┌───────────────────────────────────────────────┐
          │ TITLE                                         │
    y=120 ├───────────────────────────────┬───────────────┤
          │ DRAWING NO.                   │ REV           │
    y=80  ├───────────────┬───────────────┼───────────────┤
          │ DRAWN BY      │ DATE          │ MATERIAL      │
    y=40  ├───────────────┼───────────────┼───────────────┤
          │ SCALE         │ SHEET         │ CHECKED BY    │
    y=0   └───────────────┴───────────────┴───────────────┘
          x=0            200             400            600
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Mapping, Optional, Sequence, Tuple, Union as TypingUnion

from scad_dimensions.context import DEFAULT_CONTEXT, DrawingContext
from scad_dimensions.drawing.line import LineEnd, line_shape
from scad_dimensions.geometry.tree import (
    EMPTY,
    Node,
    Text,
    finish,
    rotate,
    translate,
    union,
)

logger = logging.getLogger(__name__)


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class TableCell:
    """Ячейка таблицы.

    Attributes:
        x, y: точка привязки (единицы толщины линии).
        orientation: горизонтальная или вертикальная.
        payload: длина линии (lines) или текст (labels, details).
        size: множитель толщины (lines) или font_size (текст).
    """
    x: float
    y: float
    orientation: TypingUnion[Orientation, str]
    payload: TypingUnion[float, str]
    size: float = 1.0

    @property
    def is_vertical(self) -> bool:
        return Orientation(self.orientation) is Orientation.VERTICAL


def _place(cell: TableCell, shape: Node, unit: float) -> Node:
    if cell.is_vertical:
        shape = rotate(90.0, shape)
    return translate(cell.x * unit, cell.y * unit, shape)


def _line_cell(cell: TableCell, ctx: DrawingContext) -> Node:
    unit = ctx.stroke
    length = float(cell.payload) * unit
    shape = line_shape(length, cell.size, LineEnd.SQUARE, LineEnd.SQUARE, ctx)
    return _place(cell, shape, unit)


def _text_cell(cell: TableCell, ctx: DrawingContext) -> Node:
    text = str(cell.payload)
    if not text:
        return EMPTY
    shape = Text(text, ctx.text_size * cell.size, ctx.font_name, 'left', 'baseline')
    return _place(cell, shape, ctx.stroke)


def table_shape(
    lines: Sequence[TableCell],
    labels: Sequence[TableCell] = (),
    details: Sequence[TableCell] = (),
    ctx: DrawingContext = DEFAULT_CONTEXT,
) -> Node:
    """Плоская геометрия таблицы."""
    parts: List[Node] = [_line_cell(c, ctx) for c in lines]
    parts.extend(_text_cell(c, ctx) for c in labels)
    parts.extend(_text_cell(c, ctx) for c in details)
    return union(*parts)


def draw_table(
    lines: Sequence[TableCell],
    labels: Sequence[TableCell] = (),
    details: Sequence[TableCell] = (),
    ctx: DrawingContext = DEFAULT_CONTEXT,
) -> Node:
    """Построить таблицу из линий сетки, подписей и содержимого граф."""
    logger.debug(
        "Table: %d lines, %d labels, %d details", len(lines), len(labels), len(details),
    )
    return finish(table_shape(lines, labels, details, ctx), ctx)


# ---------------------------------------------------------------------------
# Готовый штамп
# ---------------------------------------------------------------------------

BLOCK_WIDTH = 600.0
ROW_HEIGHT = 40.0
N_ROWS = 4
BORDER_WEIGHT = 2.0

LABEL_SIZE = 0.6
DETAIL_SIZE = 1.0
TITLE_SIZE = 1.5
TEXT_INDENT = 4.0       # отступ текста от левой границы графы
LABEL_DROP = 12.0       # базовая линия подписи ниже верха графы
DETAIL_RISE = 8.0       # базовая линия содержимого выше низа графы

# (ключ, подпись, x, нижний y графы)
TITLE_BLOCK_FIELDS: Tuple[Tuple[str, str, float, float], ...] = (
    ('title',       'TITLE',       0.0,   120.0),
    ('drawing_no',  'DRAWING NO.', 0.0,   80.0),
    ('rev',         'REV',         400.0, 80.0),
    ('drawn_by',    'DRAWN BY',    0.0,   40.0),
    ('date',        'DATE',        200.0, 40.0),
    ('material',    'MATERIAL',    400.0, 40.0),
    ('scale',       'SCALE',       0.0,   0.0),
    ('sheet',       'SHEET',       200.0, 0.0),
    ('checked_by',  'CHECKED BY',  400.0, 0.0),
)


def title_block_lines() -> List[TableCell]:
    """Линии сетки готового штампа."""
    height = ROW_HEIGHT * N_ROWS
    cells = []
    overhang = BORDER_WEIGHT / 2.0
    for row in range(N_ROWS + 1):
        y = row * ROW_HEIGHT
        if row in (0, N_ROWS):
            # внешние строки перекрывают углы рамки
            cells.append(TableCell(
                -overhang, y, Orientation.HORIZONTAL, BLOCK_WIDTH + 2.0 * overhang, BORDER_WEIGHT,
            ))
        else:
            cells.append(TableCell(0.0, y, Orientation.HORIZONTAL, BLOCK_WIDTH))
    cells.append(TableCell(0.0, 0.0, Orientation.VERTICAL, height, BORDER_WEIGHT))
    cells.append(TableCell(BLOCK_WIDTH, 0.0, Orientation.VERTICAL, height, BORDER_WEIGHT))
    cells.append(TableCell(400.0, 0.0, Orientation.VERTICAL, 3 * ROW_HEIGHT))
    cells.append(TableCell(200.0, 0.0, Orientation.VERTICAL, 2 * ROW_HEIGHT))
    return cells


def title_block_cells(
    fields: Optional[Mapping[str, str]] = None,
) -> Tuple[List[TableCell], List[TableCell], List[TableCell]]:
    """Ячейки готового штампа: (lines, labels, details).

    Незаполненные графы остаются пустыми; неизвестные ключи игнорируются
    с предупреждением.
    """
    fields = dict(fields or {})
    known = {key for key, *_ in TITLE_BLOCK_FIELDS}
    for key in sorted(set(fields) - known):
        logger.warning("Unknown title block field ignored: %s", key)

    labels = []
    details = []
    for key, caption, x, y in TITLE_BLOCK_FIELDS:
        labels.append(TableCell(
            x + TEXT_INDENT, y + ROW_HEIGHT - LABEL_DROP, Orientation.HORIZONTAL, caption, LABEL_SIZE,
        ))
        value = (fields.get(key) or '').strip()
        if value:
            size = TITLE_SIZE if key == 'title' else DETAIL_SIZE
            details.append(TableCell(
                x + TEXT_INDENT, y + DETAIL_RISE, Orientation.HORIZONTAL, value, size,
            ))
    return title_block_lines(), labels, details


def title_block(
    fields: Optional[Mapping[str, str]] = None,
    ctx: DrawingContext = DEFAULT_CONTEXT,
) -> Node:
    """Готовый штамп с левым нижним углом в (0, 0)."""
    lines, labels, details = title_block_cells(fields)
    return draw_table(lines, labels, details, ctx)
