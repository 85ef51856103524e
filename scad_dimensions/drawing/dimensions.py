"""
Размерная линия с надписью.

Размер строится вдоль +x от 0 до length. Ширина надписи оценивается
как len(label) * font_size (моноширинное приближение, без метрик шрифта).

Выбор расположения надписи (loc не задан):
    CENTER, если label_w + 10 * line_width < length, иначе LEFT.

Расположения:
  - CENTER  — две половины со стрелками наружу, надпись в разрыве
  - LEFT    — сплошная линия со стрелками, надпись слева (выравнивание вправо)
  - RIGHT   — сплошная линия со стрелками, надпись справа
  - OUTSIDE — две половины длины снаружи, стрелки внутрь, надпись по центру

offset переносит размерную линию на y = offset и добавляет выносные линии
от концов измеряемого отрезка.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union as TypingUnion

from scad_dimensions.config import (
    DIM_FIT_LINE_WIDTHS,
    EXTENSION_OVERSHOOT_RATIO,
    LABEL_SPACING_RATIO,
)
from scad_dimensions.context import DEFAULT_CONTEXT, DrawingContext
from scad_dimensions.drawing.line import LineEnd, line_shape
from scad_dimensions.drawing.units import format_length
from scad_dimensions.errors import UnrecognizedLayout
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


class DimensionLocation(Enum):
    """Расположение надписи относительно размерной линии."""
    CENTER = "center"
    LEFT = "left"
    RIGHT = "right"
    OUTSIDE = "outside"


LocationLike = TypingUnion[DimensionLocation, str]


@dataclass(frozen=True)
class DimensionStyle:
    """Параметры одного размера.

    Attributes:
        length: измеряемая длина (единицы модели, >= 0).
        text: надпись вместо вычисленной длины.
        weight: множитель толщины линии.
        loc: расположение надписи (None → автоматический выбор).
        offset: перпендикулярный вынос размерной линии (None → без выносных).
        center: центрировать размер относительно точки привязки.
    """
    length: float
    text: Optional[str] = None
    weight: float = 1.0
    loc: Optional[LocationLike] = None
    offset: Optional[float] = None
    center: bool = False


# ---------------------------------------------------------------------------
# Надпись
# ---------------------------------------------------------------------------

def dimension_label(style: DimensionStyle, ctx: DrawingContext = DEFAULT_CONTEXT) -> str:
    if style.text is not None:
        return style.text
    return format_length(max(style.length, 0.0), ctx)


def label_width(label: str, ctx: DrawingContext = DEFAULT_CONTEXT) -> float:
    """Оценка ширины надписи: число символов * font_size."""
    return len(label) * ctx.text_size


def _label(text: str, x: float, halign: str, ctx: DrawingContext) -> Node:
    return translate(x, 0.0, Text(text, ctx.text_size, ctx.font_name, halign, 'center'))


# ---------------------------------------------------------------------------
# Выбор расположения
# ---------------------------------------------------------------------------

def choose_location(
    label_w: float,
    length: float,
    ctx: DrawingContext = DEFAULT_CONTEXT,
) -> DimensionLocation:
    """CENTER, если надпись с запасом 10 толщин помещается в пролёт; иначе LEFT."""
    if label_w + DIM_FIT_LINE_WIDTHS * ctx.stroke < length:
        return DimensionLocation.CENTER
    return DimensionLocation.LEFT


def resolve_location(
    loc: Optional[LocationLike],
    label_w: float,
    length: float,
    ctx: DrawingContext = DEFAULT_CONTEXT,
) -> DimensionLocation:
    """Явное расположение или автоматический выбор.

    Raises:
        UnrecognizedLayout: если loc не является допустимым расположением.
    """
    if loc is None:
        return choose_location(label_w, length, ctx)
    if isinstance(loc, DimensionLocation):
        return loc
    try:
        return DimensionLocation(loc)
    except ValueError:
        raise UnrecognizedLayout(loc) from None


# ---------------------------------------------------------------------------
# Компоновка
# ---------------------------------------------------------------------------

def _dimension_body(
    length: float,
    label: str,
    loc: DimensionLocation,
    weight: float,
    ctx: DrawingContext,
) -> Node:
    label_w = label_width(label, ctx)
    spacing = ctx.text_size * LABEL_SPACING_RATIO
    arrow, flat = LineEnd.ARROW, LineEnd.FLAT

    if loc is DimensionLocation.CENTER:
        half = max((length - label_w) / 2.0, 0.0)
        return union(
            line_shape(half, weight, arrow, flat, ctx),
            translate(length - half, 0.0, line_shape(half, weight, flat, arrow, ctx)),
            _label(label, length / 2.0, 'center', ctx),
        )

    if loc is DimensionLocation.LEFT:
        return union(
            line_shape(length, weight, arrow, arrow, ctx),
            _label(label, -spacing, 'right', ctx),
        )

    if loc is DimensionLocation.RIGHT:
        return union(
            line_shape(length, weight, arrow, arrow, ctx),
            _label(label, length + spacing, 'left', ctx),
        )

    # OUTSIDE: стрелки снаружи указывают на концы пролёта
    half = length / 2.0
    return union(
        translate(-half, 0.0, line_shape(half, weight, flat, arrow, ctx)),
        translate(length, 0.0, line_shape(half, weight, arrow, flat, ctx)),
        _label(label, length / 2.0, 'center', ctx),
    )


def _extension_lines(length: float, offset: float, weight: float, ctx: DrawingContext) -> Node:
    """Выносные линии от концов пролёта до размерной линии (с перебегом)."""
    reach = abs(offset) + EXTENSION_OVERSHOOT_RATIO * ctx.stroke
    angle = 90.0 if offset > 0 else -90.0
    ext = rotate(angle, line_shape(reach, weight, LineEnd.FLAT, LineEnd.FLAT, ctx))
    return union(ext, translate(length, 0.0, ext))


def layout_dimension(style: DimensionStyle, ctx: DrawingContext = DEFAULT_CONTEXT) -> Node:
    """Плоская геометрия размера.

    Raises:
        UnrecognizedLayout: при недопустимом style.loc.
    """
    length = style.length
    if length < 0:
        logger.warning("Negative dimension length %.4g clamped to 0", length)
        length = 0.0

    label = dimension_label(style, ctx)
    loc = resolve_location(style.loc, label_width(label, ctx), length, ctx)
    logger.debug("Dimension %r: length=%.4g loc=%s", label, length, loc.value)

    body = _dimension_body(length, label, loc, style.weight, ctx)
    if style.offset:
        body = union(
            translate(0.0, style.offset, body),
            _extension_lines(length, style.offset, style.weight, ctx),
        )
    if style.center:
        body = translate(-length / 2.0, 0.0, body)
    return body


def place_dimension(style: DimensionStyle, ctx: DrawingContext = DEFAULT_CONTEXT) -> Node:
    """Построить размер.

    Недопустимое расположение не прерывает чертёж: ошибка уходит в журнал
    (канал диагностики), а геометрия размера опускается.

    Raises:
        UnknownUnit: если ctx.unit отсутствует в таблице (нужна для надписи).
    """
    try:
        body = layout_dimension(style, ctx)
    except UnrecognizedLayout as exc:
        logger.error("Dimension omitted: %s", exc, extra={'loc': str(exc.loc)})
        return EMPTY
    return finish(body, ctx)
