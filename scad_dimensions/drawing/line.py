"""
Отрезок с оконечностями (flat, square, round, arrow).

Отрезок строится вдоль +x от 0 до length, ось — y = 0,
толщина w = line_width * weight.

Стрелка пропорциональна толщине:
    ширина стрелки  points = 4 * w
    длина стрелки   length = 0.6 * points = 2.4 * w

Оконечности не выходят за номинальные концы отрезка: остриё стрелки лежит
на конце, круг и квадрат вписаны внутрь. Центральный прямоугольник укорачивается
на величину оконечности с каждой стороны. Если отрезок короче суммы
оконечностей, каждой стороне достаётся не более length / (число оконечностей),
а прямоугольник вырождается в ноль и не строится.
"""

import logging
from enum import Enum
from typing import Tuple, Union as TypingUnion

from scad_dimensions.config import ARROW_LENGTH_RATIO, ARROW_POINTS_RATIO
from scad_dimensions.context import DEFAULT_CONTEXT, DrawingContext
from scad_dimensions.geometry.tree import (
    EMPTY,
    Circle,
    Node,
    Polygon,
    Square,
    finish,
    translate,
    union,
)

logger = logging.getLogger(__name__)


class LineEnd(Enum):
    """Оконечность отрезка."""
    FLAT = "flat"
    SQUARE = "square"
    ROUND = "round"
    ARROW = "arrow"


EndLike = TypingUnion[LineEnd, str]


def as_line_end(value: EndLike) -> LineEnd:
    """Привести строку или LineEnd к LineEnd.

    Raises:
        ValueError: если значение не распознано.
    """
    if isinstance(value, LineEnd):
        return value
    return LineEnd(value)


def arrow_size(width: float) -> Tuple[float, float]:
    """Размер стрелки для толщины линии.

    Returns:
        (points, length): полная ширина и длина стрелки.
    """
    points = width * ARROW_POINTS_RATIO
    return points, points * ARROW_LENGTH_RATIO


# ---------------------------------------------------------------------------
# Оконечности
# ---------------------------------------------------------------------------

def _cap(end: LineEnd, width: float, budget: float, at: float, sign: int, segments: int):
    """Построить оконечность у точки x=at.

    sign = +1 — оконечность лежит правее at (левый конец отрезка),
    sign = -1 — левее (правый конец).

    Returns:
        (узел или None, отступ прямоугольника от конца).
    """
    if end is LineEnd.FLAT:
        return None, 0.0

    if end is LineEnd.ARROW:
        _, full_length = arrow_size(width)
        length = min(full_length, budget)
        half = length / ARROW_LENGTH_RATIO / 2.0
        base = at + sign * length
        pts = ((at, 0.0), (base, half), (base, -half))
        return Polygon(pts), length

    size = min(width, budget)
    if end is LineEnd.ROUND:
        shape = Circle(size / 2.0, segments)
        return translate(at + sign * size / 2.0, 0.0, shape), size / 2.0

    shape = Square(size, size, center=True)
    return translate(at + sign * size / 2.0, 0.0, shape), size / 2.0


def line_shape(
    length: float,
    weight: float = 1.0,
    left_end: EndLike = LineEnd.FLAT,
    right_end: EndLike = LineEnd.FLAT,
    ctx: DrawingContext = DEFAULT_CONTEXT,
) -> Node:
    """Плоская геометрия отрезка (без экструзии) для композиции."""
    left = as_line_end(left_end)
    right = as_line_end(right_end)
    width = ctx.stroke * weight

    if length <= 0 or width <= 0:
        logger.debug("Degenerate line skipped: length=%.4g width=%.4g", length, width)
        return EMPTY

    n_caps = (left is not LineEnd.FLAT) + (right is not LineEnd.FLAT)
    budget = length / n_caps if n_caps else length

    left_cap, left_inset = _cap(left, width, budget, 0.0, +1, ctx.segments)
    right_cap, right_inset = _cap(right, width, budget, length, -1, ctx.segments)

    body_length = length - left_inset - right_inset
    body = None
    if body_length > 0:
        body = translate(left_inset, -width / 2.0, Square(body_length, width))

    return union(*(part for part in (body, left_cap, right_cap) if part is not None))


def draw_line(
    length: float,
    weight: float = 1.0,
    left_end: EndLike = LineEnd.FLAT,
    right_end: EndLike = LineEnd.FLAT,
    ctx: DrawingContext = DEFAULT_CONTEXT,
) -> Node:
    """Отрезок длины length вдоль +x с заданными оконечностями.

    Args:
        length: длина отрезка.
        weight: множитель толщины ctx.line_width.
        left_end, right_end: оконечности (LineEnd или строка).
        ctx: параметры чертежа.

    Returns:
        Узел геометрии (с экструзией при ctx.extrude).
    """
    return finish(line_shape(length, weight, left_end, right_end, ctx), ctx)
