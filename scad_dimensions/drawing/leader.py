"""
Линия-выноска к окружности и маркер центра окружности.

Выноска:
  1. диагональ под углом angle от точки на окружности (radius) наружу,
     стрелка у окружности, скругление на изломе;
  2. горизонтальная полка влево или вправо от излома;
  3. надпись за концом полки (+ кольцо вокруг надписи при circled).

Направление полки: явное direction, иначе влево при 90 < |angle mod 360| <= 270.
Если diagonal_length <= 0, диагонали нет — стрелку несёт полка.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union as TypingUnion

from scad_dimensions.config import (
    CENTER_MARK_GAP_RATIO,
    DEFAULT_LEADER_ANGLE,
    LABEL_SPACING_RATIO,
    LEADER_MIN_DIAGONAL_RATIO,
    LEADER_RING_PAD_RATIO,
)
from scad_dimensions.context import DEFAULT_CONTEXT, DrawingContext
from scad_dimensions.drawing.dimensions import label_width
from scad_dimensions.drawing.line import LineEnd, line_shape
from scad_dimensions.geometry.tree import (
    Circle,
    Node,
    Text,
    finish,
    ring,
    rotate,
    translate,
    union,
)

logger = logging.getLogger(__name__)


class LeaderDirection(Enum):
    """Направление горизонтальной полки выноски."""
    LEFT = "left"
    RIGHT = "right"


DirectionLike = TypingUnion[LeaderDirection, str]


@dataclass(frozen=True)
class LeaderLineSpec:
    """Параметры выноски.

    Attributes:
        radius: радиус окружности, на которую указывает стрелка.
        text: надпись (None → без надписи).
        angle: угол диагонали, градусы от +x против часовой.
        diagonal_length: длина диагонали (<= 0 → без диагонали).
        horizontal_length: длина полки.
        direction: явное направление полки.
        circled: обвести надпись кольцом.
    """
    radius: float
    text: Optional[str] = None
    angle: float = DEFAULT_LEADER_ANGLE
    diagonal_length: float = 10.0
    horizontal_length: float = 5.0
    direction: Optional[DirectionLike] = None
    circled: bool = False


def leader_direction(angle: float, direction: Optional[DirectionLike] = None) -> LeaderDirection:
    """Направление полки.

    Явное direction имеет приоритет. Иначе угол нормализуется как
    |fmod(angle, 360)|; полка идёт влево при 90 < a <= 270.

    Raises:
        ValueError: если direction не 'left'/'right'.
    """
    if direction is not None:
        return direction if isinstance(direction, LeaderDirection) else LeaderDirection(direction)
    a = abs(math.fmod(angle, 360.0))
    if 90.0 < a <= 270.0:
        return LeaderDirection.LEFT
    return LeaderDirection.RIGHT


def _leader_label(text: str, x: float, y: float, circled: bool, ctx: DrawingContext) -> Node:
    size = ctx.text_size
    label = Text(text, size, ctx.font_name, 'center', 'center')
    if circled:
        r = label_width(text, ctx) / 2.0 + LEADER_RING_PAD_RATIO * size
        label = union(label, ring(Circle(r, ctx.segments), ctx.stroke))
    return translate(x, y, label)


def leader_shape(spec: LeaderLineSpec, ctx: DrawingContext = DEFAULT_CONTEXT) -> Node:
    """Плоская геометрия выноски."""
    side = leader_direction(spec.angle, spec.direction)
    sign = -1.0 if side is LeaderDirection.LEFT else 1.0
    a = math.radians(spec.angle)
    has_tail = spec.horizontal_length > 0
    parts = []

    if spec.diagonal_length > 0:
        diagonal = max(spec.diagonal_length, LEADER_MIN_DIAGONAL_RATIO * ctx.stroke)
        outer_end = LineEnd.ROUND if has_tail else LineEnd.FLAT
        parts.append(rotate(spec.angle, translate(
            spec.radius, 0.0, line_shape(diagonal, 1.0, LineEnd.ARROW, outer_end, ctx))))
        reach = spec.radius + diagonal
        tail_start_cap = LineEnd.FLAT
    else:
        logger.debug("Leader without diagonal: tail carries the arrow")
        reach = spec.radius
        tail_start_cap = LineEnd.ARROW

    ex, ey = reach * math.cos(a), reach * math.sin(a)

    tail_end_x = ex
    if has_tail:
        h = spec.horizontal_length
        if side is LeaderDirection.RIGHT:
            tail = translate(ex, ey, line_shape(h, 1.0, tail_start_cap, LineEnd.FLAT, ctx))
        else:
            tail = translate(ex - h, ey, line_shape(h, 1.0, LineEnd.FLAT, tail_start_cap, ctx))
        parts.append(tail)
        tail_end_x = ex + sign * h

    if spec.text:
        shift = label_width(spec.text, ctx) / 2.0 + LABEL_SPACING_RATIO * ctx.text_size
        parts.append(_leader_label(spec.text, tail_end_x + sign * shift, ey, spec.circled, ctx))

    return union(*parts)


def place_leader(spec: LeaderLineSpec, ctx: DrawingContext = DEFAULT_CONTEXT) -> Node:
    """Построить выноску к окружности радиуса spec.radius с центром в (0, 0)."""
    return finish(leader_shape(spec, ctx), ctx)


# ---------------------------------------------------------------------------
# Маркер центра окружности
# ---------------------------------------------------------------------------

def circle_center(
    radius: float,
    size: Optional[float] = None,
    weight: float = 1.0,
    ctx: DrawingContext = DEFAULT_CONTEXT,
) -> Node:
    """Маркер центра: крест ±size и четыре осевых штриха за окружность.

    Штрихи идут от size * 1.5 до radius + size. Если между крестом и штрихом
    не остаётся места, крест просто продлевается до radius + size.
    """
    if size is None:
        size = ctx.text_size
    square = LineEnd.SQUARE
    outer = radius + size
    gap_start = size * (1.0 + CENTER_MARK_GAP_RATIO)

    def axis_pair(half: float) -> Node:
        bar = translate(-half, 0.0, line_shape(2.0 * half, weight, square, square, ctx))
        return union(bar, rotate(90.0, bar))

    if outer <= gap_start:
        return finish(axis_pair(outer), ctx)

    dash = translate(gap_start, 0.0, line_shape(outer - gap_start, weight, square, square, ctx))
    dashes = [rotate(angle, dash) for angle in (0.0, 90.0, 180.0, 270.0)]
    return finish(union(axis_pair(size), *dashes), ctx)
