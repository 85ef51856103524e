"""
Оценка габаритов дерева геометрии (AABB) без участия хоста.

Каждый узел превращается в облако точек (N, 2), трансформации применяются
матрицами numpy. Приближения:
  - Circle: вписанный многоугольник с числом вершин, кратным 4
    (экстремумы по осям совпадают с вершинами);
  - Text: прямоугольник len(text) * size × size — та же оценка ширины,
    что и в компоновке надписей;
  - Difference: габарит первого операнда;
  - Offset: габарит потомка, расширенный на delta.
"""

import math
from typing import Tuple

import numpy as np

from scad_dimensions.geometry.tree import (
    Circle,
    Difference,
    LinearExtrude,
    Node,
    Offset,
    Polygon,
    Rotate,
    Scale,
    Square,
    Text,
    Translate,
    Union,
)


BBox = Tuple[float, float, float, float]

_NO_POINTS = np.zeros((0, 2), dtype=np.float64)


def rotation_matrix(angle_deg: float) -> np.ndarray:
    """Матрица поворота 2×2 (против часовой стрелки)."""
    a = math.radians(angle_deg)
    c, s = math.cos(a), math.sin(a)
    return np.array([[c, -s], [s, c]], dtype=np.float64)


def _text_box(node: Text) -> np.ndarray:
    width = len(node.text) * node.size
    if node.halign == 'center':
        x0 = -width / 2.0
    elif node.halign == 'right':
        x0 = -width
    else:
        x0 = 0.0
    y0 = -node.size / 2.0 if node.valign == 'center' else 0.0
    return np.array([
        [x0, y0], [x0 + width, y0],
        [x0 + width, y0 + node.size], [x0, y0 + node.size],
    ], dtype=np.float64)


def _circle_points(node: Circle) -> np.ndarray:
    n = max(4, int(math.ceil(node.segments / 4.0)) * 4)
    t = np.linspace(0.0, 2.0 * math.pi, n, endpoint=False)
    return node.radius * np.column_stack([np.cos(t), np.sin(t)])


def _expand(points: np.ndarray, delta: float) -> np.ndarray:
    if len(points) == 0:
        return points
    lo = points.min(axis=0) - delta
    hi = points.max(axis=0) + delta
    if np.any(hi < lo):
        return _NO_POINTS
    return np.array([[lo[0], lo[1]], [hi[0], lo[1]], [hi[0], hi[1]], [lo[0], hi[1]]])


def node_points(node: Node) -> np.ndarray:
    """Облако точек узла в его системе координат."""
    if isinstance(node, Square):
        w, h = node.width, node.height
        pts = np.array([[0, 0], [w, 0], [w, h], [0, h]], dtype=np.float64)
        if node.center:
            pts -= np.array([w / 2.0, h / 2.0])
        return pts
    if isinstance(node, Circle):
        return _circle_points(node)
    if isinstance(node, Polygon):
        if not node.points:
            return _NO_POINTS
        return np.asarray(node.points, dtype=np.float64)
    if isinstance(node, Text):
        if not node.text:
            return _NO_POINTS
        return _text_box(node)
    if isinstance(node, Translate):
        return node_points(node.child) + np.asarray(node.offset, dtype=np.float64)
    if isinstance(node, Rotate):
        return node_points(node.child) @ rotation_matrix(node.angle).T
    if isinstance(node, Scale):
        return node_points(node.child) * node.factor
    if isinstance(node, Union):
        parts = [node_points(c) for c in node.items]
        parts = [p for p in parts if len(p)]
        return np.vstack(parts) if parts else _NO_POINTS
    if isinstance(node, Difference):
        return node_points(node.items[0]) if node.items else _NO_POINTS
    if isinstance(node, Offset):
        return _expand(node_points(node.child), node.delta)
    if isinstance(node, LinearExtrude):
        return node_points(node.child)
    raise TypeError(f"Unsupported geometry node: {type(node).__name__}")


def bounding_box(node: Node) -> BBox:
    """Вычислить ограничивающий прямоугольник узла.

    Returns:
        (x_min, y_min, x_max, y_max); (0, 0, 0, 0) для пустой геометрии.
    """
    pts = node_points(node)
    if len(pts) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    lo = pts.min(axis=0)
    hi = pts.max(axis=0)
    return (float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))


def extent(node: Node, axis: int = 0) -> float:
    """Размер габарита вдоль оси (0 — x, 1 — y)."""
    box = bounding_box(node)
    return box[axis + 2] - box[axis]
