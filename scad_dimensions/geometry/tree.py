"""
Дерево геометрии — операции хоста в виде неизменяемых узлов.

Библиотека не рисует сама: каждая функция построения возвращает узел,
а хост (OpenSCAD-подобный интерпретатор) вычисляет его.

Примитивы:
  - Square    — прямоугольник от (0, 0) или по центру
  - Circle    — окружность с заданным числом сегментов
  - Polygon   — многоугольник по списку точек
  - Text      — надпись (растеризация — на стороне хоста)

Операции:
  - Translate, Rotate, Scale
  - Union, Difference
  - Offset        — эквидистанта (delta > 0 — наружу)
  - LinearExtrude — тонкая пластина для хостов без плоских граней
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

Point = Tuple[float, float]


class Node:
    """Базовый класс узла дерева геометрии."""

    __slots__ = ()

    def children(self) -> Tuple['Node', ...]:
        return ()


# ---------------------------------------------------------------------------
# Примитивы
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Square(Node):
    width: float
    height: float
    center: bool = False


@dataclass(frozen=True)
class Circle(Node):
    radius: float
    segments: int = 36


@dataclass(frozen=True)
class Polygon(Node):
    points: Tuple[Point, ...]


@dataclass(frozen=True)
class Text(Node):
    """Надпись.

    halign: 'left' | 'center' | 'right'
    valign: 'baseline' | 'center'
    """
    text: str
    size: float
    font: str = ''
    halign: str = 'left'
    valign: str = 'baseline'


# ---------------------------------------------------------------------------
# Операции
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Translate(Node):
    offset: Point
    child: Node

    def children(self) -> Tuple[Node, ...]:
        return (self.child,)


@dataclass(frozen=True)
class Rotate(Node):
    angle: float
    child: Node

    def children(self) -> Tuple[Node, ...]:
        return (self.child,)


@dataclass(frozen=True)
class Scale(Node):
    factor: float
    child: Node

    def children(self) -> Tuple[Node, ...]:
        return (self.child,)


@dataclass(frozen=True)
class Union(Node):
    items: Tuple[Node, ...] = ()

    def children(self) -> Tuple[Node, ...]:
        return self.items


@dataclass(frozen=True)
class Difference(Node):
    """Первый узел минус все остальные."""
    items: Tuple[Node, ...] = ()

    def children(self) -> Tuple[Node, ...]:
        return self.items


@dataclass(frozen=True)
class Offset(Node):
    delta: float
    child: Node

    def children(self) -> Tuple[Node, ...]:
        return (self.child,)


@dataclass(frozen=True)
class LinearExtrude(Node):
    height: float
    child: Node

    def children(self) -> Tuple[Node, ...]:
        return (self.child,)


EMPTY = Union(())


# ---------------------------------------------------------------------------
# Конструкторы
# ---------------------------------------------------------------------------

def translate(x: float, y: float, child: Node) -> Node:
    if x == 0 and y == 0:
        return child
    return Translate((float(x), float(y)), child)


def rotate(angle: float, child: Node) -> Node:
    if angle == 0:
        return child
    return Rotate(float(angle), child)


def union(*items: Node) -> Node:
    """Объединить узлы, отбрасывая пустые и раскрывая вложенные Union."""
    flat = []
    for item in items:
        if isinstance(item, Union):
            flat.extend(item.items)
        elif item is not None:
            flat.append(item)
    if len(flat) == 1:
        return flat[0]
    return Union(tuple(flat))


def ring(shape: Node, thickness: float) -> Node:
    """Контур фигуры заданной толщины через эквидистанты хоста."""
    half = thickness / 2.0
    return Difference((Offset(half, shape), Offset(-half, shape)))


def finish(node: Node, ctx) -> Node:
    """Результат публичной операции: экструзия при ctx.extrude."""
    if ctx.extrude and not is_empty(node):
        return LinearExtrude(ctx.slab_height, node)
    return node


def is_empty(node: Node) -> bool:
    return isinstance(node, Union) and all(is_empty(c) for c in node.items)


def walk(node: Node) -> Iterable[Node]:
    """Обход в глубину (узел, затем потомки)."""
    yield node
    for child in node.children():
        yield from walk(child)
