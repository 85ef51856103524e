"""
Дерево геометрии хоста.

Модули:
  - tree:   неизменяемые узлы (примитивы и операции хоста)
  - bounds: габариты дерева без участия хоста (numpy)
  - scad:   сериализация дерева в исходный текст OpenSCAD
"""

from scad_dimensions.geometry.bounds import bounding_box, extent
from scad_dimensions.geometry.scad import to_scad, write_scad
from scad_dimensions.geometry.tree import (
    EMPTY,
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

__all__ = [
    'EMPTY',
    'Node',
    'Square',
    'Circle',
    'Polygon',
    'Text',
    'Translate',
    'Rotate',
    'Scale',
    'Union',
    'Difference',
    'Offset',
    'LinearExtrude',
    'bounding_box',
    'extent',
    'to_scad',
    'write_scad',
]
