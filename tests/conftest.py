"""
Pytest configuration and fixtures for scad_dimensions.

Provides:
- Drawing context fixtures (default, round-number)
- Geometry inspection helpers
- Temporary output paths
"""

import math
from pathlib import Path
from typing import List, Type

import pytest

from scad_dimensions.context import DrawingContext
from scad_dimensions.geometry.tree import (
    LinearExtrude,
    Node,
    Rotate,
    Square,
    Text,
    Translate,
    Union,
    walk,
)


# ============================================================================
# Context Fixtures
# ============================================================================

@pytest.fixture
def ctx() -> DrawingContext:
    """Default drawing context (font 3.0, line width 0.3)."""
    return DrawingContext()


@pytest.fixture
def unit_ctx() -> DrawingContext:
    """Round-number context: font_size=1, line_width=0.1."""
    return DrawingContext(font_size=1.0, line_width=0.1)


# ============================================================================
# Temporary File Fixtures
# ============================================================================

@pytest.fixture
def tmp_scad_path(tmp_path: Path) -> Path:
    """Temporary path for OpenSCAD output."""
    return tmp_path / "output.scad"


# ============================================================================
# Helpers
# ============================================================================

def nodes_of(node: Node, kind: Type[Node]) -> List[Node]:
    """All nodes of the given type in a geometry tree."""
    return [n for n in walk(node) if isinstance(n, kind)]


def texts_of(node: Node) -> List[str]:
    """Text strings of all Text nodes in a geometry tree."""
    return [n.text for n in nodes_of(node, Text)]


def covers(node: Node, x: float, y: float, eps: float = 1e-9) -> bool:
    """Whether the point lies inside a Square of the tree.

    Only squares, translations, rotations, unions and extrusions are
    followed; other shapes never count as covering.
    """
    if isinstance(node, Square):
        x0, y0 = (-node.width / 2.0, -node.height / 2.0) if node.center else (0.0, 0.0)
        return (x0 - eps <= x <= x0 + node.width + eps
                and y0 - eps <= y <= y0 + node.height + eps)
    if isinstance(node, Translate):
        return covers(node.child, x - node.offset[0], y - node.offset[1], eps)
    if isinstance(node, Rotate):
        a = math.radians(-node.angle)
        c, s = math.cos(a), math.sin(a)
        return covers(node.child, c * x - s * y, s * x + c * y, eps)
    if isinstance(node, (Union, LinearExtrude)):
        return any(covers(child, x, y, eps) for child in node.children())
    return False
