"""
Host emitter: geometry tree → OpenSCAD source.

The host evaluates the emitted script; this module only serializes node
parameters, it performs no geometry itself.
"""

import logging
from pathlib import Path
from typing import List, Union

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
    Union as UnionNode,
)

logger = logging.getLogger(__name__)

INDENT = "    "


def _num(value: float) -> str:
    """Compact float literal: 12.5, 3, -0.25."""
    text = f"{float(value):.6f}".rstrip('0').rstrip('.')
    return "0" if text in ("", "-0") else text


def _vec(*values: float) -> str:
    return "[" + ", ".join(_num(v) for v in values) + "]"


_ESCAPES = {'"': '\\"', '\\': '\\\\', '\n': '\\n', '\t': '\\t', '\r': '\\r'}


def _char(c: str) -> str:
    if c in _ESCAPES:
        return _ESCAPES[c]
    code = ord(c)
    if code == 0:
        # OpenSCAD strings cannot hold NUL
        return ""
    if code < 0x20 or code == 0x7f:
        return f"\\x{code:02x}"
    return c


def _string(value: str) -> str:
    """OpenSCAD string literal; control characters as \\xNN escapes."""
    return '"' + "".join(_char(c) for c in value) + '"'


def _block(head: str, children: List[Node], depth: int) -> List[str]:
    pad = INDENT * depth
    if not children:
        return [f"{pad}{head} {{}}"]
    lines = [f"{pad}{head} {{"]
    for child in children:
        lines.extend(_emit(child, depth + 1))
    lines.append(f"{pad}}}")
    return lines


def _emit(node: Node, depth: int) -> List[str]:
    pad = INDENT * depth
    if isinstance(node, Square):
        center = "true" if node.center else "false"
        return [f"{pad}square({_vec(node.width, node.height)}, center={center});"]
    if isinstance(node, Circle):
        return [f"{pad}circle(r={_num(node.radius)}, $fn={int(node.segments)});"]
    if isinstance(node, Polygon):
        points = ", ".join(_vec(x, y) for x, y in node.points)
        return [f"{pad}polygon([{points}]);"]
    if isinstance(node, Text):
        args = [_string(node.text), f"size={_num(node.size)}"]
        if node.font:
            args.append(f"font={_string(node.font)}")
        args.append(f"halign={_string(node.halign)}")
        args.append(f"valign={_string(node.valign)}")
        return [f"{pad}text({', '.join(args)});"]
    if isinstance(node, Translate):
        return _block(f"translate({_vec(node.offset[0], node.offset[1], 0)})", [node.child], depth)
    if isinstance(node, Rotate):
        return _block(f"rotate({_num(node.angle)})", [node.child], depth)
    if isinstance(node, Scale):
        return _block(f"scale({_num(node.factor)})", [node.child], depth)
    if isinstance(node, UnionNode):
        return _block("union()", list(node.items), depth)
    if isinstance(node, Difference):
        return _block("difference()", list(node.items), depth)
    if isinstance(node, Offset):
        return _block(f"offset(delta={_num(node.delta)})", [node.child], depth)
    if isinstance(node, LinearExtrude):
        return _block(f"linear_extrude(height={_num(node.height)})", [node.child], depth)
    raise TypeError(f"Unsupported geometry node: {type(node).__name__}")


def to_scad(node: Node) -> str:
    """Serialize a geometry tree to OpenSCAD source text."""
    return "\n".join(_emit(node, 0)) + "\n"


def write_scad(node: Node, path: Union[str, Path], header: str = "") -> Path:
    """Write the tree as an OpenSCAD file.

    Args:
        node: geometry tree.
        path: output path.
        header: optional comment placed at the top of the file.

    Returns:
        Path of the written file.
    """
    path = Path(path)
    source = to_scad(node)
    if header:
        source = "".join(f"// {line}\n" for line in header.splitlines()) + "\n" + source
    with open(path, 'w', encoding='utf-8') as f:
        f.write(source)
    logger.info("OpenSCAD source saved: %s (%d lines)", path, source.count("\n"))
    return path
