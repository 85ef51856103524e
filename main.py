"""
Точка входа: сборка листа с аннотациями в файл OpenSCAD.

Использование:
    python main.py <output.scad> [--page A3] [--portrait] [--unit inch]

Пример:
    python main.py sheet.scad --title "Bracket" --drawn-by "J. Doe"
    python main.py sheet.scad --config project.scad_dimensions.json --extrude
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Mapping, Optional

from scad_dimensions.context import DrawingContext
from scad_dimensions.drawing.dimensions import DimensionStyle, place_dimension
from scad_dimensions.drawing.leader import LeaderLineSpec, circle_center, place_leader
from scad_dimensions.drawing.sheet import border_layout, draw_page_border
from scad_dimensions.drawing.title_block import table_shape, title_block_cells
from scad_dimensions.drawing.units import PageSpec, resolve_page, resolve_unit
from scad_dimensions.errors import AnnotationError
from scad_dimensions.geometry.bounds import bounding_box
from scad_dimensions.geometry.scad import write_scad
from scad_dimensions.geometry.tree import Node, Scale, finish, translate, union
from scad_dimensions.logging_config import collect_diagnostics, setup_logging
from scad_dimensions.project_config import ProjectConfig, load_config

logger = logging.getLogger("scad_dimensions.main")


# ---------------------------------------------------------------------------
# Сборка листа
# ---------------------------------------------------------------------------

def sample_annotations(ctx: DrawingContext) -> Node:
    """Набор образцов: три размера, выноска и маркер центра."""
    fs = ctx.text_size
    hole_radius = 4.0 * fs
    return union(
        place_dimension(DimensionStyle(length=40.0 * fs, offset=3.0 * fs), ctx),
        translate(0.0, -6.0 * fs, place_dimension(DimensionStyle(length=4.0 * fs), ctx)),
        translate(0.0, -12.0 * fs, place_dimension(
            DimensionStyle(length=3.0 * fs, loc='outside', text='A'), ctx)),
        translate(30.0 * fs, -20.0 * fs, union(
            circle_center(hole_radius, ctx=ctx),
            place_leader(LeaderLineSpec(
                radius=hole_radius, text='1', angle=135.0,
                diagonal_length=3.0 * fs, horizontal_length=2.0 * fs, circled=True,
            ), ctx),
        )),
    )


def place_title_block(
    fields: Mapping[str, str],
    page: PageSpec,
    inner: float,
    ctx: DrawingContext,
) -> Node:
    """Штамп в правом нижнем углу внутренней рамки.

    Если штамп шире поля внутри рамки, он уменьшается до ширины поля.
    """
    block = table_shape(*title_block_cells(fields), ctx=ctx)
    x0, y0, x1, _ = bounding_box(block)
    available = page.width - 2.0 * inner
    factor = 1.0
    if x1 - x0 > available:
        factor = available / (x1 - x0)
        logger.warning(
            "Title block scaled by %.3g to fit %s page", factor, page.name,
            extra={'page_width': page.width},
        )
        block = Scale(factor, block)
    return finish(translate(page.width - inner - factor * x1, inner - factor * y0, block), ctx)


def build_sheet(
    config: ProjectConfig,
    ctx: Optional[DrawingContext] = None,
) -> Node:
    """Собрать лист: рамка, штамп в правом нижнем углу и образцы.

    Raises:
        UnknownPage, UnknownUnit: при неверных именах в конфигурации.
    """
    ctx = ctx or config.to_context()
    resolve_unit(ctx.unit)
    page = resolve_page(config.page.name)
    page = page.portrait() if config.page.orientation == 'portrait' else page.landscape()

    inner = border_layout(page, ctx.margin, ctx).inner_margin

    parts = [
        draw_page_border(page, ctx.margin, ctx),
        place_title_block(config.title_block.to_fields(), page, inner, ctx),
    ]
    if config.output.include_samples:
        offset = 15.0 * ctx.text_size
        parts.append(translate(inner + offset, page.height - inner - offset,
                               sample_annotations(ctx)))
    return union(*parts)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build an annotated drawing sheet as OpenSCAD source.",
    )
    parser.add_argument("output", nargs="?", help="output .scad path")
    parser.add_argument("--config", help="project config JSON")
    parser.add_argument("--page", help="page format (A0-A4, letter, 11x17)")
    parser.add_argument("--portrait", action="store_true", help="portrait orientation")
    parser.add_argument("--unit", help="dimension unit (mm, cm, m, inch, feet, points)")
    parser.add_argument("--font-size", type=float, help="annotation font size")
    parser.add_argument("--extrude", action="store_true", help="extrude to thin solids")
    parser.add_argument("--no-samples", action="store_true", help="omit sample annotations")
    parser.add_argument("--title", help="title block: title")
    parser.add_argument("--drawing-no", help="title block: drawing number")
    parser.add_argument("--drawn-by", help="title block: drawn by")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--log-json", help="also write JSON log to this file")
    return parser.parse_args(argv)


def apply_args(config: ProjectConfig, args: argparse.Namespace) -> ProjectConfig:
    """Аргументы командной строки поверх конфигурации."""
    if args.output:
        config.output.path = args.output
    if args.page:
        config.page.name = args.page
    if args.portrait:
        config.page.orientation = 'portrait'
    if args.unit:
        config.drawing.unit = args.unit
    if args.font_size is not None:
        config.drawing.font_size = args.font_size
    if args.extrude:
        config.drawing.extrude = True
    if args.no_samples:
        config.output.include_samples = False
    if args.title:
        config.title_block.title = args.title
    if args.drawing_no:
        config.title_block.drawing_no = args.drawing_no
    if args.drawn_by:
        config.title_block.drawn_by = args.drawn_by
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        json_file=args.log_json,
    )

    config = apply_args(load_config(args.config), args)

    try:
        with collect_diagnostics() as diagnostics:
            sheet = build_sheet(config)
    except AnnotationError as exc:
        logger.error("Sheet not built: %s", exc)
        return 2

    header = f"{config.page.name} sheet, unit {config.drawing.unit}"
    write_scad(sheet, Path(config.output.path), header=header)

    if diagnostics:
        logger.warning("%d diagnostic(s) reported while building the sheet", len(diagnostics))
    return 0


if __name__ == "__main__":
    sys.exit(main())
