"""
Integration tests for the command line entry point.
"""

import json

import pytest

from main import build_sheet, main, place_title_block, sample_annotations
from scad_dimensions.context import DrawingContext
from scad_dimensions.drawing.sheet import border_layout
from scad_dimensions.drawing.units import resolve_page
from scad_dimensions.errors import UnknownPage
from scad_dimensions.geometry.bounds import bounding_box
from scad_dimensions.geometry.tree import Scale
from scad_dimensions.logging_config import collect_diagnostics
from scad_dimensions.project_config import ProjectConfig

from conftest import nodes_of, texts_of


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty directory with an empty home."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


class TestBuildSheet:
    """Tests for build_sheet function."""

    def test_default_sheet_on_page(self):
        """Test the default sheet fits on an A4 landscape page."""
        x0, y0, x1, y1 = bounding_box(build_sheet(ProjectConfig()))
        assert x0 >= 0.0 and y0 >= 0.0
        assert x1 <= 297.0 and y1 <= 210.0

    def test_title_block_fields(self):
        """Test title block values appear on the sheet."""
        config = ProjectConfig()
        config.title_block.title = 'Bracket'
        assert 'Bracket' in texts_of(build_sheet(config))

    def test_portrait(self):
        """Test portrait orientation swaps the page."""
        config = ProjectConfig()
        config.page.orientation = 'portrait'
        config.output.include_samples = False
        _, _, x1, y1 = bounding_box(build_sheet(config))
        assert x1 <= 210.0
        assert y1 > 210.0

    @pytest.mark.parametrize('name', ['A4', 'letter'])
    def test_portrait_title_block_inside_frame(self, name):
        """Test the title block is shrunk to fit inside the inner frame."""
        ctx = DrawingContext()
        page = resolve_page(name).portrait()
        inner = border_layout(page, ctx.margin, ctx).inner_margin
        with collect_diagnostics() as diagnostics:
            block = place_title_block({'title': 'Bracket'}, page, inner, ctx)
        x0, y0, x1, _ = bounding_box(block)
        assert x0 >= inner - 1e-9
        assert x1 <= page.width - inner + 1e-9
        assert y0 == pytest.approx(inner)
        assert nodes_of(block, Scale)
        assert diagnostics and diagnostics[0].level == 'WARNING'

    def test_landscape_title_block_unscaled(self):
        """Test the block keeps its size when it fits."""
        ctx = DrawingContext()
        page = resolve_page('A4')
        inner = border_layout(page, ctx.margin, ctx).inner_margin
        block = place_title_block({}, page, inner, ctx)
        x0, _, x1, _ = bounding_box(block)
        assert not nodes_of(block, Scale)
        assert x1 == pytest.approx(page.width - inner)
        assert x1 - x0 == pytest.approx(600.0 * ctx.stroke + 2.0 * ctx.stroke)

    def test_unknown_page(self):
        """Test unknown page names fail the build."""
        config = ProjectConfig()
        config.page.name = 'B5'
        with pytest.raises(UnknownPage):
            build_sheet(config)

    def test_samples(self):
        """Test the sample annotations carry a circled leader label."""
        assert '1' in texts_of(sample_annotations(DrawingContext()))


class TestMain:
    """Tests for main function."""

    def test_writes_output(self, tmp_path):
        """Test a sheet is written to the given path."""
        out = tmp_path / 'sheet.scad'
        assert main([str(out), '--title', 'Bracket', '--unit', 'inch']) == 0
        source = out.read_text(encoding='utf-8')
        assert source.startswith('// A4 sheet, unit inch')
        assert 'text("Bracket"' in source

    def test_config_file(self, tmp_path):
        """Test options are read from a config file."""
        cfg = tmp_path / 'cfg.json'
        cfg.write_text(json.dumps({
            'page': {'name': 'A3'},
            'output': {'path': str(tmp_path / 'a3.scad'), 'include_samples': False},
        }))
        assert main(['--config', str(cfg), '--extrude']) == 0
        assert 'linear_extrude' in (tmp_path / 'a3.scad').read_text(encoding='utf-8')

    def test_unknown_unit_fails(self, tmp_path):
        """Test an unknown unit exits with status 2 and writes nothing."""
        out = tmp_path / 'sheet.scad'
        assert main([str(out), '--unit', 'yard']) == 2
        assert not out.exists()
