"""
JSON-based project configuration for scad_dimensions.

Configuration hierarchy (later overrides earlier):
1. Built-in defaults (config.py / DrawingContext)
2. User config (~/.scad_dimensions.json)
3. Project config (./.scad_dimensions.json)
4. CLI arguments

Example .scad_dimensions.json:
{
    "drawing": {
        "font_size": 2.5,
        "unit": "inch",
        "mm_scale": 1.0,
        "extrude": false
    },
    "page": {
        "name": "A3",
        "orientation": "landscape"
    },
    "title_block": {
        "title": "Bracket",
        "drawn_by": "J. Doe"
    },
    "output": {
        "path": "sheet.scad"
    }
}
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from scad_dimensions.context import DrawingContext

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".scad_dimensions.json"


@dataclass
class DrawingSection:
    """Ambient drawing options; None means "computed default"."""
    font_size: Optional[float] = None
    line_width: Optional[float] = None
    font: Optional[str] = None
    extrude: bool = False
    extrude_height: Optional[float] = None
    unit: str = "mm"
    mm_scale: float = 1.0
    model_scale: float = 1.0
    decimals: int = 3
    segments: int = 36


@dataclass
class PageSection:
    """Sheet format and margin."""
    name: str = "A4"
    orientation: str = "landscape"  # "landscape" or "portrait"
    margin: Optional[float] = None  # None = 10 + font_size


@dataclass
class TitleBlockConfig:
    """Title block fields (see drawing.title_block.TITLE_BLOCK_FIELDS)."""
    title: str = ""
    drawing_no: str = ""
    rev: str = ""
    drawn_by: str = ""
    date: str = ""
    material: str = ""
    scale: str = ""
    sheet: str = ""
    checked_by: str = ""

    def to_fields(self) -> Dict[str, str]:
        """Non-empty fields only."""
        return {k: v for k, v in asdict(self).items() if v}


@dataclass
class OutputConfig:
    """Output file configuration."""
    path: str = "sheet.scad"
    include_samples: bool = True


@dataclass
class ProjectConfig:
    """Complete project configuration."""
    drawing: DrawingSection = field(default_factory=DrawingSection)
    page: PageSection = field(default_factory=PageSection)
    title_block: TitleBlockConfig = field(default_factory=TitleBlockConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, path: Union[str, Path]) -> None:
        """Save configuration to JSON file."""
        path = Path(path)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())
        logger.info("Configuration saved to %s", path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectConfig':
        """Create configuration from dictionary.

        Unknown sections and keys are ignored with a warning.
        """
        config = cls()
        sections = {f.name for f in fields(config)}
        for section_name, values in data.items():
            if section_name.startswith('_'):
                continue
            section = getattr(config, section_name) if section_name in sections else None
            if section is None or not isinstance(values, dict):
                logger.warning("Unknown config section ignored: %s", section_name)
                continue
            for key, value in values.items():
                if key.startswith('_'):
                    continue
                if hasattr(section, key):
                    setattr(section, key, value)
                else:
                    logger.warning("Unknown config key ignored: %s.%s", section_name, key)
        return config

    @classmethod
    def from_json(cls, json_str: str) -> 'ProjectConfig':
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'ProjectConfig':
        """Load configuration from JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file is not valid JSON
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        logger.info("Configuration loaded from %s", path)
        return cls.from_dict(data)

    def to_context(self) -> DrawingContext:
        """Build the DrawingContext described by this configuration."""
        d = self.drawing
        return DrawingContext(
            font_size=d.font_size,
            line_width=d.line_width,
            font=d.font,
            extrude=bool(d.extrude),
            extrude_height=d.extrude_height,
            unit=d.unit,
            mm_scale=float(d.mm_scale),
            model_scale=float(d.model_scale),
            page_name=self.page.name,
            page_margin=self.page.margin,
            decimals=int(d.decimals),
            segments=int(d.segments),
        )


def find_config_file(explicit_config: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Find configuration file using search hierarchy.

    Search order:
    1. Explicit config path (if provided)
    2. .scad_dimensions.json in current working directory
    3. ~/.scad_dimensions.json in user's home directory
    """
    if explicit_config:
        explicit = Path(explicit_config)
        if explicit.exists():
            return explicit
        logger.warning("Explicit config not found: %s", explicit)

    cwd_config = Path.cwd() / CONFIG_FILENAME
    if cwd_config.exists():
        return cwd_config

    home_config = Path.home() / CONFIG_FILENAME
    if home_config.exists():
        return home_config

    return None


def load_config(explicit_config: Optional[Union[str, Path]] = None) -> ProjectConfig:
    """Load configuration with fallback to defaults."""
    config_path = find_config_file(explicit_config)

    if config_path:
        try:
            return ProjectConfig.load(config_path)
        except (json.JSONDecodeError, IOError) as e:
            logger.error("Failed to load config %s: %s", config_path, e)

    return ProjectConfig()


def merge_configs(base: ProjectConfig, override: ProjectConfig) -> ProjectConfig:
    """Merge two configurations, with override taking precedence.

    Only values that differ from the section defaults are taken from override;
    title block fields are taken whenever non-empty.
    """
    merged = ProjectConfig.from_dict(base.to_dict())

    for section_name in ('drawing', 'page', 'output'):
        section = getattr(override, section_name)
        defaults = type(section)()
        target = getattr(merged, section_name)
        for f in fields(section):
            value = getattr(section, f.name)
            if value != getattr(defaults, f.name):
                setattr(target, f.name, value)

    for key, value in asdict(override.title_block).items():
        if value:
            setattr(merged.title_block, key, value)

    return merged


def create_sample_config(path: Union[str, Path] = CONFIG_FILENAME) -> None:
    """Create a sample configuration file with documentation."""
    sample = {
        "_comment": "scad_dimensions drawing configuration",
        "_version": "1.0",
        "drawing": {
            "_comment": "null values fall back to defaults derived from font_size",
            **asdict(DrawingSection()),
        },
        "page": {
            "_comment": "A0-A4, letter, 11x17; margin null = 10 + font_size",
            **asdict(PageSection()),
        },
        "title_block": asdict(TitleBlockConfig()),
        "output": asdict(OutputConfig()),
    }

    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(sample, f, indent=2, ensure_ascii=False)

    logger.info("Sample configuration created: %s", path)
