"""
Единицы измерения и форматы листов.

Таблицы UNITS и PAGES фиксированы (config.py); поиск — точное совпадение
имени с учётом регистра. Пересчёт длины модели в отображаемые единицы:

    unit_scale(unit, mm_size) = unit.scale_to_base / mm_size
    значение_в_единицах = длина_модели / unit_scale
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from scad_dimensions.config import PAGE_TABLE, UNIT_TABLE
from scad_dimensions.context import DrawingContext
from scad_dimensions.errors import UnknownPage, UnknownUnit


@dataclass(frozen=True)
class UnitSpec:
    """Единица измерения.

    Attributes:
        name: имя в таблице ('mm', 'inch', ...).
        scale_to_base: миллиметров в одной единице.
        symbol: суффикс надписи ('mm', '"', ...).
    """
    name: str
    scale_to_base: float
    symbol: str


@dataclass(frozen=True)
class PageSpec:
    """Формат листа в мм (альбомная ориентация в таблице)."""
    name: str
    width: float
    height: float

    def portrait(self) -> 'PageSpec':
        """Тот же формат в книжной ориентации."""
        return PageSpec(self.name, min(self.width, self.height), max(self.width, self.height))

    def landscape(self) -> 'PageSpec':
        return PageSpec(self.name, max(self.width, self.height), min(self.width, self.height))


UNITS: Dict[str, UnitSpec] = {
    name: UnitSpec(name, scale, symbol) for name, scale, symbol in UNIT_TABLE
}

PAGES: Dict[str, PageSpec] = {
    name: PageSpec(name, w, h) for name, w, h in PAGE_TABLE
}


def resolve_unit(name: str) -> UnitSpec:
    """Найти единицу по имени.

    Raises:
        UnknownUnit: если имени нет в таблице.
    """
    try:
        return UNITS[name]
    except (KeyError, TypeError):
        raise UnknownUnit(name, UNITS) from None


def resolve_page(name: str) -> PageSpec:
    """Найти формат листа по имени.

    Raises:
        UnknownPage: если имени нет в таблице.
    """
    try:
        return PAGES[name]
    except (KeyError, TypeError):
        raise UnknownPage(name, PAGES) from None


def unit_scale(unit: UnitSpec, mm_size: float) -> float:
    """Сколько единиц модели приходится на одну единицу отображения.

    Args:
        unit: единица надписи.
        mm_size: миллиметров в одной единице модели.

    Raises:
        ValueError: если mm_size не положителен.
    """
    if mm_size <= 0:
        raise ValueError(f"mm_size must be positive, got {mm_size!r}")
    return unit.scale_to_base / mm_size


def display_value(length: float, ctx: DrawingContext) -> Tuple[float, UnitSpec]:
    """Длина модели в единицах ctx.unit."""
    unit = resolve_unit(ctx.unit)
    return length / unit_scale(unit, ctx.mm_scale), unit


def format_length(length: float, ctx: DrawingContext) -> str:
    """Текст размера по умолчанию: число + символ единицы, напр. 12.700"."""
    value, unit = display_value(length, ctx)
    return f"{value:.{ctx.decimals}f}{unit.symbol}"


def parse_length(label: str, ctx: DrawingContext) -> float:
    """Обратное преобразование надписи format_length в длину модели.

    Raises:
        ValueError: если надпись не оканчивается символом единицы ctx.unit.
    """
    unit = resolve_unit(ctx.unit)
    if not label.endswith(unit.symbol):
        raise ValueError(f"Label {label!r} does not end with unit symbol {unit.symbol!r}")
    number = float(label[:-len(unit.symbol)])
    return number * unit_scale(unit, ctx.mm_scale)
