"""
Fixed tables and numeric constants of the annotation layout engine.

All lengths are in the base unit (millimetres) unless stated otherwise.
Modules import what they need from here; nothing in this file is mutated
at runtime, per-call tweaks go through DrawingContext.
"""

# ---------------------------------------------------------------------------
# Единицы измерения: имя → (мм в одной единице, символ)
# ---------------------------------------------------------------------------

UNIT_TABLE = (
    ('mm',     1.0,         'mm'),
    ('cm',     10.0,        'cm'),
    ('m',      1000.0,      'm'),
    ('inch',   25.4,        '"'),
    ('feet',   304.8,       "'"),
    ('points', 25.4 / 72.0, 'pt'),
)

# ---------------------------------------------------------------------------
# Форматы листов (альбомная ориентация, мм)
# ---------------------------------------------------------------------------

PAGE_TABLE = (
    ('A0',    1189.0, 841.0),
    ('A1',    841.0,  594.0),
    ('A2',    594.0,  420.0),
    ('A3',    420.0,  297.0),
    ('A4',    297.0,  210.0),
    ('letter', 279.4, 215.9),
    ('11x17', 431.8,  279.4),
)

# ---------------------------------------------------------------------------
# Значения DrawingContext по умолчанию
# ---------------------------------------------------------------------------

DEFAULT_FONT_SIZE = 3.0
DEFAULT_FONT = ''            # '' → шрифт хоста
LINE_WIDTH_RATIO = 0.1       # line_width = font_size * ratio
DEFAULT_UNIT = 'mm'
DEFAULT_PAGE = 'A4'
PAGE_MARGIN_BASE = 10.0      # page_margin = base + font_size
DEFAULT_DECIMALS = 3
DEFAULT_SEGMENTS = 36        # кратно 4: экстремумы окружности попадают в вершины

# ---------------------------------------------------------------------------
# Стрелки и размерные линии
# ---------------------------------------------------------------------------

ARROW_POINTS_RATIO = 4.0     # полная ширина стрелки = 4 * w
ARROW_LENGTH_RATIO = 0.6     # длина стрелки = 0.6 * ширина = 2.4 * w
DIM_FIT_LINE_WIDTHS = 10.0   # запас при выборе CENTER, в толщинах линии
LABEL_SPACING_RATIO = 0.6    # отступ надписи = 0.6 * font_size
EXTENSION_OVERSHOOT_RATIO = 2.0

# ---------------------------------------------------------------------------
# Выноски и маркеры центра
# ---------------------------------------------------------------------------

LEADER_MIN_DIAGONAL_RATIO = 2.0   # минимум диагонали = 2 * line_width
LEADER_RING_PAD_RATIO = 0.5       # радиус кольца = label_w / 2 + 0.5 * font_size
DEFAULT_LEADER_ANGLE = 45.0
CENTER_MARK_GAP_RATIO = 0.5

# ---------------------------------------------------------------------------
# Рамка листа и сетка зон
# ---------------------------------------------------------------------------

GRID_SPACING = 50.0
GRID_BAND_RATIO = 2.0        # ширина полосы зон = 2 * font_size
REFERENCE_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ'   # без I и O
