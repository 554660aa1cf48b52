"""Paginated table rendering with greedy text wrapping."""

from .cells import Align, PlainText, StyledText, parse_cell, resolve_cell
from .collaborators import StandardFonts, rgb
from .config import CellPadding, Margin, TableConfig, load_config
from .errors import ConfigurationError, ContentError, TableLayoutError
from .layout_engine import TableLayoutEngine, TableResult, draw_table
from .line_wrapper import LineWrapper, WrappedLines, wrap_text_lines

__version__ = "0.1.0"

__all__ = [
    "Align",
    "CellPadding",
    "ConfigurationError",
    "ContentError",
    "LineWrapper",
    "Margin",
    "PlainText",
    "StandardFonts",
    "StyledText",
    "TableConfig",
    "TableLayoutEngine",
    "TableLayoutError",
    "TableResult",
    "WrappedLines",
    "draw_table",
    "load_config",
    "parse_cell",
    "resolve_cell",
    "rgb",
    "wrap_text_lines",
]
