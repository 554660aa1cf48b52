"""Cell specifications and resolution of their effective style."""

from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from reportlab.lib.colors import Color

from .collaborators import BLACK, rgb
from .config import TableConfig
from .errors import ContentError

RGB = Tuple[float, float, float]


class Align(Enum):
    """Horizontal alignment of text within a cell."""
    LEFT = "left"
    CENTER = "center"


@dataclass(frozen=True)
class PlainText:
    """A cell holding only text; all style comes from the table config."""
    text: str

    def __post_init__(self):
        object.__setattr__(self, "text", _coerce_text(self.text))


@dataclass(frozen=True)
class StyledText:
    """A cell with optional per-cell style overrides.

    Values are normalised on construction: ``align`` may be given as its
    string value and colours as any RGB triple or a ReportLab ``Color``.
    """
    text: str
    font_size: Optional[float] = None
    bold: bool = False
    align: Align = Align.LEFT
    background_color: Optional[RGB] = None
    foreground_color: Optional[RGB] = None
    border_width: Optional[float] = None

    def __post_init__(self):
        set_field = partial(object.__setattr__, self)
        set_field("text", _coerce_text(self.text))

        if not isinstance(self.bold, bool):
            raise ContentError(f"Cell bold flag must be true or false, got {self.bold!r}")

        try:
            set_field("align", Align(self.align))
        except ValueError as e:
            raise ContentError(f"Unsupported alignment: {self.align!r}") from e

        font_size = _parse_number(self.font_size, "fontSize")
        if font_size is not None and font_size <= 0:
            raise ContentError(f"Cell font size must be positive, got {font_size!r}")
        set_field("font_size", font_size)

        border_width = _parse_number(self.border_width, "borderWidth")
        if border_width is not None and border_width < 0:
            raise ContentError(f"Cell border width must be non-negative, got {border_width!r}")
        set_field("border_width", border_width)

        set_field("background_color", _parse_color(self.background_color, "backgroundColor"))
        set_field("foreground_color", _parse_color(self.foreground_color, "foregroundColor"))


CellSpec = Union[PlainText, StyledText]

# Mapping keys accepted for styled cells, camelCase as well as snake_case
_STYLE_KEYS = {
    "text": "text",
    "fontSize": "font_size",
    "font_size": "font_size",
    "bold": "bold",
    "align": "align",
    "backgroundColor": "background_color",
    "background_color": "background_color",
    "foregroundColor": "foreground_color",
    "foreground_color": "foreground_color",
    "borderWidth": "border_width",
    "border_width": "border_width",
}


def _parse_color(value: Any, name: str) -> Optional[RGB]:
    if value is None:
        return None
    if isinstance(value, Color):
        return (value.red, value.green, value.blue)
    try:
        red, green, blue = (float(v) for v in value)
    except (TypeError, ValueError) as e:
        raise ContentError(f"{name} must be an RGB triple, got {value!r}") from e
    for component in (red, green, blue):
        if not 0.0 <= component <= 1.0:
            raise ContentError(f"{name} components must be within [0, 1], got {value!r}")
    return (red, green, blue)


def _parse_mapping(data: Mapping[str, Any]) -> StyledText:
    kwargs = {}
    for key, value in data.items():
        name = _STYLE_KEYS.get(key)
        if name is None:
            raise ContentError(f"Unknown cell property: {key!r}")
        kwargs[name] = value

    if kwargs.get("text") is None:
        raise ContentError(f"Styled cell has no text: {dict(data)!r}")
    return StyledText(**kwargs)


def _parse_number(value: Any, name: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ContentError(f"{name} must be a number, got {value!r}")
    return value


def _coerce_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    # Numbers are common in tabular data; anything else is a caller mistake
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ContentError(f"Cell text must be a string, got {type(value).__name__}")


def parse_cell(value: Any) -> CellSpec:
    """Turn a raw cell value (string, number, mapping or spec) into a CellSpec."""
    if isinstance(value, (PlainText, StyledText)):
        return value
    if isinstance(value, Mapping):
        return _parse_mapping(value)
    if value is None:
        raise ContentError("Cell value is None")
    return PlainText(_coerce_text(value))


@dataclass(frozen=True)
class ResolvedCell:
    """Effective text and style of a cell after applying table defaults."""
    text: str
    font_size: float
    bold: bool
    align: Align
    background_color: Optional[Color]
    foreground_color: Color
    border_width: float


def resolve_cell(cell: Any, config: TableConfig) -> ResolvedCell:
    spec = parse_cell(cell)
    if isinstance(spec, PlainText):
        return ResolvedCell(
            text=spec.text,
            font_size=config.font_size,
            bold=False,
            align=Align.LEFT,
            background_color=None,
            foreground_color=BLACK,
            border_width=config.border_width,
        )
    if isinstance(spec, StyledText):
        return ResolvedCell(
            text=spec.text,
            font_size=spec.font_size if spec.font_size is not None else config.font_size,
            bold=spec.bold,
            align=spec.align,
            background_color=rgb(*spec.background_color) if spec.background_color else None,
            foreground_color=rgb(*spec.foreground_color) if spec.foreground_color else BLACK,
            border_width=spec.border_width if spec.border_width is not None else config.border_width,
        )
    raise ContentError(f"Unsupported cell spec: {spec!r}")


def resolve_row(row: Sequence[Any], config: TableConfig) -> Tuple[ResolvedCell, ...]:
    return tuple(resolve_cell(cell, config) for cell in row)
