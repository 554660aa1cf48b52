"""Interfaces the layout engine requires from a document/page backend.

The engine never creates, sizes or serialises pages itself. It only calls
the methods declared here. ``reportlab_backend`` provides an implementation
on top of ReportLab; tests supply a recording fake.
"""

from enum import Enum
from typing import NamedTuple, Optional, Protocol

from reportlab.lib.colors import Color


class StandardFonts(Enum):
    """The standard Type 1 fonts every PDF viewer provides."""
    HELVETICA = "Helvetica"
    HELVETICA_BOLD = "Helvetica-Bold"
    HELVETICA_OBLIQUE = "Helvetica-Oblique"
    TIMES_ROMAN = "Times-Roman"
    TIMES_BOLD = "Times-Bold"
    COURIER = "Courier"
    COURIER_BOLD = "Courier-Bold"


def rgb(red: float, green: float, blue: float) -> Color:
    """Build a colour from components in [0, 1]."""
    return Color(red, green, blue)


BLACK = rgb(0, 0, 0)
WHITE = rgb(1, 1, 1)
HEADER_GREY = rgb(0.95, 0.95, 0.95)


class Size(NamedTuple):
    width: float
    height: float


class FontHandle(Protocol):
    """An embedded font able to report metrics."""

    def width_of_text_at_size(self, text: str, size: float) -> float:
        ...

    def height_at_size(self, size: float) -> float:
        ...


class Page(Protocol):
    """A single page accepting drawing primitives."""

    def get_size(self) -> Size:
        ...

    def draw_rectangle(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Optional[Color] = None,
        border_color: Optional[Color] = None,
        border_width: float = 0.0,
        fill: bool = False,
    ) -> None:
        ...

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        size: float,
        color: Optional[Color] = None,
        font: Optional[FontHandle] = None,
    ) -> None:
        ...

    @property
    def doc(self) -> "Document":
        ...


class Document(Protocol):
    """Owner of pages and embedded fonts."""

    def embed_font(self, font: StandardFonts) -> FontHandle:
        ...

    def add_page(self) -> Page:
        ...
