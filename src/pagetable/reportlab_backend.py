"""Document/page backend built on ReportLab.

ReportLab's canvas draws pages strictly in order, while the layout engine
may keep a reference to any page it has been handed. Pages here therefore
record their drawing operations, and the document replays them onto a
canvas when saved.
"""

from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
import logging
from typing import Dict, List, Optional, Tuple, Union

from reportlab.lib.colors import Color
from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from .collaborators import BLACK, Size, StandardFonts

logger = logging.getLogger(__name__)


class ReportLabFont:
    """A standard font measured with ReportLab's AFM metrics."""

    def __init__(self, name: str):
        self.name = name
        # Fails early for names ReportLab does not know
        pdfmetrics.getFont(name)

    def width_of_text_at_size(self, text: str, size: float) -> float:
        return pdfmetrics.stringWidth(text, self.name, size)

    def height_at_size(self, size: float) -> float:
        ascent, descent = pdfmetrics.getAscentDescent(self.name, size)
        return ascent - descent

    def __repr__(self) -> str:
        return f"ReportLabFont({self.name!r})"


@dataclass
class RectangleOp:
    x: float
    y: float
    width: float
    height: float
    color: Optional[Color]
    border_color: Optional[Color]
    border_width: float
    fill: bool


@dataclass
class TextOp:
    text: str
    x: float
    y: float
    size: float
    color: Color
    font: ReportLabFont


DrawOp = Union[RectangleOp, TextOp]


@dataclass(eq=False)
class ReportLabPage:
    """One page of a ReportLabDocument."""
    document: "ReportLabDocument"
    index: int
    width: float
    height: float
    operations: List[DrawOp] = field(default_factory=list)

    @property
    def doc(self) -> "ReportLabDocument":
        return self.document

    def get_size(self) -> Size:
        return Size(self.width, self.height)

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
        self.operations.append(RectangleOp(
            x=x,
            y=y,
            width=width,
            height=height,
            color=color,
            border_color=border_color,
            border_width=border_width,
            fill=fill,
        ))

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        size: float,
        color: Optional[Color] = None,
        font: Optional[ReportLabFont] = None,
    ) -> None:
        if font is None:
            font = self.document.embed_font(StandardFonts.HELVETICA)
        self.operations.append(TextOp(
            text=text,
            x=x,
            y=y,
            size=size,
            color=color if color is not None else BLACK,
            font=font,
        ))

    def __repr__(self) -> str:
        return f"ReportLabPage(index={self.index}, size=({self.width}, {self.height}))"


class ReportLabDocument:
    """A document whose pages are rendered to PDF with ReportLab."""

    def __init__(self, pagesize: Tuple[float, float] = A4, orientation: str = "portrait"):
        if orientation == "landscape":
            pagesize = landscape(pagesize)
        self.pagesize = pagesize
        self.pages: List[ReportLabPage] = []
        self._fonts: Dict[StandardFonts, ReportLabFont] = {}

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def embed_font(self, font: StandardFonts) -> ReportLabFont:
        """Return the handle for a standard font, creating it on first use."""
        if font not in self._fonts:
            self._fonts[font] = ReportLabFont(font.value)
        return self._fonts[font]

    def add_page(self, pagesize: Optional[Tuple[float, float]] = None) -> ReportLabPage:
        width, height = pagesize or self.pagesize
        page = ReportLabPage(document=self, index=len(self.pages), width=width, height=height)
        self.pages.append(page)
        logger.debug("Added page %d (%.2f x %.2f)", page.index, width, height)
        return page

    def _render(self, c: canvas.Canvas) -> None:
        for page in self.pages:
            c.setPageSize((page.width, page.height))
            for op in page.operations:
                if isinstance(op, RectangleOp):
                    stroke = op.border_color is not None and op.border_width > 0
                    if stroke:
                        c.setStrokeColor(op.border_color)
                        c.setLineWidth(op.border_width)
                    if op.fill and op.color is not None:
                        c.setFillColor(op.color)
                    c.rect(
                        op.x, op.y, op.width, op.height,
                        stroke=int(stroke),
                        fill=int(op.fill and op.color is not None),
                    )
                else:
                    c.setFont(op.font.name, op.size)
                    c.setFillColor(op.color)
                    c.drawString(op.x, op.y, op.text)
            c.showPage()

    def save(self, path: Path) -> None:
        """Write the document as a PDF file."""
        c = canvas.Canvas(str(path), pagesize=self.pagesize)
        self._render(c)
        c.save()
        logger.info("Saved %d page(s) to %s", self.page_count, path)

    def to_bytes(self) -> bytes:
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=self.pagesize)
        self._render(c)
        c.save()
        return buffer.getvalue()
