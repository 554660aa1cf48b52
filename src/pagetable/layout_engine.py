"""Layout engine for drawing paginated tables onto document pages."""

from dataclasses import dataclass, field
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .cells import Align, ResolvedCell, resolve_row
from .collaborators import BLACK, HEADER_GREY, Document, FontHandle, Page, StandardFonts
from .config import TableConfig
from .errors import ContentError
from .line_wrapper import MeasureFn, WrappedLines

logger = logging.getLogger(__name__)

# Header labels are vertically centred using a fixed text height
HEADER_TEXT_HEIGHT = 10.0
# Baseline sits this fraction of the font height above the bottom of a line
BASELINE_RATIO = 0.2

REGULAR_FONT = StandardFonts.HELVETICA
BOLD_FONT = StandardFonts.HELVETICA_BOLD


@dataclass
class LayoutCursor:
    """Page and vertical position at which the next row is drawn."""
    page: Page
    y: float
    page_index: int = 0


@dataclass(frozen=True)
class CellLayout:
    """Wrapped content and required height of one cell."""
    cell: ResolvedCell
    lines: Tuple[str, ...]
    height: float


@dataclass(frozen=True)
class RowLayout:
    """Pre-computed geometry of one data row."""
    cells: Tuple[CellLayout, ...]
    column_width: float
    content_width: float
    height: float


@dataclass
class CellPlacement:
    """Describes where a cell was drawn."""
    row_index: int
    col_index: int
    x: float
    y_top: float
    y_bottom: float
    width: float
    text: str
    lines: List[str] = field(default_factory=list)

    @property
    def bbox(self) -> Tuple[float, float, float, float]:
        """Bounding box as (x0, y0, x1, y1)."""
        return (self.x, self.y_bottom, self.x + self.width, self.y_top)


@dataclass
class RowPlacement:
    """Describes where a row was drawn."""
    row_index: int
    page_index: int
    y_top: float
    y_bottom: float
    row_height: float
    cells: List[CellPlacement] = field(default_factory=list)


@dataclass
class TableResult:
    """Where a table ended, so callers can continue laying out below it."""
    last_page: Page
    end_y: float
    page_count: int = 1
    header: Optional[RowPlacement] = None
    rows: List[RowPlacement] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        def row_dict(row: RowPlacement) -> Dict[str, Any]:
            return {
                "row_index": row.row_index,
                "page_index": row.page_index,
                "y_top": row.y_top,
                "y_bottom": row.y_bottom,
                "row_height": row.row_height,
                "cells": [
                    {
                        "col_index": cell.col_index,
                        "bbox": list(cell.bbox),
                        "text": cell.text,
                        "lines": list(cell.lines),
                    }
                    for cell in row.cells
                ],
            }

        return {
            "end_y": self.end_y,
            "page_count": self.page_count,
            "header": row_dict(self.header) if self.header else None,
            "rows": [row_dict(row) for row in self.rows],
        }


def _font_measure(font: FontHandle) -> MeasureFn:
    """Width function for the wrapper that reports unmeasurable text as ContentError."""
    def measure(text: str, size: float) -> float:
        try:
            return font.width_of_text_at_size(text, size)
        except (KeyError, ValueError, TypeError, UnicodeError) as e:
            raise ContentError(f"Font {font!r} cannot measure {text!r}") from e
    return measure


class TableLayoutEngine:
    """Draws a header band and wrapped data rows, adding pages on overflow.

    One engine call owns its cursor and row layouts; nothing is shared
    between calls. The document is mutated through its own API, so two
    calls targeting the same document must not run concurrently unless the
    document serialises access itself.
    """

    def __init__(
        self,
        page: Page,
        config: Optional[TableConfig] = None,
        document: Optional[Document] = None,
    ):
        self.page = page
        self.config = config or TableConfig()
        self.document = document if document is not None else page.doc
        self.font: Optional[FontHandle] = None
        self.bold_font: Optional[FontHandle] = None

    def embed_fonts(self) -> None:
        """Embed the regular and bold fonts once, before any layout."""
        self.font = self.document.embed_font(REGULAR_FONT)
        self.bold_font = self.document.embed_font(BOLD_FONT)

    def _font_for(self, cell: ResolvedCell) -> FontHandle:
        return self.bold_font if cell.bold else self.font

    @property
    def start_x(self) -> float:
        return self.config.margin.left

    def usable_width(self) -> float:
        return self.config.usable_width(self.page.get_size().width)

    def column_width(self, num_columns: int) -> float:
        """Equal share of the usable width."""
        if num_columns <= 0:
            return 0.0
        return self.usable_width() / num_columns

    def table_start_y(self) -> float:
        """Top edge of the table on the starting page."""
        height = self.page.get_size().height
        return height - self.config.margin.top - self.config.start_pos_y

    def wrap_cell(self, cell: ResolvedCell, content_width: float) -> Tuple[str, ...]:
        measure = _font_measure(self._font_for(cell))
        return tuple(WrappedLines(cell.text, measure, cell.font_size, content_width))

    def layout_row(self, row: Sequence[Any]) -> RowLayout:
        """Wrap every cell of a row and compute the row height."""
        padding = self.config.cell_padding
        cells = resolve_row(row, self.config)
        column_width = self.column_width(len(cells))
        content_width = column_width - padding.horizontal

        cell_layouts = []
        for cell in cells:
            lines = self.wrap_cell(cell, content_width)
            height = len(lines) * cell.font_size + padding.vertical
            cell_layouts.append(CellLayout(cell=cell, lines=lines, height=height))

        return RowLayout(
            cells=tuple(cell_layouts),
            column_width=column_width,
            content_width=content_width,
            height=max((c.height for c in cell_layouts), default=0.0),
        )

    def layout_rows(self, rows: Sequence[Sequence[Any]]) -> List[RowLayout]:
        """Pre-pass: every row height must be known before drawing starts."""
        if self.font is None:
            self.embed_fonts()
        layouts = [self.layout_row(row) for row in rows]
        logger.debug(
            "Pre-computed %d row heights (total %.2f)",
            len(layouts), sum(layout.height for layout in layouts),
        )
        return layouts

    def draw_header(self, headers: Sequence[str], y_top: float) -> RowPlacement:
        """Draw the filled header band whose top edge is y_top."""
        config = self.config
        band_bottom = y_top - config.header_height
        column_width = self.column_width(len(headers))
        text_y = band_bottom + (config.header_height - HEADER_TEXT_HEIGHT) / 2

        placement = RowPlacement(
            row_index=-1,
            page_index=0,
            y_top=y_top,
            y_bottom=band_bottom,
            row_height=config.header_height,
        )
        for i, header in enumerate(headers):
            label = str(header)
            x = self.start_x + column_width * i
            self.page.draw_rectangle(
                x=x,
                y=band_bottom,
                width=column_width,
                height=config.header_height,
                color=HEADER_GREY,
                border_color=BLACK,
                border_width=config.border_width,
                fill=True,
            )
            # Headers are not wrapped; long labels overflow their column
            self.page.draw_text(
                label,
                x=x + config.cell_padding.left,
                y=text_y,
                size=config.font_size,
                color=BLACK,
                font=self.font,
            )
            placement.cells.append(CellPlacement(
                row_index=-1,
                col_index=i,
                x=x,
                y_top=y_top,
                y_bottom=band_bottom,
                width=column_width,
                text=label,
                lines=[label],
            ))
        return placement

    def ensure_room(self, cursor: LayoutCursor, height: float) -> LayoutCursor:
        """Move the cursor to a fresh page if a row of this height does not fit."""
        margin = self.config.margin
        if cursor.y - height >= margin.bottom:
            return cursor

        page = self.document.add_page()
        new_cursor = LayoutCursor(
            page=page,
            y=page.get_size().height - margin.top,
            page_index=cursor.page_index + 1,
        )
        logger.debug(
            "Row of height %.2f does not fit above %.2f at y=%.2f; continuing on page %d",
            height, margin.bottom, cursor.y, new_cursor.page_index,
        )
        return new_cursor

    def draw_row(
        self,
        cursor: LayoutCursor,
        row_index: int,
        layout: RowLayout,
    ) -> Tuple[LayoutCursor, RowPlacement]:
        """Draw one row, breaking to a new page first if needed.

        Returns the cursor positioned below the row and the row's placement.
        """
        cursor = self.ensure_room(cursor, layout.height)
        padding = self.config.cell_padding
        page = cursor.page
        row_height = layout.height
        cell_bottom = cursor.y - row_height

        placement = RowPlacement(
            row_index=row_index,
            page_index=cursor.page_index,
            y_top=cursor.y,
            y_bottom=cell_bottom,
            row_height=row_height,
        )

        for j, cell_layout in enumerate(layout.cells):
            cell = cell_layout.cell
            x = self.start_x + layout.column_width * j
            font = self._font_for(cell)

            page.draw_rectangle(
                x=x,
                y=cell_bottom,
                width=layout.column_width,
                height=row_height,
                color=cell.background_color,
                border_color=BLACK,
                border_width=cell.border_width,
                fill=cell.background_color is not None,
            )

            baseline_offset = font.height_at_size(cell.font_size) * BASELINE_RATIO
            for k, line in enumerate(cell_layout.lines):
                text_y = (
                    cell_bottom + row_height - padding.top
                    - (cell.font_size * (k + 1) - baseline_offset)
                )
                if cell.align is Align.CENTER:
                    text_width = font.width_of_text_at_size(line, cell.font_size)
                    text_x = x + (layout.content_width - text_width) / 2
                else:
                    text_x = x + padding.left

                page.draw_text(
                    line,
                    x=text_x,
                    y=text_y,
                    size=cell.font_size,
                    color=cell.foreground_color,
                    font=font,
                )

            placement.cells.append(CellPlacement(
                row_index=row_index,
                col_index=j,
                x=x,
                y_top=cursor.y,
                y_bottom=cell_bottom,
                width=layout.column_width,
                text=cell.text,
                lines=list(cell_layout.lines),
            ))

        cursor = LayoutCursor(page=page, y=cell_bottom, page_index=cursor.page_index)
        return cursor, placement

    def draw_table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
    ) -> TableResult:
        """Draw headers and rows, returning the last page and the final y."""
        self.config.validate(self.page.get_size().width)
        self.embed_fonts()

        # Resolve and wrap every cell before touching the page
        layouts = self.layout_rows(rows)

        start_y = self.table_start_y()
        header = None
        if headers:
            header = self.draw_header(headers, start_y)
            start_y = header.y_bottom

        cursor = LayoutCursor(page=self.page, y=start_y)
        placements: List[RowPlacement] = []
        for i, layout in enumerate(layouts):
            cursor, placement = self.draw_row(cursor, i, layout)
            placements.append(placement)

        result = TableResult(
            last_page=cursor.page,
            end_y=cursor.y,
            page_count=cursor.page_index + 1,
            header=header,
            rows=placements,
        )
        logger.info(
            "Drew table with %d header(s) and %d row(s) over %d page(s), ending at y=%.2f",
            len(headers), len(rows), result.page_count, result.end_y,
        )
        return result


TableOptions = Union[TableConfig, Mapping[str, Any], None]


def draw_table(
    page: Page,
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    options: TableOptions = None,
    document: Optional[Document] = None,
    **overrides: Any,
) -> TableResult:
    """Draw a table on ``page``, creating pages in its document as needed.

    ``options`` is a TableConfig or a mapping of options (``margin``,
    ``fontSize``, ``startPosY``, ``headerHeight``, ``borderWidth``,
    ``cellPadding``; snake_case names work too). Keyword overrides are
    applied on top.
    """
    if isinstance(options, TableConfig):
        config = options
    else:
        config = TableConfig.from_dict(options)
    if overrides:
        config = TableConfig.from_dict({**config.to_dict(), **overrides})
    return TableLayoutEngine(page, config, document=document).draw_table(headers, rows)
