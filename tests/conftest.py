"""Recording fakes for the document/page collaborators."""

from typing import Dict, List, Optional

import pytest

from pagetable.collaborators import Size, StandardFonts


class FakeFont:
    """Fixed-pitch font: every character is ``ratio * size`` wide."""

    def __init__(self, name: str, ratio: float = 0.5, unsupported: str = ""):
        self.name = name
        self.ratio = ratio
        self.unsupported = unsupported

    def width_of_text_at_size(self, text: str, size: float) -> float:
        for char in text:
            if char in self.unsupported:
                raise KeyError(char)
        return len(text) * size * self.ratio

    def height_at_size(self, size: float) -> float:
        return float(size)


class FakePage:
    def __init__(self, document: "FakeDocument", width: float, height: float):
        self.document = document
        self.width = width
        self.height = height
        self.rectangles: List[Dict] = []
        self.texts: List[Dict] = []

    @property
    def doc(self) -> "FakeDocument":
        return self.document

    def get_size(self) -> Size:
        return Size(self.width, self.height)

    def draw_rectangle(self, x, y, width, height, color=None, border_color=None,
                       border_width=0.0, fill=False):
        self.rectangles.append({
            "x": x, "y": y, "width": width, "height": height, "color": color,
            "border_color": border_color, "border_width": border_width, "fill": fill,
        })

    def draw_text(self, text, x, y, size, color=None, font=None):
        self.texts.append({"text": text, "x": x, "y": y, "size": size, "color": color, "font": font})


class FakeDocument:
    def __init__(self, width: float = 600.0, height: float = 800.0, unsupported: str = ""):
        self.width = width
        self.height = height
        self.unsupported = unsupported
        self.pages: List[FakePage] = []
        self.embedded: List[StandardFonts] = []

    def embed_font(self, font: StandardFonts) -> FakeFont:
        self.embedded.append(font)
        return FakeFont(font.value, unsupported=self.unsupported)

    def add_page(self, width: Optional[float] = None, height: Optional[float] = None) -> FakePage:
        page = FakePage(self, width or self.width, height or self.height)
        self.pages.append(page)
        return page


@pytest.fixture
def document() -> FakeDocument:
    return FakeDocument()


@pytest.fixture
def page(document: FakeDocument) -> FakePage:
    return document.add_page()


@pytest.fixture
def document_factory():
    return FakeDocument
