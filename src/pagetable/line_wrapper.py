"""Greedy line wrapping against a font's width metrics."""

from collections.abc import Sequence
from typing import Callable, Iterator, List, Optional, Tuple

from .collaborators import FontHandle

# measure(text, font_size) -> rendered width in points
MeasureFn = Callable[[str, float], float]


def _split_word(
    word: str,
    measure: MeasureFn,
    font_size: float,
    max_width: float,
) -> Tuple[List[str], str]:
    """Cut an oversized word into pieces that each fit max_width.

    Returns the completed pieces and the trailing remainder, which fits
    max_width and may still be extended by the following words.
    """
    pieces: List[str] = []
    rest = word
    end = 0
    while end < len(rest):
        if measure(rest[:end + 1], font_size) <= max_width:
            end += 1
            continue
        # A single character wider than the line still has to go somewhere
        cut = max(end, 1)
        pieces.append(rest[:cut])
        rest = rest[cut:]
        end = 0
    return pieces, rest


def wrap_text_lines(
    text: str,
    measure: MeasureFn,
    font_size: float,
    max_width: float,
) -> Iterator[str]:
    """Yield lines of ``text`` whose measured width fits ``max_width``.

    Words are separated on single spaces and packed greedily. Runs of
    spaces collapse to one since empty tokens are dropped. A word that is
    wider than the line on its own is split character by character. When
    ``max_width <= 0`` every character ends up on its own line.
    """
    current = ""
    for word in text.split(" "):
        if not word:
            continue

        if current and measure(current + " " + word, font_size) <= max_width:
            current += " " + word
            continue

        if current:
            yield current
            current = ""

        if measure(word, font_size) <= max_width:
            current = word
        else:
            pieces, current = _split_word(word, measure, font_size, max_width)
            yield from pieces

    if current:
        yield current


class WrappedLines(Sequence):
    """Restartable view over the lines produced by wrap_text_lines.

    Iterating re-runs the wrapper from scratch. Length and indexing
    materialise the lines once; the wrapper is deterministic so the cached
    tuple is always identical to a fresh run.
    """

    def __init__(self, text: str, measure: MeasureFn, font_size: float, max_width: float):
        self.text = text
        self.measure = measure
        self.font_size = font_size
        self.max_width = max_width
        self._lines: Optional[Tuple[str, ...]] = None

    def __iter__(self) -> Iterator[str]:
        return wrap_text_lines(self.text, self.measure, self.font_size, self.max_width)

    def _materialise(self) -> Tuple[str, ...]:
        if self._lines is None:
            # Not tuple(self): tuple() asks __len__ for a size hint first
            self._lines = tuple(iter(self))
        return self._lines

    def __len__(self) -> int:
        return len(self._materialise())

    def __getitem__(self, index):
        return self._materialise()[index]

    def __eq__(self, other) -> bool:
        if isinstance(other, WrappedLines):
            return self._materialise() == other._materialise()
        if isinstance(other, (list, tuple)):
            return list(self._materialise()) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"WrappedLines({list(self._materialise())!r})"


class LineWrapper:
    """Wraps text for one font at one size."""

    def __init__(self, font: FontHandle, font_size: float):
        self.font = font
        self.font_size = font_size

    def measure(self, text: str, font_size: float) -> float:
        return self.font.width_of_text_at_size(text, font_size)

    def wrap(self, text: str, max_width: float) -> WrappedLines:
        return WrappedLines(text, self.measure, self.font_size, max_width)
