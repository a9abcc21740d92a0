# --- pdocx_lib/models.py ---
"""
pdocx_lib/models.py: Data models for fragments, lines, and the reconstructed
document.
"""
import math
from dataclasses import dataclass, field
from enum import Enum

from .constants import (
    BOLD_KEYWORDS,
    DEFAULT_FRAGMENT_HEIGHT,
    DEFAULT_FRAGMENT_WIDTH,
    ITALIC_KEYWORDS,
)
from .errors import MalformedFragmentError


def round_half_up(value):
    """Rounds to the nearest integer, with halves rounded towards +infinity."""
    return int(math.floor(value + 0.5))


def is_finite_number(value):
    if value is None or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except TypeError:
        return False


# --- PHYSICAL MODEL (EXTRACTION) ---
@dataclass(frozen=True)
class TextFragment:
    """A contiguous run of text reported by the page extractor."""

    text: str
    x: float
    y: float
    font_name: str = ""
    height: float = DEFAULT_FRAGMENT_HEIGHT
    width: float = DEFAULT_FRAGMENT_WIDTH

    @classmethod
    def create(cls, text, x, y, font_name="", height=None, width=None, page_num=None):
        """
        Builds a fragment from raw extractor values.
        Missing, zero or non-finite heights fall back to the default height, and
        missing or non-finite widths to the default width. Coordinates have no
        default, so a missing or non-finite x/y raises MalformedFragmentError.
        """
        if not is_finite_number(x) or not is_finite_number(y):
            raise MalformedFragmentError(
                f"fragment {text!r} has invalid coordinates ({x!r}, {y!r})", page_num
            )
        if not is_finite_number(height) or height == 0:
            height = DEFAULT_FRAGMENT_HEIGHT
        if not is_finite_number(width):
            width = DEFAULT_FRAGMENT_WIDTH
        return cls(
            text=text or "",
            x=float(x),
            y=float(y),
            font_name=font_name or "",
            height=float(height),
            width=float(width),
        )

    @property
    def is_bold(self) -> bool:
        name = self.font_name.lower()
        return any(keyword in name for keyword in BOLD_KEYWORDS)

    @property
    def is_italic(self) -> bool:
        name = self.font_name.lower()
        return any(keyword in name for keyword in ITALIC_KEYWORDS)

    @property
    def has_finite_geometry(self) -> bool:
        return all(
            is_finite_number(v) for v in (self.x, self.y, self.height, self.width)
        )


@dataclass(frozen=True)
class Line:
    """Fragments sharing a rounded baseline, ordered left to right."""

    y: int
    fragments: tuple

    @property
    def text(self) -> str:
        """Returns the fragment texts joined by single spaces."""
        return " ".join(f.text for f in self.fragments).strip()

    @property
    def avg_height(self) -> float:
        if not self.fragments:
            return 0.0
        return sum(f.height for f in self.fragments) / len(self.fragments)

    @property
    def first_x(self) -> float:
        return self.fragments[0].x

    @property
    def total_width(self) -> float:
        last = self.fragments[-1]
        return last.x + last.width - self.fragments[0].x

    @property
    def all_bold(self) -> bool:
        return bool(self.fragments) and all(f.is_bold for f in self.fragments)


@dataclass(frozen=True)
class PageContent:
    """Everything the extractor reports for one page."""

    page_num: int
    width: float
    fragments: tuple = ()


# --- LOGICAL MODEL (RECONSTRUCTION) ---
class Alignment(Enum):
    """Horizontal paragraph alignment."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class StyleRun:
    """A span of paragraph text sharing the same bold/italic flags."""

    text: str
    bold: bool = False
    italic: bool = False
    size_hint: int | None = None


@dataclass(frozen=True)
class Indent:
    """Left and hanging indentation, in twips."""

    left: int
    hanging: int


@dataclass(frozen=True)
class Paragraph:
    """A styled paragraph reconstructed from a single source line."""

    runs: tuple
    alignment: Alignment = Alignment.LEFT
    spacing_before: int = 0
    spacing_after: int = 0
    indent: Indent | None = None
    underline: bool = False
    bullet: bool = False
    page_num: int | None = None
    page_break: bool = False

    @classmethod
    def spacer(cls, page_num=None):
        """Returns the empty paragraph used to mark a page boundary."""
        return cls(runs=(StyleRun(text=""),), page_num=page_num, page_break=True)

    @property
    def text(self) -> str:
        """Returns the run texts joined by single spaces."""
        return " ".join(run.text for run in self.runs if run.text).strip()


@dataclass
class Document:
    """The ordered paragraph sequence handed to a document writer."""

    paragraphs: list = field(default_factory=list)
    source: str | None = None
    page_count: int = 0

    def extend(self, paragraphs):
        """Appends a page's paragraphs; earlier paragraphs are never revisited."""
        self.paragraphs.extend(paragraphs)

    @property
    def spacer_count(self) -> int:
        return sum(1 for p in self.paragraphs if p.page_break)

    def get_text(self):
        """Returns the plain text of all non-spacer paragraphs, one per line."""
        return "\n".join(p.text for p in self.paragraphs if not p.page_break)
