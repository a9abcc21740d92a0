# --- pdocx_lib/constants.py ---
"""
pdocx_lib/constants.py: Tunable thresholds for layout reconstruction and DOCX
output, grouped into immutable configuration records.
"""
from dataclasses import dataclass

# --- FONT NAME KEYWORDS ---
BOLD_KEYWORDS = ("bold", "black", "heavy")
ITALIC_KEYWORDS = ("italic", "oblique")

# --- GLYPHS ---
BULLET_GLYPHS = "•●○■▪▫–—-*"
UNDERLINE_DASHES = ("—", "–")
UNDERLINE_CHAR = "_"

DEFAULT_FRAGMENT_HEIGHT = 12.0
DEFAULT_FRAGMENT_WIDTH = 0.0


@dataclass(frozen=True)
class LayoutConfig:
    """
    Thresholds used by the FragmentGrouper and ParagraphSynthesizer.
    Distances are in page units (points); spacing and indents are in twips.
    """

    line_tolerance: float = 5.0
    center_tolerance: float = 50.0
    right_align_ratio: float = 0.6
    heading_min_height: float = 16.0
    heading_spacing_before: int = 200
    heading_spacing_after: int = 150
    body_spacing_before: int = 80
    body_spacing_after: int = 80
    bullet_indent_left: int = 720
    bullet_indent_hanging: int = 360
    size_hint_scale: float = 2.0
    fragment_gap_ratio: float = 1.0

    def __post_init__(self):
        if self.center_tolerance < 0 or self.line_tolerance < 0:
            raise ValueError("Tolerances must not be negative.")
        if not 0 < self.right_align_ratio <= 1:
            raise ValueError(
                f"right_align_ratio must be in (0, 1], got {self.right_align_ratio}"
            )
        if self.size_hint_scale <= 0:
            raise ValueError("size_hint_scale must be positive.")


@dataclass(frozen=True)
class WriterConfig:
    """Page setup for the DOCX writer, in twips."""

    margin_top: int = 720
    margin_right: int = 720
    margin_bottom: int = 720
    margin_left: int = 720
    border_size: int = 6
    border_space: int = 1
    border_color: str = "auto"
    page_break_spacers: bool = True


DEFAULT_LAYOUT_CONFIG = LayoutConfig()
DEFAULT_WRITER_CONFIG = WriterConfig()
