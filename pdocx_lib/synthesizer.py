# --- pdocx_lib/synthesizer.py ---
"""
pdocx_lib/synthesizer.py: Contains the ParagraphSynthesizer, which turns the
ordered lines of a page into styled paragraphs.
"""
import logging
import re

from .constants import BULLET_GLYPHS, DEFAULT_LAYOUT_CONFIG, UNDERLINE_CHAR, UNDERLINE_DASHES
from .errors import MalformedFragmentError, ReconstructionError
from .models import Alignment, Indent, Paragraph, StyleRun, is_finite_number, round_half_up

log_synth = logging.getLogger("pdocx.synth")

BULLET_PATTERN = re.compile(rf"^([{re.escape(BULLET_GLYPHS)}])\s+(.+)")


class ParagraphSynthesizer:
    """
    Converts grouped lines into Paragraph objects, one per non-empty line.
    Each line is classified independently (alignment, emphasis, bullet), split
    into bold/italic runs, and may consume the line below it when that line is
    only an underline. Pages other than the last one end with a spacer
    paragraph that the writer turns into a page break.
    """

    def __init__(self, config=None):
        self.config = config or DEFAULT_LAYOUT_CONFIG

    def synthesize(self, lines, page_width, is_last_page, page_num=None):
        """Builds the paragraph sequence for a single page."""
        self._validate(lines, page_width, page_num)
        paragraphs, cursor = [], 0
        while cursor < len(lines):
            line = lines[cursor]
            if not line.fragments or not line.text:
                log_synth.debug("Skipping empty line at y=%d.", line.y)
                cursor += 1
                continue

            has_underline = self._next_line_is_underline(lines, cursor)
            paragraphs.append(
                self._build_paragraph(line, page_width, has_underline, page_num)
            )
            if has_underline:
                log_synth.debug(
                    "Line at y=%d consumed as underline of '%s'.",
                    lines[cursor + 1].y,
                    line.text[:40],
                )
                cursor += 2
            else:
                cursor += 1

        if not is_last_page:
            paragraphs.append(Paragraph.spacer(page_num))
        return paragraphs

    def _validate(self, lines, page_width, page_num):
        """Rejects input that the FragmentGrouper would never have produced."""
        if not is_finite_number(page_width):
            raise ReconstructionError(f"invalid page width {page_width!r}", page_num)
        for line in lines:
            for fragment in line.fragments:
                if not fragment.has_finite_geometry:
                    raise MalformedFragmentError(
                        f"fragment {fragment.text!r} reached synthesis with "
                        f"non-finite geometry",
                        page_num,
                    )

    def _next_line_is_underline(self, lines, index):
        """Checks if the line after `index` is an underline marker."""
        if index + 1 >= len(lines):
            return False
        return any(
            UNDERLINE_CHAR in f.text or f.text in UNDERLINE_DASHES
            for f in lines[index + 1].fragments
        )

    def _build_paragraph(self, line, page_width, has_underline, page_num):
        """Classifies a single line and emits its Paragraph."""
        cfg = self.config
        alignment = self._detect_alignment(line, page_width)
        is_large = line.avg_height > cfg.heading_min_height
        is_emphasized = is_large or line.all_bold or has_underline
        is_bullet = BULLET_PATTERN.match(line.text) is not None

        if is_emphasized:
            before, after = cfg.heading_spacing_before, cfg.heading_spacing_after
        else:
            before, after = cfg.body_spacing_before, cfg.body_spacing_after
        indent = (
            Indent(cfg.bullet_indent_left, cfg.bullet_indent_hanging) if is_bullet else None
        )

        log_synth.debug(
            "y=%d '%s': align=%s, avg_h=%.1f, emphasized=%s, bullet=%s, underline=%s",
            line.y,
            line.text[:40],
            alignment.value,
            line.avg_height,
            is_emphasized,
            is_bullet,
            has_underline,
        )
        return Paragraph(
            runs=self._split_runs(line),
            alignment=alignment,
            spacing_before=before,
            spacing_after=after,
            indent=indent,
            underline=has_underline,
            bullet=is_bullet,
            page_num=page_num,
        )

    def _detect_alignment(self, line, page_width):
        """Centered wins over right-aligned; anything else is left-aligned."""
        line_center = line.first_x + line.total_width / 2
        if abs(line_center - page_width / 2) < self.config.center_tolerance:
            return Alignment.CENTER
        if line.first_x > page_width * self.config.right_align_ratio:
            return Alignment.RIGHT
        return Alignment.LEFT

    def _split_runs(self, line):
        """Splits a line into StyleRuns at every bold/italic change."""
        size_hint = round_half_up(line.avg_height * self.config.size_hint_scale)
        first = line.fragments[0]
        runs, buf = [], ""
        bold, italic = first.is_bold, first.is_italic
        for idx, fragment in enumerate(line.fragments):
            if idx > 0 and (fragment.is_bold != bold or fragment.is_italic != italic):
                if buf.strip():
                    runs.append(StyleRun(buf, bold, italic, size_hint))
                buf, bold, italic = fragment.text, fragment.is_bold, fragment.is_italic
            else:
                sep = " " if idx > 0 and not fragment.text[:1].isspace() else ""
                buf += sep + fragment.text
        if buf.strip():
            runs.append(StyleRun(buf.strip(), bold or line.all_bold, italic, size_hint))
        return tuple(runs)
