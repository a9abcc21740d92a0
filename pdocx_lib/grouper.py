# --- pdocx_lib/grouper.py ---
"""
pdocx_lib/grouper.py: Contains the FragmentGrouper, which turns a page's text
fragments into visual lines ordered top to bottom.
"""
import logging
from dataclasses import replace

from .constants import DEFAULT_FRAGMENT_HEIGHT, DEFAULT_FRAGMENT_WIDTH, DEFAULT_LAYOUT_CONFIG
from .models import Line, is_finite_number, round_half_up

log_group = logging.getLogger("pdocx.group")


class FragmentGrouper:
    """
    Buckets fragments by their rounded baseline and orders the resulting lines.
    Lines come out top of page first (descending y) with fragments sorted left
    to right. Grouping is exact on the rounded y value: fragments that round to
    different integers land in different lines even when they are closer than
    the configured line tolerance.
    """

    def __init__(self, config=None):
        self.config = config or DEFAULT_LAYOUT_CONFIG

    def group(self, fragments, page_num=None):
        """Groups fragments into lines. An empty input yields no lines."""
        buckets = {}
        dropped = 0
        for fragment in fragments:
            fragment = self._sanitize(fragment, page_num)
            if fragment is None:
                dropped += 1
                continue
            buckets.setdefault(round_half_up(fragment.y), []).append(fragment)

        lines = [
            Line(y=key, fragments=tuple(sorted(items, key=lambda f: f.x)))
            for key, items in sorted(buckets.items(), key=lambda kv: -kv[0])
        ]
        log_group.debug(
            "Page %s: grouped %d fragments into %d lines (%d dropped).",
            page_num if page_num is not None else "?",
            sum(len(line.fragments) for line in lines),
            len(lines),
            dropped,
        )
        self._report_close_lines(lines, page_num)
        return lines

    def _sanitize(self, fragment, page_num):
        """Trims text and repairs or rejects fragments with bad geometry."""
        text = (fragment.text or "").strip()
        if not text:
            return None
        if not (is_finite_number(fragment.x) and is_finite_number(fragment.y)):
            log_group.warning(
                "Page %s: dropping malformed fragment %r at (%r, %r).",
                page_num if page_num is not None else "?",
                text,
                fragment.x,
                fragment.y,
            )
            return None
        changes = {}
        if text != fragment.text:
            changes["text"] = text
        if not is_finite_number(fragment.height) or fragment.height == 0:
            changes["height"] = DEFAULT_FRAGMENT_HEIGHT
        if not is_finite_number(fragment.width):
            changes["width"] = DEFAULT_FRAGMENT_WIDTH
        return replace(fragment, **changes) if changes else fragment

    def _report_close_lines(self, lines, page_num):
        """Logs adjacent lines whose baselines fall within the line tolerance."""
        if not log_group.isEnabledFor(logging.DEBUG):
            return
        for upper, lower in zip(lines, lines[1:]):
            if upper.y - lower.y <= self.config.line_tolerance:
                log_group.debug(
                    "Page %s: lines at y=%d and y=%d are within tolerance "
                    "(%.1f) but kept apart: '%s' / '%s'",
                    page_num if page_num is not None else "?",
                    upper.y,
                    lower.y,
                    self.config.line_tolerance,
                    upper.text[:40],
                    lower.text[:40],
                )
