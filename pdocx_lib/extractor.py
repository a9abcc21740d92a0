# --- pdocx_lib/extractor.py ---
"""
pdocx_lib/extractor.py: Contains the FragmentExtractor, which reads a PDF with
pdfminer.six and reports every page's text as positioned fragments.
"""
import logging
import os

from pdfminer.high_level import extract_pages
from pdfminer.layout import LAParams, LTAnno, LTChar, LTTextLine

from .constants import DEFAULT_LAYOUT_CONFIG
from .errors import ExtractionError, MalformedFragmentError
from .models import PageContent, TextFragment

log_extract = logging.getLogger("pdocx.extract")


class FragmentExtractor:
    """
    Extracts positioned text fragments from every page of a PDF file.
    A fragment is a stretch of characters on one text line that shares a font
    and has no horizontal gap wider than `fragment_gap_ratio` times the font
    size, which is roughly what a PDF renderer reports as one text item.
    Args:
        pdf_path (str): The file path to the PDF.
        config (LayoutConfig): Thresholds; only `fragment_gap_ratio` is used here.
    """

    def __init__(self, pdf_path, config=None):
        self.pdf_path = pdf_path
        self.config = config or DEFAULT_LAYOUT_CONFIG
        if not os.path.exists(self.pdf_path):
            raise FileNotFoundError(f"PDF file not found: {self.pdf_path}")

    def extract(self, pages_to_process=None):
        """
        Reads all selected pages and returns their PageContent, in page order.
        Unselected pages are never laid out. Any failure while parsing a
        selected page aborts the whole extraction.
        """
        log_extract.info("--- Stage 1: Extracting Text Fragments ---")
        selected = sorted(pages_to_process) if pages_to_process else None
        page_layouts = iter(
            extract_pages(
                self.pdf_path,
                page_numbers={p - 1 for p in selected} if selected else None,
                laparams=LAParams(all_texts=True),
            )
        )
        pages = []
        while selected is None or len(pages) < len(selected):
            # The layout device numbers pages in the order it receives them.
            page_num = selected[len(pages)] if selected else len(pages) + 1
            try:
                layout = next(page_layouts)
            except StopIteration:
                break
            except Exception as e:
                raise ExtractionError(str(e) or type(e).__name__, page_num) from e

            try:
                fragments = self.extract_page_fragments(layout, page_num)
            except Exception as e:
                raise ExtractionError(str(e) or type(e).__name__, page_num) from e

            log_extract.info(
                "Page %d: %d fragments (width %.1f).",
                page_num,
                len(fragments),
                layout.width,
            )
            pages.append(PageContent(page_num, layout.width, tuple(fragments)))

        if selected and len(pages) < len(selected):
            log_extract.warning(
                "Pages %s are beyond the end of the document.",
                ",".join(str(p) for p in selected[len(pages):]),
            )
        return pages

    def extract_page_fragments(self, layout, page_num=None):
        """
        Returns the fragments of every text line on a page layout, including
        lines drawn inside form XObjects (LTFigure).
        """
        page_num = layout.pageid if page_num is None else page_num
        fragments = []
        for line in self._find_elements_by_type(layout, LTTextLine):
            fragments.extend(self._fragments_from_line(line, page_num))
        return fragments

    def _fragments_from_line(self, line, page_num):
        """Splits a text line into fragments at font changes and wide gaps."""
        fragments, chars, parts = [], [], []
        for obj in line:
            if isinstance(obj, LTAnno):
                if chars:
                    parts.append(obj.get_text())
                continue
            if not isinstance(obj, LTChar):
                continue
            if chars and self._starts_new_fragment(chars[-1], obj):
                fragment = self._make_fragment(chars, parts, page_num)
                if fragment:
                    fragments.append(fragment)
                chars, parts = [], []
            chars.append(obj)
            parts.append(obj.get_text())
        if chars:
            fragment = self._make_fragment(chars, parts, page_num)
            if fragment:
                fragments.append(fragment)
        return fragments

    def _starts_new_fragment(self, prev, char):
        if char.fontname != prev.fontname:
            return True
        gap_thresh = max(prev.size, char.size) * self.config.fragment_gap_ratio
        return char.x0 - prev.x1 > gap_thresh

    def _make_fragment(self, chars, parts, page_num):
        """Builds a TextFragment, dropping it if its geometry is unusable."""
        first, last = chars[0], chars[-1]
        matrix = getattr(first, "matrix", None)
        baseline = matrix[5] if matrix else first.y0
        try:
            return TextFragment.create(
                text="".join(parts),
                x=first.x0,
                y=baseline,
                font_name=first.fontname,
                height=first.size,
                width=last.x1 - first.x0,
                page_num=page_num,
            )
        except MalformedFragmentError as e:
            log_extract.warning("%s. Dropping fragment.", e)
            return None

    def _find_elements_by_type(self, obj, t):
        """Recursively finds all layout elements of a specific type."""
        e = []
        if isinstance(obj, t):
            e.append(obj)
        if hasattr(obj, "_objs"):
            for child in obj:
                e.extend(self._find_elements_by_type(child, t))
        return e
