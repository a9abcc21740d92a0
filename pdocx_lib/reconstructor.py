# --- pdocx_lib/reconstructor.py ---
"""
pdocx_lib/reconstructor.py: Contains the DocumentReconstructor, which walks
extracted pages through grouping and synthesis to build the final Document.
"""
import logging
from concurrent.futures import ThreadPoolExecutor

from .constants import DEFAULT_LAYOUT_CONFIG
from .errors import ReconstructionCancelled
from .grouper import FragmentGrouper
from .models import Document
from .synthesizer import ParagraphSynthesizer

log_reconstruct = logging.getLogger("pdocx.reconstruct")


class DocumentReconstructor:
    """
    Runs every page through the FragmentGrouper and ParagraphSynthesizer.
    Grouping may fan out over a thread pool (`workers` > 1); synthesis always
    runs one page at a time in ascending page order, so the output sequence is
    only ever appended to by the page currently being synthesized.
    """

    def __init__(self, config=None, workers=1):
        self.config = config or DEFAULT_LAYOUT_CONFIG
        self.workers = max(1, int(workers or 1))
        self.grouper = FragmentGrouper(self.config)
        self.synthesizer = ParagraphSynthesizer(self.config)

    def build_document(self, pages, source=None, cancel_event=None):
        """Builds a Document from a sequence of PageContent objects."""
        pages = sorted(pages, key=lambda p: p.page_num)
        log_reconstruct.info(
            "--- Stage 2: Reconstructing %d page(s) with %d worker(s) ---",
            len(pages),
            self.workers,
        )
        document = Document(source=source, page_count=len(pages))
        if not pages:
            return document

        for idx, (page, lines) in enumerate(self._grouped_pages(pages, cancel_event)):
            self._check_cancelled(cancel_event, page.page_num)
            is_last_page = idx == len(pages) - 1
            paragraphs = self.synthesizer.synthesize(
                lines, page.width, is_last_page, page_num=page.page_num
            )
            log_reconstruct.debug(
                "Page %d: %d lines -> %d paragraphs.",
                page.page_num,
                len(lines),
                len(paragraphs),
            )
            document.extend(paragraphs)

        log_reconstruct.info(
            "Reconstructed %d paragraphs (%d page breaks).",
            len(document.paragraphs),
            document.spacer_count,
        )
        return document

    def _grouped_pages(self, pages, cancel_event):
        """Yields (page, lines) pairs in page order."""

        def group_page(page):
            self._check_cancelled(cancel_event, page.page_num)
            return self.grouper.group(page.fragments, page.page_num)

        if self.workers == 1:
            for page in pages:
                yield page, group_page(page)
            return

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            grouped = executor.map(group_page, pages)
            try:
                yield from zip(pages, grouped)
            finally:
                # Drop pending groupings if the caller stops early.
                executor.shutdown(wait=False, cancel_futures=True)

    def _check_cancelled(self, cancel_event, page_num):
        if cancel_event is not None and cancel_event.is_set():
            log_reconstruct.warning("Cancellation requested before page %d.", page_num)
            raise ReconstructionCancelled("processing cancelled by caller", page_num)
