# --- pdocx_lib/api.py ---
"""
pdocx_lib/api.py: High-level entry points that chain extraction, layout
reconstruction and DOCX writing.
"""
import logging
import os

from .config import PdocxConfig
from .extractor import FragmentExtractor
from .models import Alignment, Document
from .reconstructor import DocumentReconstructor
from .writer import DocxWriter

log = logging.getLogger("pdocx.api")


def parse_page_selection(pages_str: str) -> set | None:
    """Parses a page selection string (e.g., '1,3,5-7') into a set of integers."""
    if not pages_str or pages_str.lower() == "all":
        return None
    pages = set()
    for p in pages_str.split(","):
        part = p.strip()
        if not part:
            continue
        if "-" in part:
            s, e = map(int, part.split("-"))
            if s > e:
                raise ValueError(f"Invalid page range: {part}")
            pages.update(range(s, e + 1))
        else:
            pages.add(int(part))
    if any(p < 1 for p in pages):
        raise ValueError(f"Page numbers start at 1: {pages_str}")
    return pages


def default_output_path(pdf_path: str, suffix: str = ".docx") -> str:
    """Derives an output file name from the input PDF name."""
    pdf_base = os.path.splitext(os.path.basename(pdf_path))[0]
    return f"{pdf_base}{suffix}"


def reconstruct_document(
    pages, config=None, workers=1, cancel_event=None, source=None
) -> Document:
    """Groups and synthesizes already-extracted pages into a Document."""
    layout = config.layout if isinstance(config, PdocxConfig) else config
    reconstructor = DocumentReconstructor(layout, workers=workers)
    return reconstructor.build_document(pages, source=source, cancel_event=cancel_event)


def process_pdf(
    pdf_path: str,
    config: PdocxConfig | None = None,
    pages_str: str = "all",
    workers: int = 1,
    cancel_event=None,
) -> Document:
    """
    Extracts and reconstructs a PDF file into a Document.
    Raises ReconstructionError subclasses on failure; no partial document is
    ever returned.
    """
    if not os.path.exists(pdf_path):
        raise FileNotFoundError(f"PDF file not found: {pdf_path}")
    config = config or PdocxConfig()
    extractor = FragmentExtractor(pdf_path, config.layout)
    pages = extractor.extract(pages_to_process=parse_page_selection(pages_str))
    if not pages:
        log.warning("No pages selected from %s.", pdf_path)
    return reconstruct_document(
        pages, config, workers=workers, cancel_event=cancel_event, source=pdf_path
    )


def convert_pdf_to_docx(
    pdf_path: str,
    output_path: str | None = None,
    config: PdocxConfig | None = None,
    pages_str: str = "all",
    workers: int = 1,
    cancel_event=None,
):
    """Converts a PDF file to .docx. Returns (output Path, Document)."""
    config = config or PdocxConfig()
    document = process_pdf(
        pdf_path, config, pages_str=pages_str, workers=workers, cancel_event=cancel_event
    )
    output_path = output_path or default_output_path(pdf_path)
    path = DocxWriter(config.writer).write(document, output_path)
    return path, document


def render_plain_text(document: Document) -> str:
    """Renders a Document as annotated plain text, one paragraph per line."""
    out = []
    for p in document.paragraphs:
        if p.page_break:
            out.append("--- Page Break ---")
            continue
        tags = []
        if p.alignment is not Alignment.LEFT:
            tags.append(p.alignment.value.upper())
        if p.bullet:
            tags.append("BULLET")
        if p.underline:
            tags.append("UNDERLINE")
        header = f"[{', '.join(tags)}] " if tags else ""
        out.append(f"{header}{p.text}")
    return "\n".join(out)
