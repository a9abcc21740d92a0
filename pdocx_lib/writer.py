# --- pdocx_lib/writer.py ---
"""
pdocx_lib/writer.py: Contains the DocxWriter, which serializes a reconstructed
Document to a .docx file using python-docx.
"""
import logging
from pathlib import Path

from docx import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_BREAK
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, Twips

from .constants import DEFAULT_WRITER_CONFIG
from .models import Alignment

log_writer = logging.getLogger("pdocx.writer")

ALIGNMENT_MAP = {
    Alignment.LEFT: WD_ALIGN_PARAGRAPH.LEFT,
    Alignment.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
    Alignment.RIGHT: WD_ALIGN_PARAGRAPH.RIGHT,
}

# Elements that must follow <w:pBdr> inside <w:pPr>.
_PBDR_SUCCESSORS = (
    "w:shd",
    "w:tabs",
    "w:suppressAutoHyphens",
    "w:kinsoku",
    "w:wordWrap",
    "w:overflowPunct",
    "w:topLinePunct",
    "w:autoSpaceDE",
    "w:autoSpaceDN",
    "w:bidi",
    "w:adjustRightInd",
    "w:snapToGrid",
    "w:spacing",
    "w:ind",
    "w:contextualSpacing",
    "w:mirrorIndents",
    "w:suppressOverlap",
    "w:jc",
    "w:textDirection",
    "w:textAlignment",
    "w:textboxTightWrap",
    "w:outlineLvl",
    "w:divId",
    "w:cnfStyle",
    "w:rPr",
    "w:sectPr",
    "w:pPrChange",
)


class DocxWriter:
    """
    Writes Paragraphs to a Word document.
    Spacing and indents are stored in twips and run sizes in half-points, so
    they map directly onto Twips() and Pt(size / 2). Spacer paragraphs become
    hard page breaks.
    """

    def __init__(self, config=None):
        self.config = config or DEFAULT_WRITER_CONFIG

    def write(self, document, output_path):
        """Builds and saves the .docx file. Returns the output Path."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        docx = self.build(document)
        docx.save(str(output_path))
        log_writer.info("DOCX saved to: '%s'", output_path)
        return output_path

    def build(self, document):
        """Returns an in-memory python-docx Document for `document`."""
        docx = DocxDocument()
        self._apply_page_setup(docx)
        for paragraph in document.paragraphs:
            if paragraph.page_break:
                self._add_page_break(docx)
            else:
                self._add_paragraph(docx, paragraph)
        log_writer.debug(
            "Built DOCX with %d paragraphs from '%s'.",
            len(docx.paragraphs),
            document.source or "<memory>",
        )
        return docx

    def _apply_page_setup(self, docx):
        cfg = self.config
        for section in docx.sections:
            section.top_margin = Twips(cfg.margin_top)
            section.right_margin = Twips(cfg.margin_right)
            section.bottom_margin = Twips(cfg.margin_bottom)
            section.left_margin = Twips(cfg.margin_left)

    def _add_page_break(self, docx):
        para = docx.add_paragraph()
        run = para.add_run()
        if self.config.page_break_spacers:
            run.add_break(WD_BREAK.PAGE)
        return para

    def _add_paragraph(self, docx, paragraph):
        para = docx.add_paragraph()
        para.alignment = ALIGNMENT_MAP[paragraph.alignment]
        fmt = para.paragraph_format
        fmt.space_before = Twips(paragraph.spacing_before)
        fmt.space_after = Twips(paragraph.spacing_after)
        if paragraph.indent:
            fmt.left_indent = Twips(paragraph.indent.left)
            fmt.first_line_indent = Twips(-paragraph.indent.hanging)

        for idx, style_run in enumerate(paragraph.runs):
            # Runs are split at style changes, which are also word boundaries.
            sep = " " if idx > 0 and not style_run.text[:1].isspace() else ""
            run = para.add_run(sep + style_run.text)
            run.bold = style_run.bold
            run.italic = style_run.italic
            if style_run.size_hint:
                run.font.size = Pt(style_run.size_hint / 2)

        if paragraph.underline:
            self._add_bottom_border(para)
        return para

    def _add_bottom_border(self, para):
        """Attaches a single bottom border to a paragraph."""
        cfg = self.config
        p_pr = para._p.get_or_add_pPr()
        p_bdr = OxmlElement("w:pBdr")
        bottom = OxmlElement("w:bottom")
        bottom.set(qn("w:val"), "single")
        bottom.set(qn("w:sz"), str(cfg.border_size))
        bottom.set(qn("w:space"), str(cfg.border_space))
        bottom.set(qn("w:color"), cfg.border_color)
        p_bdr.append(bottom)
        p_pr.insert_element_before(p_bdr, *_PBDR_SUCCESSORS)
