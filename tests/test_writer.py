import docx
import pytest
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.shared import Pt, Twips

from pdocx_lib.constants import WriterConfig
from pdocx_lib.models import Alignment, Document, Indent, Paragraph, StyleRun
from pdocx_lib.writer import DocxWriter


@pytest.fixture
def document():
    return Document(
        paragraphs=[
            Paragraph(
                runs=(StyleRun("Chapter One", bold=True, size_hint=36),),
                alignment=Alignment.CENTER,
                spacing_before=200,
                spacing_after=150,
                underline=True,
                page_num=1,
            ),
            Paragraph(
                runs=(
                    StyleRun("• Plain", size_hint=24),
                    StyleRun("slanted", italic=True, size_hint=24),
                ),
                spacing_before=80,
                spacing_after=80,
                indent=Indent(left=720, hanging=360),
                bullet=True,
                page_num=1,
            ),
            Paragraph.spacer(page_num=1),
            Paragraph(
                runs=(StyleRun("Signed", size_hint=24),),
                alignment=Alignment.RIGHT,
                spacing_before=80,
                spacing_after=80,
                page_num=2,
            ),
        ],
        source="book.pdf",
        page_count=2,
    )


def page_breaks(para):
    return para._p.xpath('.//w:br[@w:type="page"]')


def test_paragraph_formatting(document):
    heading, bullet, spacer, signed = DocxWriter().build(document).paragraphs

    assert heading.alignment == WD_ALIGN_PARAGRAPH.CENTER
    assert heading.paragraph_format.space_before == Twips(200)
    assert heading.paragraph_format.space_after == Twips(150)
    assert heading.paragraph_format.left_indent is None

    assert bullet.alignment == WD_ALIGN_PARAGRAPH.LEFT
    assert bullet.paragraph_format.left_indent == Twips(720)
    assert bullet.paragraph_format.first_line_indent == Twips(-360)

    assert signed.alignment == WD_ALIGN_PARAGRAPH.RIGHT
    assert not page_breaks(heading) and not page_breaks(signed)
    assert len(page_breaks(spacer)) == 1


def test_run_formatting(document):
    heading, bullet, _, _ = DocxWriter().build(document).paragraphs

    (title_run,) = heading.runs
    assert title_run.text == "Chapter One"
    assert title_run.bold is True
    assert title_run.font.size == Pt(18)

    assert [r.text for r in bullet.runs] == ["• Plain", " slanted"]
    assert [r.italic for r in bullet.runs] == [False, True]
    assert bullet.runs[0].font.size == Pt(12)


def test_underlined_paragraph_has_bottom_border(document):
    heading, bullet, _, _ = DocxWriter().build(document).paragraphs

    bottom = heading._p.pPr.find(qn("w:pBdr")).find(qn("w:bottom"))
    assert bottom.get(qn("w:val")) == "single"
    assert bottom.get(qn("w:sz")) == "6"
    assert bottom.get(qn("w:space")) == "1"
    assert bottom.get(qn("w:color")) == "auto"
    assert bullet._p.pPr.find(qn("w:pBdr")) is None


def test_page_margins():
    config = WriterConfig(margin_top=1440, margin_left=360)
    section = DocxWriter(config).build(Document()).sections[0]
    assert section.top_margin == Twips(1440)
    assert section.left_margin == Twips(360)
    assert section.right_margin == Twips(720)
    assert section.bottom_margin == Twips(720)


def test_spacers_can_stay_plain_paragraphs(document):
    config = WriterConfig(page_break_spacers=False)
    paragraphs = DocxWriter(config).build(document).paragraphs
    assert len(paragraphs) == 4
    assert not any(page_breaks(p) for p in paragraphs)


def test_write_creates_parent_directories(document, tmp_path):
    output = tmp_path / "out" / "book.docx"
    path = DocxWriter().write(document, output)

    assert path == output
    reopened = docx.Document(str(output))
    assert [p.text for p in reopened.paragraphs] == [
        "Chapter One",
        "• Plain slanted",
        "",
        "Signed",
    ]
