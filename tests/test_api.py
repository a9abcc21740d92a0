import pytest

from pdocx_lib.api import (
    convert_pdf_to_docx,
    default_output_path,
    parse_page_selection,
    process_pdf,
    reconstruct_document,
    render_plain_text,
)
from pdocx_lib.config import PdocxConfig
from pdocx_lib.constants import LayoutConfig
from pdocx_lib.models import (
    Alignment,
    Document,
    PageContent,
    Paragraph,
    StyleRun,
    TextFragment,
)


@pytest.fixture
def pdf_path(tmp_path):
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF-1.4\n%%EOF")
    return str(path)


@pytest.fixture
def pages():
    return [
        PageContent(1, 612.0, (TextFragment("Report", 256, 720, width=100, height=20),)),
        PageContent(2, 612.0, (TextFragment("Body text", 72, 700, width=80),)),
    ]


@pytest.mark.parametrize(
    "pages_str, expected",
    [
        ("all", None),
        ("ALL", None),
        ("", None),
        ("1,3,5-7", {1, 3, 5, 6, 7}),
        (" 2 , 4-4 ", {2, 4}),
    ],
)
def test_parse_page_selection(pages_str, expected):
    assert parse_page_selection(pages_str) == expected


@pytest.mark.parametrize("pages_str", ["7-5", "0", "0-2", "one", "1-x"])
def test_parse_page_selection_rejects_bad_input(pages_str):
    with pytest.raises(ValueError):
        parse_page_selection(pages_str)


def test_default_output_path():
    assert default_output_path("/data/in/book.pdf") == "book.docx"
    assert default_output_path("book.pdf", ".extracted") == "book.extracted"


def test_reconstruct_document_accepts_either_config(pages):
    from_full = reconstruct_document(pages, PdocxConfig())
    from_layout = reconstruct_document(pages, LayoutConfig())
    assert from_full.paragraphs == from_layout.paragraphs
    assert from_full.spacer_count == 1


def test_process_pdf_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        process_pdf(str(tmp_path / "absent.pdf"))


def test_convert_pdf_to_docx(pdf_path, pages, tmp_path, mocker):
    extractor_cls = mocker.patch("pdocx_lib.api.FragmentExtractor")
    extractor_cls.return_value.extract.return_value = pages
    output = tmp_path / "out.docx"

    path, document = convert_pdf_to_docx(pdf_path, str(output), pages_str="1-2")

    extractor_cls.return_value.extract.assert_called_once_with(pages_to_process={1, 2})
    assert path == output
    assert output.exists()
    assert document.source == pdf_path
    assert document.get_text() == "Report\nBody text"
    assert document.paragraphs[0].alignment is Alignment.CENTER


def test_render_plain_text():
    document = Document(
        paragraphs=[
            Paragraph(runs=(StyleRun("Title"),), alignment=Alignment.CENTER, underline=True),
            Paragraph(runs=(StyleRun("• item"),), bullet=True),
            Paragraph.spacer(1),
            Paragraph(runs=(StyleRun("Plain"), StyleRun("bold", bold=True))),
        ]
    )
    assert render_plain_text(document) == (
        "[CENTER, UNDERLINE] Title\n"
        "[BULLET] • item\n"
        "--- Page Break ---\n"
        "Plain bold"
    )
