import math

import pytest

from pdocx_lib.errors import MalformedFragmentError
from pdocx_lib.models import (
    Document,
    Line,
    Paragraph,
    StyleRun,
    TextFragment,
    is_finite_number,
    round_half_up,
)


@pytest.mark.parametrize(
    "value, expected",
    [(2.5, 3), (2.49, 2), (-2.5, -2), (-2.51, -3), (700.0, 700), (0.5, 1)],
)
def test_round_half_up_rounds_halves_towards_positive_infinity(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize("value", [None, True, "12", math.nan, math.inf, -math.inf])
def test_is_finite_number_rejects_non_numbers(value):
    assert not is_finite_number(value)


def test_create_applies_default_height_and_width():
    fragment = TextFragment.create("Hello", 72, 700)
    assert fragment.height == 12.0
    assert fragment.width == 0.0
    assert TextFragment.create("Hello", 72, 700, height=0).height == 12.0
    assert TextFragment.create("Hello", 72, 700, height=math.nan).height == 12.0
    assert TextFragment.create("Hello", 72, 700, width=math.inf).width == 0.0


def test_create_rejects_missing_coordinates_with_page_number():
    with pytest.raises(MalformedFragmentError) as exc_info:
        TextFragment.create("Hello", None, 700, page_num=4)
    assert exc_info.value.page_num == 4
    assert str(exc_info.value).startswith("Page 4: malformed fragment:")


def test_font_name_keywords_drive_bold_and_italic():
    assert TextFragment("a", 0, 0, font_name="Arial-BoldMT").is_bold
    assert TextFragment("a", 0, 0, font_name="Helvetica-Black").is_bold
    assert TextFragment("a", 0, 0, font_name="Times-Oblique").is_italic
    assert TextFragment("a", 0, 0, font_name="ABCDEF+Garamond-Italic").is_italic
    plain = TextFragment("a", 0, 0, font_name="Helvetica")
    assert not plain.is_bold and not plain.is_italic


def test_line_metrics():
    line = Line(
        y=700,
        fragments=(
            TextFragment("Hello", 100, 700, "Arial-Bold", height=10, width=30),
            TextFragment("world", 140, 700, "Arial-Bold", height=14, width=40),
        ),
    )
    assert line.text == "Hello world"
    assert line.avg_height == 12
    assert line.first_x == 100
    assert line.total_width == 80
    assert line.all_bold


def test_spacer_paragraph_is_an_empty_page_break():
    spacer = Paragraph.spacer(page_num=2)
    assert spacer.page_break
    assert spacer.text == ""
    assert spacer.runs == (StyleRun(text=""),)


def test_document_counts_spacers_and_skips_them_in_text():
    doc = Document()
    doc.extend([Paragraph(runs=(StyleRun("One"),)), Paragraph.spacer(1)])
    doc.extend([Paragraph(runs=(StyleRun("Two"), StyleRun("parts", bold=True)))])
    assert doc.spacer_count == 1
    assert doc.get_text() == "One\nTwo parts"
