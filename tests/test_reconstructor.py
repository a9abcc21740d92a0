import math
import threading

import pytest

from pdocx_lib.errors import ReconstructionCancelled
from pdocx_lib.models import PageContent, TextFragment
from pdocx_lib.reconstructor import DocumentReconstructor


def make_page(page_num, *texts, width=612.0):
    fragments = tuple(
        TextFragment(text, 72, 700 - 20 * i, font_name="Helvetica", width=100)
        for i, text in enumerate(texts)
    )
    return PageContent(page_num=page_num, width=width, fragments=fragments)


@pytest.fixture
def three_pages():
    return [
        make_page(1, "Intro", "First page body"),
        make_page(2, "Second page"),
        make_page(3, "Closing words", "The end"),
    ]


def test_spacers_separate_pages(three_pages):
    document = DocumentReconstructor().build_document(three_pages, source="book.pdf")
    kinds = [("|" if p.page_break else p.text) for p in document.paragraphs]
    assert kinds == [
        "Intro",
        "First page body",
        "|",
        "Second page",
        "|",
        "Closing words",
        "The end",
    ]
    assert document.spacer_count == 2
    assert document.page_count == 3
    assert document.source == "book.pdf"


def test_pages_are_processed_in_page_order(three_pages):
    document = DocumentReconstructor().build_document(list(reversed(three_pages)))
    assert [p.page_num for p in document.paragraphs if not p.page_break] == [1, 1, 2, 3, 3]
    assert not document.paragraphs[-1].page_break


def test_no_pages_yields_an_empty_document():
    document = DocumentReconstructor().build_document([])
    assert document.paragraphs == []
    assert document.page_count == 0


def test_blank_page_contributes_only_its_spacer():
    pages = [make_page(1, "   "), make_page(2, "Text")]
    document = DocumentReconstructor().build_document(pages)
    assert [p.page_break for p in document.paragraphs] == [True, False]


def test_parallel_grouping_matches_sequential(three_pages):
    pages = three_pages + [make_page(n, f"Page {n}", "more") for n in range(4, 12)]
    sequential = DocumentReconstructor(workers=1).build_document(pages)
    parallel = DocumentReconstructor(workers=4).build_document(pages)
    assert parallel.paragraphs == sequential.paragraphs


def test_malformed_fragment_is_dropped_and_page_survives():
    page = PageContent(
        page_num=1,
        width=612.0,
        fragments=(
            TextFragment("broken", math.inf, 700),
            TextFragment("intact", 72, 680, width=40),
        ),
    )
    document = DocumentReconstructor().build_document([page])
    assert [p.text for p in document.paragraphs] == ["intact"]


@pytest.mark.parametrize("workers", [1, 3])
def test_cancellation_before_start(three_pages, workers):
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(ReconstructionCancelled) as exc_info:
        DocumentReconstructor(workers=workers).build_document(
            three_pages, cancel_event=cancel
        )
    assert exc_info.value.page_num == 1


def test_cancellation_between_pages(three_pages, mocker):
    cancel = threading.Event()
    reconstructor = DocumentReconstructor()
    synthesize = reconstructor.synthesizer.synthesize

    def synthesize_then_cancel(*args, **kwargs):
        cancel.set()
        return synthesize(*args, **kwargs)

    mocker.patch.object(
        reconstructor.synthesizer, "synthesize", side_effect=synthesize_then_cancel
    )
    with pytest.raises(ReconstructionCancelled) as exc_info:
        reconstructor.build_document(three_pages, cancel_event=cancel)
    assert exc_info.value.page_num == 2
    assert str(exc_info.value).startswith("Page 2: cancelled")


def test_parallel_grouping_checks_cancellation_before_grouping(three_pages, mocker):
    cancel = threading.Event()
    cancel.set()
    reconstructor = DocumentReconstructor(workers=3)
    group = mocker.patch.object(reconstructor.grouper, "group", return_value=[])

    with pytest.raises(ReconstructionCancelled) as exc_info:
        reconstructor.build_document(three_pages, cancel_event=cancel)

    assert exc_info.value.page_num == 1
    group.assert_not_called()
