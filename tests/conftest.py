import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

FILLER = "the quick brown fox jumps over the lazy dog"


def build_pdf(pages: list[list[str]]) -> bytes:
    """Render one PDF page per entry; an empty list gives a blank page.

    Streams are left uncompressed and dates fixed (creation == modification)
    so byte sizes and metadata are stable across runs.
    """
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter, pageCompression=0, invariant=1)
    for lines in pages:
        for row, line in enumerate(lines):
            c.drawString(72, 720 - 14 * row, line)
        c.showPage()
    c.save()
    return buf.getvalue()


def text_page(label: str, rows: int = 30) -> list[str]:
    return [f"{label} line {row:02d}: {FILLER}" for row in range(rows)]


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Single page with known text."""
    return build_pdf([["Hello PDF World"]])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    return build_pdf([["Page one content"], ["Page two content"]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """A valid PDF whose only page has no text."""
    return build_pdf([[]])


@pytest.fixture()
def clean_three_page_pdf_bytes() -> bytes:
    """Single revision, text on every page, equal creation and modification dates."""
    return build_pdf([text_page("Page 1"), text_page("Page 2"), text_page("Page 3")])


@pytest.fixture()
def edited_three_page_pdf_bytes() -> bytes:
    """Blank second page plus a second PDF header appended after the original body."""
    original = build_pdf([text_page("Page 1"), [], text_page("Page 3")])
    return original + b"\n%PDF-1.4\n%%EOF\n"


@pytest.fixture()
def forty_page_pdf_bytes() -> bytes:
    return build_pdf([text_page(f"Page {n}", rows=5) for n in range(1, 41)])
