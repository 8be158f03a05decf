"""
Root test configuration.

Fixture documents are built in memory so the suite needs no binary files:

make_pdf      →  PDF bytes, one page per entry; each entry is the page's text
                 ("" for a blank, scan-like page). Built with PyMuPDF.
make_docx     →  .docx bytes with paragraphs and an optional table.
make_xlsx     →  .xlsx bytes from an ordered {sheet name: rows} mapping.
FakeTranscriber → VisionTranscriber stand-in that records calls and replays
                 canned responses or raises.
"""

from __future__ import annotations

import io

import pytest

from nese_ingest.pipeline.transcriber import VisionTranscriber
from nese_ingest.schemas.document import PageImage

# ~420 chars of real prose per page, comfortably above every threshold
DENSE_TEXT = (
    "L'alumne presenta dificultats en la comprensio lectora i en el calcul mental. "
    "Les proves administrades mostren un percentil 12 en velocitat lectora i un "
    "percentil 20 en comprensio. La familia informa de bona adaptacio social. "
    "Es recomana suport dins l'aula ordinaria i adaptacio de les avaluacions escrites. "
    "El centre aplica mesures universals i addicionals des del curs anterior amb "
    "seguiment trimestral per part de l'EAP del sector."
)

SMALL_PAGE = (120, 160)   # points; keeps rasterizing blank scans cheap
A4 = (595, 842)


def _make_pdf(pages: list[str], size: tuple[int, int] = A4) -> bytes:
    import fitz

    doc = fitz.open()
    for text in pages:
        page = doc.new_page(width=size[0], height=size[1])
        if text:
            rect = fitz.Rect(36, 36, size[0] - 36, size[1] - 36)
            rc = page.insert_textbox(rect, text, fontsize=9, fontname="helv")
            assert rc >= 0, "fixture text does not fit the page"
    data = doc.tobytes()
    doc.close()
    return data


def _make_docx(paragraphs: list[str], table: list[list[str]] | None = None) -> bytes:
    import docx

    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    if table:
        t = document.add_table(rows=len(table), cols=len(table[0]))
        for r, row in enumerate(table):
            for c, value in enumerate(row):
                t.cell(r, c).text = value
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


def _make_xlsx(sheets: dict[str, list[list]]) -> bytes:
    from openpyxl import Workbook

    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(name)
        for row in rows:
            ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


class FakeTranscriber(VisionTranscriber):
    name = "fake"

    def __init__(self, responses: list[str | Exception] | None = None) -> None:
        self.responses = list(responses or ["TRANSCRIBED TEXT"])
        self.calls: list[tuple[list[PageImage], str]] = []

    async def transcribe(self, images: list[PageImage], instruction: str) -> str:
        self.calls.append((images, instruction))
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture()
def make_pdf():
    return _make_pdf


@pytest.fixture()
def make_docx():
    return _make_docx


@pytest.fixture()
def make_xlsx():
    return _make_xlsx


@pytest.fixture()
def scan_pdf() -> bytes:
    """Three blank (image-only stand-in) small pages."""
    return _make_pdf(["", "", ""], size=SMALL_PAGE)


@pytest.fixture()
def text_pdf() -> bytes:
    return _make_pdf([DENSE_TEXT, DENSE_TEXT])


@pytest.fixture()
def fake_transcriber():
    return FakeTranscriber
