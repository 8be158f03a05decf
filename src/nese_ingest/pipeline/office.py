"""
Text, spreadsheet and word-processor extractors.

Thin adapters over the parsing libraries: each returns plain Python values
(str, list[Sheet]) so nothing downstream touches library objects.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field

from nese_ingest.config import settings
from nese_ingest.logging import log
from nese_ingest.pipeline.engines import require_engine


@dataclass
class Sheet:
    name: str
    rows: list[list[str]] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------

def extract_plain_text(data: bytes) -> str:
    return data.decode("utf-8-sig", errors="replace")


# ---------------------------------------------------------------------------
# Spreadsheets
# ---------------------------------------------------------------------------

def extract_sheets(data: bytes, extension: str, filename: str = "workbook") -> list[Sheet]:
    """Read every sheet of an .xlsx / .xls workbook, in workbook order."""
    if extension == ".xls":
        sheets = _read_xls(data, filename)
    else:
        sheets = _read_xlsx(data, filename)
    log.debug("office.sheets", sheets=[s.name for s in sheets], rows=[len(s.rows) for s in sheets])
    return sheets


def render_sheets(sheets: list[Sheet], label: str | None = None) -> str:
    label = label or settings.sheet_label
    blocks = []
    for sheet in sheets:
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerows(_trim_rows([list(r) for r in sheet.rows]))
        body = buf.getvalue().rstrip("\n")
        header = f"--- {label}: {sheet.name} ---"
        blocks.append(f"{header}\n{body}" if body else header)
    return "\n\n".join(blocks)


def _read_xlsx(data: bytes, filename: str) -> list[Sheet]:
    openpyxl = require_engine("xlsx", filename)
    workbook = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    sheets = []
    try:
        for ws in workbook.worksheets:
            rows = [[_cell_text(v) for v in row] for row in ws.iter_rows(values_only=True)]
            sheets.append(Sheet(name=ws.title, rows=_trim_rows(rows)))
        return sheets
    finally:
        workbook.close()


def _read_xls(data: bytes, filename: str) -> list[Sheet]:
    xlrd = require_engine("xls", filename)
    book = xlrd.open_workbook(file_contents=data)
    sheets = []
    for ws in book.sheets():
        rows = [[_cell_text(v) for v in ws.row_values(r)] for r in range(ws.nrows)]
        sheets.append(Sheet(name=ws.name, rows=_trim_rows(rows)))
    return sheets


def _cell_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _trim_rows(rows: list[list[str]]) -> list[list[str]]:
    """Drop trailing blank rows and pad the rest to a rectangular grid."""
    while rows and not any(cell.strip() for cell in rows[-1]):
        rows.pop()
    width = max((len(r) for r in rows), default=0)
    return [r + [""] * (width - len(r)) for r in rows]


# ---------------------------------------------------------------------------
# Word-processor documents
# ---------------------------------------------------------------------------

def extract_word_text(data: bytes, filename: str = "document.docx") -> str:
    """Raw paragraph text of a .docx; tables flattened one row per line."""
    docx = require_engine("word", filename)
    from docx.table import Table

    document = docx.Document(io.BytesIO(data))
    parts: list[str] = []
    for block in document.iter_inner_content():
        if isinstance(block, Table):
            rows = ["\t".join(cell.text.strip() for cell in row.cells) for row in block.rows]
            text = "\n".join(r for r in rows if r.strip())
        else:
            text = block.text.strip()
        if text:
            parts.append(text)
    return "\n\n".join(parts)
