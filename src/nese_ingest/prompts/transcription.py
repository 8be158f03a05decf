"""
Prompt templates for vision transcription of scanned pages.

Kept apart from the pipeline so wording can change without touching the
merge logic.
"""

TRANSCRIPTION_INSTRUCTION = """\
The attached images are consecutive pages of a scanned document about a
student (school report, psychological or medical assessment, test results).

Transcribe them literally:
1. Copy the text exactly as written. Do not summarise, translate or correct it.
2. Keep tables as tables: one row per line, cells separated by " | ". Preserve
   every score, percentile, date and numeric value exactly.
3. Mark institutional headers, letterheads and stamps as [HEADER: ...].
4. Start every page with a line "--- Page N ---", N being the image position
   starting at 1.
5. Write [illegible] for anything you cannot read. Never guess names or numbers.
6. Output only the transcription, with no introduction or closing remarks.
"""


def build_instruction(page_numbers: list[int], filename: str) -> str:
    pages = ", ".join(str(n) for n in page_numbers)
    return f"{TRANSCRIPTION_INSTRUCTION}\nDocument: {filename}\nPages attached: {pages}\n"
