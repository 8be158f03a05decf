"""
Simple CLI for running the ingestion pipeline locally.

Usage:
    nese-ingest extract path/to/informe.pdf --output result.json
    nese-ingest classify path/to/informe.pdf
    nese-ingest serve
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

console = Console(stderr=True)


def app() -> None:
    import argparse

    parser = argparse.ArgumentParser(
        prog="nese-ingest",
        description="Document ingestion and scan recovery for NESE reports",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # extract sub-command
    p_extract = sub.add_parser("extract", help="Extract text from a document")
    p_extract.add_argument("file", type=Path, help="Path to a .txt, .docx, .xlsx, .xls or .pdf file")
    p_extract.add_argument("--no-vision", action="store_true", help="Skip vision transcription of scans")
    p_extract.add_argument("--native-fallback", action="store_true",
                           help="Keep native text if vision transcription fails")
    p_extract.add_argument("--attempts", type=int, default=1, help="Vision transcription attempts")
    p_extract.add_argument("--output", type=Path, help="Write JSON output to this file ('-' for stdout)")
    p_extract.add_argument("--images-dir", type=Path, help="Save rendered scan pages here")

    # classify sub-command
    p_classify = sub.add_parser("classify", help="Show per-page text density and the scan verdict")
    p_classify.add_argument("file", type=Path, help="Path to a PDF")

    sub.add_parser("serve", help="Run the HTTP API")

    args = parser.parse_args()

    if args.command == "extract":
        _cmd_extract(args)
    elif args.command == "classify":
        _cmd_classify(args)
    elif args.command == "serve":
        _cmd_serve()


def _cmd_extract(args) -> None:
    from nese_ingest.errors import IngestionError
    from nese_ingest.logging import configure_logging
    from nese_ingest.pipeline.orchestrator import ingest
    from nese_ingest.schemas.document import ExtractionRequest

    configure_logging()

    try:
        request = ExtractionRequest.from_path(args.file)
        result = asyncio.run(ingest(
            request,
            vision=not args.no_vision,
            vision_attempts=args.attempts,
            native_fallback=args.native_fallback,
        ))
    except IngestionError as exc:
        console.print(f"[red]{exc.user_message}[/red]")
        sys.exit(1)
    except OSError as exc:
        console.print(f"[red]{args.file}: {exc.strerror or exc}[/red]")
        sys.exit(1)

    kind = "scan" if result.is_scan else "text"
    console.print(f"[bold]{result.filename}[/bold] — {result.file_format.value}, {kind}, {len(result.text)} chars")
    if result.is_scan:
        console.print(f"Rendered pages: {len(result.images)}  Transcribed: {result.transcribed}")

    if args.images_dir and result.images:
        args.images_dir.mkdir(parents=True, exist_ok=True)
        for img in result.images:
            (args.images_dir / f"{Path(result.filename).stem}_p{img.page_number:02d}.jpg").write_bytes(img.data)
        console.print(f"[green]Images written to {args.images_dir}[/green]")

    payload = json.dumps(result.model_dump(mode="json", exclude={"images"}), indent=2, ensure_ascii=False)
    if args.output is None:
        print(result.text)
    elif str(args.output) == "-":
        print(payload)
    else:
        args.output.write_text(payload, encoding="utf-8")
        console.print(f"[green]JSON written to {args.output}[/green]")


def _cmd_classify(args) -> None:
    from nese_ingest.errors import IngestionError
    from nese_ingest.logging import configure_logging
    from nese_ingest.pipeline.classifier import classify_pages
    from nese_ingest.pipeline.pdf import extract_pages, open_pdf

    configure_logging()

    try:
        with open_pdf(args.file.read_bytes(), args.file.name) as doc:
            samples = extract_pages(doc)
    except IngestionError as exc:
        console.print(f"[red]{exc.user_message}[/red]")
        sys.exit(1)
    except OSError as exc:
        console.print(f"[red]{args.file}: {exc.strerror or exc}[/red]")
        sys.exit(1)

    verdict = classify_pages(samples)

    table = Table(title=f"Text density — {args.file.name}")
    table.add_column("Page", justify="right")
    table.add_column("Chars", justify="right")
    table.add_column("Preview")
    for s in samples:
        table.add_row(str(s.page_number), str(s.char_count), s.text[:80] + ("…" if len(s.text) > 80 else ""))

    console.print(table)
    color = "yellow" if verdict.is_scan else "green"
    console.print(
        f"\nVerdict: [{color}]{'SCAN' if verdict.is_scan else 'TEXT'}[/{color}] "
        f"({verdict.reason}; {verdict.low_text_pages}/{verdict.total_pages} low-text pages, "
        f"{verdict.total_chars} chars)"
    )


def _cmd_serve() -> None:
    import uvicorn

    from nese_ingest.config import settings

    uvicorn.run(
        "nese_ingest.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
