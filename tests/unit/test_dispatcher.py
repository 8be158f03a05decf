"""Unit tests for format dispatch, error wrapping and engine loading."""

from __future__ import annotations

import asyncio
from unittest.mock import patch

import pytest

from nese_ingest.errors import DependencyUnavailable, ExtractionFailed, UnsupportedFormat
from nese_ingest.pipeline.dispatcher import aextract_document, detect_format, extract_document
from nese_ingest.pipeline.engines import require_engine
from nese_ingest.schemas.document import ExtractionRequest, ExtractionResult, FileFormat


class TestDetectFormat:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("a.txt", FileFormat.TEXT),
            ("a.docx", FileFormat.WORD),
            ("a.xlsx", FileFormat.SPREADSHEET),
            ("a.xls", FileFormat.SPREADSHEET),
            ("a.pdf", FileFormat.PDF),
            ("INFORME.PDF", FileFormat.PDF),
            ("dir/sub/notes.Txt", FileFormat.TEXT),
        ],
    )
    def test_recognised(self, name, expected):
        assert detect_format(name) == expected

    @pytest.mark.parametrize("name", ["photo.jpg", "old.doc", "slides.pptx", "README", "archive.pdf.zip"])
    def test_unsupported(self, name):
        with pytest.raises(UnsupportedFormat) as exc_info:
            detect_format(name)
        assert exc_info.value.filename == name
        assert name in exc_info.value.user_message


class TestUnsupportedRegardlessOfContent:
    @pytest.mark.parametrize("content", [b"%PDF-1.7 fake", b"PK\x03\x04", b"plain words", b""])
    def test_request_rejected(self, content):
        with pytest.raises(UnsupportedFormat):
            ExtractionRequest.from_bytes("scan.png", content)

    def test_explicit_tag_does_not_bypass_extension(self):
        request = ExtractionRequest(filename="scan.png", content=b"%PDF", file_format=FileFormat.PDF)
        with pytest.raises(UnsupportedFormat, match="png"):
            extract_document(request)


class TestErrorWrapping:
    def test_parser_error_wrapped(self):
        request = ExtractionRequest.from_bytes("notes.txt", b"hello")
        with patch("nese_ingest.pipeline.dispatcher.extract_plain_text", side_effect=MemoryError("boom")):
            with pytest.raises(ExtractionFailed) as exc_info:
                extract_document(request)

        err = exc_info.value
        assert err.filename == "notes.txt"
        assert "boom" in err.user_message
        assert "Traceback" not in err.user_message
        assert isinstance(err.__cause__, MemoryError)

    def test_missing_engine_is_extraction_failed(self, monkeypatch):
        from nese_ingest.config import settings

        monkeypatch.setattr(settings.ingestion, "dependency_wait_seconds", 0.0)
        request = ExtractionRequest.from_bytes("informe.pdf", b"%PDF")
        with patch.dict("nese_ingest.pipeline.engines.ENGINES", {"pdf": "nese_ingest_no_such_engine"}):
            with pytest.raises(ExtractionFailed) as exc_info:
                extract_document(request)
        assert isinstance(exc_info.value, DependencyUnavailable)
        assert exc_info.value.engine == "pdf"


class TestEngines:
    def test_available_engine(self):
        fitz = require_engine("pdf", "x.pdf", wait_seconds=0)
        assert hasattr(fitz, "open")

    def test_bounded_wait_then_unavailable(self):
        with pytest.raises(DependencyUnavailable) as exc_info:
            require_engine("nese_ingest_no_such_engine", "x.pdf", wait_seconds=0.3)
        assert isinstance(exc_info.value.__cause__, ImportError)
        assert "nese_ingest_no_such_engine" in exc_info.value.user_message

    def test_engine_appearing_during_wait(self):
        calls = {"n": 0}

        def flaky_import(name):
            calls["n"] += 1
            if calls["n"] < 2:
                raise ImportError(name)
            return "module"

        with patch("nese_ingest.pipeline.engines.importlib.import_module", side_effect=flaky_import):
            assert require_engine("pdf", "x.pdf", wait_seconds=2) == "module"
        assert calls["n"] == 2


class TestAsyncVariant:
    def test_same_result_as_sync(self):
        request = ExtractionRequest.from_bytes("notes.txt", "Observació".encode())
        result = asyncio.run(aextract_document(request))
        assert result == extract_document(request)


class TestResultInvariant:
    def test_scan_without_images_rejected(self):
        with pytest.raises(ValueError):
            ExtractionResult(filename="a.pdf", file_format=FileFormat.PDF, is_scan=True)

    def test_images_without_scan_rejected(self):
        from nese_ingest.schemas.document import PageImage

        img = PageImage(page_number=1, data=b"\xff\xd8\xff", width=1, height=1)
        with pytest.raises(ValueError):
            ExtractionResult(filename="a.pdf", file_format=FileFormat.PDF, images=[img])
