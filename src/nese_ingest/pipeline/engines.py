"""
Parser engine loading.

Parsing libraries are imported lazily, the first time a file of their format
shows up, with a bounded wait instead of failing on the first ImportError.
A missing engine surfaces as DependencyUnavailable (an ExtractionFailed).
"""

from __future__ import annotations

import importlib
from types import ModuleType

from tenacity import RetryError, Retrying, retry_if_exception_type, stop_after_delay, wait_fixed

from nese_ingest.config import settings
from nese_ingest.errors import DependencyUnavailable
from nese_ingest.logging import log

# engine name -> importable module
ENGINES = {
    "pdf": "fitz",
    "word": "docx",
    "xlsx": "openpyxl",
    "xls": "xlrd",
    "image": "PIL.Image",
}

_POLL_SECONDS = 0.25


def require_engine(engine: str, filename: str, wait_seconds: float | None = None) -> ModuleType:
    """Return the module backing *engine*, or raise DependencyUnavailable."""
    module_name = ENGINES.get(engine, engine)
    deadline = settings.ingestion.dependency_wait_seconds if wait_seconds is None else wait_seconds

    retrying = Retrying(
        stop=stop_after_delay(deadline),
        wait=wait_fixed(_POLL_SECONDS),
        retry=retry_if_exception_type(ImportError),
        reraise=False,
    )
    try:
        return retrying(importlib.import_module, module_name)
    except RetryError as exc:
        log.error(
            "engines.unavailable",
            engine=engine,
            module=module_name,
            waited_seconds=deadline,
            error=str(exc.last_attempt.exception()),
        )
        raise DependencyUnavailable(filename, engine) from exc.last_attempt.exception()
