from nese_ingest.schemas.document import (
    ExtractionRequest,
    ExtractionResult,
    FileFormat,
    PageImage,
    PageTextSample,
    ScanVerdict,
)

__all__ = [
    "ExtractionRequest",
    "ExtractionResult",
    "FileFormat",
    "PageImage",
    "PageTextSample",
    "ScanVerdict",
]
