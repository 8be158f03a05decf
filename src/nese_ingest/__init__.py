"""Document ingestion and scan recovery for NESE report drafting."""

__version__ = "0.1.0"
