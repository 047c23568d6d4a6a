"""Export functionality for quote data."""

from .exporter import ExportError, ExportFormat, ExportResult, QuoteExporter

__all__ = [
    "ExportError",
    "ExportFormat",
    "ExportResult",
    "QuoteExporter",
]
