from .base import BaseExporter
from .registry import ExporterRegistry, UnknownFormatError
from .javascript import JavaScriptExporter
from .json_tree import JsonExporter
from .outline import TextOutlineExporter, outline_lines
from .pdf import PdfExporter

# Register built-in exporters
ExporterRegistry.register("js", JavaScriptExporter)
ExporterRegistry.register("json", JsonExporter)
ExporterRegistry.register("text", TextOutlineExporter)
ExporterRegistry.register("pdf", PdfExporter)

__all__ = [
    "BaseExporter",
    "ExporterRegistry",
    "UnknownFormatError",
    "outline_lines",
]
