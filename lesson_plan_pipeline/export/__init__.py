from .base import ExportArtifact, ExportError, Exporter
from .docx_exporter import DocxExporter, DocxWriter
from .pdf_exporter import PageRasterizer, PdfExporter, PlaywrightRasterizer

__all__ = [
    "ExportArtifact",
    "ExportError",
    "Exporter",
    "DocxExporter",
    "DocxWriter",
    "PageRasterizer",
    "PdfExporter",
    "PlaywrightRasterizer",
]
