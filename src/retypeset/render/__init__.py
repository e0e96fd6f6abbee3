"""Output document generation."""

from .fonts import ResolvedFont, resolve_font
from .pdf_writer import PAGE_SIZES, write_pdf

__all__ = ["PAGE_SIZES", "ResolvedFont", "resolve_font", "write_pdf"]
