"""Document decoding and text normalization."""

from .pdf_extractor import extract_pdf_lines, extract_pdf_text
from .spreadsheet import read_spreadsheet
from .text import normalize_text, split_lines

__all__ = [
    "extract_pdf_lines",
    "extract_pdf_text",
    "normalize_text",
    "read_spreadsheet",
    "split_lines",
]
