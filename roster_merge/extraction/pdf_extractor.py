"""PDF text extraction using pdfplumber."""

import io
from pathlib import Path

import pdfplumber
import structlog

from roster_merge.errors import PDFExtractionError

from .text import normalize_text, split_lines

logger = structlog.get_logger(__name__)

PDF_MAGIC = b"%PDF"

PdfSource = bytes | str | Path


def _open(source: PdfSource):
    if isinstance(source, bytes):
        return pdfplumber.open(io.BytesIO(source))

    path = Path(source)
    if not path.exists():
        raise PDFExtractionError(f"PDF file not found: {path}")
    return pdfplumber.open(path)


def extract_pdf_text(source: PdfSource) -> str:
    """Extract the plain text of every page, pages separated by newlines.

    Args:
        source: Raw PDF bytes or a path to a PDF file.

    Returns:
        Concatenated page text.

    Raises:
        PDFExtractionError: If the document cannot be decoded.
    """
    pages: list[str] = []
    try:
        with _open(source) as pdf:
            for page in pdf.pages:
                pages.append(page.extract_text() or "")
    except PDFExtractionError:
        raise
    except Exception as e:
        logger.error("pdf_extraction_failed", error=str(e))
        raise PDFExtractionError(f"PDF 解析失敗: {e}") from e

    logger.info("pdf_text_extracted", pages=len(pages), chars=sum(len(p) for p in pages))
    return "\n".join(pages)


def extract_pdf_lines(source: PdfSource, use_tables: bool = True) -> list[str]:
    """Extract normalized text lines, one per visual row.

    Pages that contain ruled tables contribute one line per table row (cells
    joined by a space), which keeps a roster row together even when the
    flattened page text would wrap it. Other pages contribute their text
    lines.

    Args:
        source: Raw PDF bytes or a path to a PDF file.
        use_tables: Prefer table rows on pages where pdfplumber finds tables.

    Returns:
        Ordered list of normalized, non-empty lines.

    Raises:
        PDFExtractionError: If the document cannot be decoded.
    """
    lines: list[str] = []
    table_pages = 0

    try:
        with _open(source) as pdf:
            for page_num, page in enumerate(pdf.pages, start=1):
                tables = page.extract_tables() if use_tables else []
                if tables:
                    table_pages += 1
                    for table in tables:
                        for row in table:
                            line = normalize_text(" ".join(cell or "" for cell in row))
                            if line:
                                lines.append(line)
                else:
                    lines.extend(split_lines(page.extract_text() or ""))

                logger.debug("pdf_page_extracted", page=page_num, tables=len(tables))
    except PDFExtractionError:
        raise
    except Exception as e:
        logger.error("pdf_extraction_failed", error=str(e))
        raise PDFExtractionError(f"PDF 解析失敗: {e}") from e

    logger.info("pdf_lines_extracted", lines=len(lines), table_pages=table_pages)
    return lines
