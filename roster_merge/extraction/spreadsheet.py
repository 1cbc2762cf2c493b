"""CSV / XLSX decoding using pandas."""

import io
from pathlib import PurePath

import pandas as pd
import structlog

from roster_merge.errors import SpreadsheetExtractionError, UnsupportedFormatError

logger = structlog.get_logger(__name__)

SPREADSHEET_SUFFIXES = (".csv", ".xlsx")


def read_spreadsheet(content: bytes, filename: str) -> list[dict[str, str]]:
    """Read the first sheet of a CSV or XLSX file as string records.

    Every cell is read as text (no NaN, no type inference) so that the topic
    builder sees dates exactly as written.

    Args:
        content: Raw file bytes.
        filename: Original filename; its extension selects the reader.

    Returns:
        One dict per data row, keyed by stripped column names.

    Raises:
        UnsupportedFormatError: If the extension is not CSV or XLSX.
        SpreadsheetExtractionError: If pandas cannot read the file.
    """
    suffix = PurePath(filename).suffix.lower()
    if suffix not in SPREADSHEET_SUFFIXES:
        raise UnsupportedFormatError(f"不支援的試算表格式: {suffix or filename}")

    buffer = io.BytesIO(content)
    try:
        if suffix == ".csv":
            df = pd.read_csv(buffer, dtype=str, keep_default_na=False, encoding="utf-8-sig")
        else:
            df = pd.read_excel(buffer, sheet_name=0, dtype=str, keep_default_na=False)
    except Exception as e:
        logger.error("spreadsheet_read_failed", filename=filename, error=str(e))
        raise SpreadsheetExtractionError(f"CSV/XLSX 解析失敗: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]
    records = [
        {key: str(value).strip() for key, value in row.items()}
        for row in df.to_dict(orient="records")
    ]

    logger.info("spreadsheet_read", filename=filename, rows=len(records), columns=list(df.columns))
    return records
