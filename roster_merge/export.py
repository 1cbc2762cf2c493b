"""Spreadsheet export of merged rows."""

import io
from enum import Enum
from typing import Iterable

import pandas as pd
import structlog

from roster_merge.models import MergedRow

logger = structlog.get_logger(__name__)

SHEET_NAME = "整合結果"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ExportVariant(str, Enum):
    """Column layouts for the exported sheet."""

    MINIMAL = "minimal"
    FULL = "full"


# (header, MergedRow field) in output order
COLUMNS: dict[ExportVariant, list[tuple[str, str]]] = {
    ExportVariant.MINIMAL: [
        ("工作職稱", "title"),
        ("工作年資", "seniority"),
        ("提問內容", "question"),
        ("姓名", "name"),
    ],
    ExportVariant.FULL: [
        ("姓名", "name"),
        ("工作職稱", "title"),
        ("工作年資", "seniority"),
        ("提問內容", "question"),
        ("日期", "date"),
        ("主題", "topic"),
        ("相似度", "match_score"),
    ],
}


def rows_to_frame(
    rows: Iterable[MergedRow],
    variant: ExportVariant = ExportVariant.MINIMAL,
) -> pd.DataFrame:
    """Lay merged rows out in the variant's fixed column order."""
    columns = COLUMNS[ExportVariant(variant)]
    data = [[getattr(row, field) for _, field in columns] for row in rows]
    return pd.DataFrame(data, columns=[header for header, _ in columns])


def export_rows(
    rows: Iterable[MergedRow],
    variant: ExportVariant = ExportVariant.MINIMAL,
) -> bytes:
    """Serialize merged rows to an XLSX workbook.

    Args:
        rows: Merged rows, possibly edited by a reviewer.
        variant: ``minimal`` (title, seniority, question, name) or ``full``.

    Returns:
        XLSX file content.
    """
    df = rows_to_frame(rows, variant)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)

    content = buffer.getvalue()
    logger.info("rows_exported", rows=len(df), variant=ExportVariant(variant).value, bytes=len(content))
    return content
