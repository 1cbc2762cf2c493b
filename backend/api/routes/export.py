"""
Export Route

Serializes (possibly edited) merged rows into an XLSX download.
"""

import asyncio

from fastapi import APIRouter, Query, Response

from backend.api.schemas import ErrorResponse, ExportRequest
from roster_merge.errors import MissingInputError
from roster_merge.export import XLSX_MEDIA_TYPE, ExportVariant, export_rows

router = APIRouter()

EXPORT_FILENAME = "merge.xlsx"


@router.post(
    "/export",
    response_class=Response,
    responses={
        200: {"content": {XLSX_MEDIA_TYPE: {}}},
        400: {"model": ErrorResponse},
    },
)
async def export(
    request: ExportRequest,
    variant: ExportVariant = Query(default=ExportVariant.MINIMAL),
) -> Response:
    """
    Export merged rows as XLSX.

    `minimal` writes 工作職稱, 工作年資, 提問內容, 姓名;
    `full` adds 日期, 主題 and 相似度.
    """
    if request.rows is None:
        raise MissingInputError("缺少 rows")

    rows = request.rows
    loop = asyncio.get_event_loop()
    content = await loop.run_in_executor(None, lambda: export_rows(rows, variant))
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
