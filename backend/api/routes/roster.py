"""
Roster Route

Parses an uploaded roster PDF into name / title / seniority rows.
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, File, UploadFile

from backend.api.schemas import ErrorResponse, RosterResponse
from backend.services.uploads import read_upload
from roster_merge.pipeline import parse_roster_file

router = APIRouter()


@router.post(
    "/parse-roster",
    response_model=RosterResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def parse_roster(file: Optional[UploadFile] = File(None)) -> RosterResponse:
    """
    Parse a roster PDF.

    Returns 422 when the document decodes but no row matches the layout
    heuristics, so the user can check the PDF formatting.
    """
    content, filename = await read_upload(file)

    # pdfplumber is sync, so run in executor
    loop = asyncio.get_event_loop()
    rows = await loop.run_in_executor(None, lambda: parse_roster_file(content, filename))
    return RosterResponse(rows=rows, count=len(rows))
