"""
Topics Route

Parses a date → topic table from CSV / XLSX / PDF.
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, File, UploadFile

from backend.api.schemas import ErrorResponse, TopicResponse
from backend.services.uploads import read_upload
from roster_merge.pipeline import parse_topic_file

router = APIRouter()


@router.post(
    "/parse-topics",
    response_model=TopicResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def parse_topics(file: Optional[UploadFile] = File(None)) -> TopicResponse:
    """
    Parse a topic table.

    One entry per distinct date; the first topic seen for a date wins.
    """
    content, filename = await read_upload(file)

    loop = asyncio.get_event_loop()
    rows = await loop.run_in_executor(None, lambda: parse_topic_file(content, filename))
    return TopicResponse(rows=rows, count=len(rows))
