"""
Merge Route

Matches chat transcript questions to roster names and joins the topic table.
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile

from backend.api.schemas import ErrorResponse, MergeResponse
from backend.services.uploads import read_upload
from roster_merge.pipeline import load_roster_json, load_topics_json, merge_transcript

router = APIRouter()


@router.post(
    "/merge",
    response_model=MergeResponse,
    responses={400: {"model": ErrorResponse}},
)
async def merge(
    file: Optional[UploadFile] = File(None),
    roster: Optional[str] = Form(None),
    topics: Optional[str] = Form(None),
) -> MergeResponse:
    """
    Merge a chat transcript (.txt) against a roster.

    Args:
        file: Chat export, UTF-8 text
        roster: JSON list of roster rows as returned by /parse-roster
        topics: Optional JSON list of topic rows as returned by /parse-topics

    Returns:
        One row per roster entry, in roster order
    """
    content, _ = await read_upload(file, "檔案或名單")
    roster_rows = load_roster_json(roster)
    topic_rows = load_topics_json(topics)

    loop = asyncio.get_event_loop()
    rows = await loop.run_in_executor(
        None, lambda: merge_transcript(content, roster_rows, topic_rows)
    )
    return MergeResponse(
        rows=rows,
        count=len(rows),
        matched_count=sum(1 for r in rows if r.question),
    )
