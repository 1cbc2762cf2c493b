"""
Upload Service

Reads multipart uploads into memory with validation.
Nothing is written to disk; each request's bytes are discarded with it.
"""

from typing import Optional

from fastapi import UploadFile

from roster_merge.config import get_settings
from roster_merge.errors import MissingInputError, UploadTooLargeError


async def read_upload(file: Optional[UploadFile], what: str = "檔案") -> tuple[bytes, str]:
    """
    Read an uploaded file fully.

    Args:
        file: The multipart file, or None if the field was absent
        what: Human-readable name of the upload for error messages

    Returns:
        (content, filename)

    Raises:
        MissingInputError: Field absent, no filename, or empty file
        UploadTooLargeError: File exceeds the configured size limit
    """
    if file is None:
        raise MissingInputError(f"缺少{what}")

    if not file.filename:
        raise MissingInputError("No filename provided")

    content = await file.read()

    max_bytes = get_settings().max_upload_bytes
    if len(content) > max_bytes:
        raise UploadTooLargeError(
            f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB"
        )

    if len(content) == 0:
        raise MissingInputError(f"Empty file: {file.filename}")

    return content, file.filename
