"""File upload endpoint.

Receives an image from the browser and forwards it to the Coze platform,
returning the identifier the platform assigned.
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from coze_relay.models.schemas import ErrorResponse, UploadResponse
from coze_relay.upstream.client import CozeClient, get_coze_client
from coze_relay.upstream.errors import UpstreamError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_file(
    file: UploadFile | None = File(default=None),
    client: CozeClient = Depends(get_coze_client),
) -> UploadResponse:
    """Forward an uploaded file to Coze.

    Args:
        file: The uploaded file (multipart/form-data field ``file``).
        client: Coze client.

    Returns:
        UploadResponse with the platform's file_id and url.

    Raises:
        400: No file in the request.
        500: The platform rejected the upload or could not be reached.
    """
    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )

    content = await file.read()
    filename = file.filename or "upload"
    logger.info(f"Received file upload: {filename} {len(content)} bytes")

    try:
        return await client.upload_file(
            content=content,
            filename=filename,
            content_type=file.content_type or DEFAULT_CONTENT_TYPE,
        )
    except UpstreamError as e:
        logger.error(f"Upload error for {filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e
