from fastapi import APIRouter, HTTPException, Request, UploadFile, File, Depends
from fastapi.responses import FileResponse
from typing import Optional
import logging
from app.dependencies import get_blob_storage
from app.models.project import UploadResponse
from app.services.blob_storage import LocalBlobStorage
from app.services.errors import InvalidUploadError, NotFoundError, StorageError
from app.utils.url import get_base_url

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["upload"],
    responses={404: {"description": "Not found"}},
)

@router.post("/upload-video", response_model=UploadResponse)
async def upload_video(
    request_info: Request,
    video: Optional[UploadFile] = File(None),
    storage: LocalBlobStorage = Depends(get_blob_storage)
):
    """
    Upload a source video.

    Accepts a multipart form with a single `video` file and returns the URL
    the stored file can be fetched from. Only `video/*` content types are accepted.
    """
    try:
        if video is None or not video.filename:
            raise InvalidUploadError("No file provided")

        content_type = video.content_type or ""
        logger.info(f"Received upload: {video.filename} ({content_type})")

        if not content_type.startswith("video/"):
            raise InvalidUploadError("File must be a video")

        content = await video.read()
        if not content:
            raise InvalidUploadError("No file provided")

        url = storage.store(content, video.filename, base_url=get_base_url(request_info))
        return UploadResponse(url=url)

    except InvalidUploadError as e:
        logger.warning(f"Rejected upload: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StorageError as e:
        logger.error(f"Blob storage error: {e.message}")
        raise HTTPException(status_code=500, detail="Failed to upload video")
    except Exception as e:
        logger.error(f"Upload error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to upload video")

@router.get("/uploads/{filename}")
async def serve_upload(filename: str, storage: LocalBlobStorage = Depends(get_blob_storage)):
    """Serve a previously uploaded video by its stored filename."""
    try:
        path = storage.resolve(filename)
    except NotFoundError:
        raise HTTPException(status_code=404, detail=f"Video file not found: {filename}")

    return FileResponse(path=str(path), filename=filename)
