from fastapi import APIRouter, HTTPException, Form, Depends
from typing import Optional
import logging
from app.dependencies import get_project_processor
from app.models.project import ProcessResponse
from app.services.errors import ClipForgeError, MissingFieldError
from app.services.project_processor import ProjectProcessor

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["process"],
)

@router.post("/process-video", response_model=ProcessResponse)
async def process_video(
    video_url: Optional[str] = Form(None, alias="videoUrl"),
    prompt: Optional[str] = Form(None),
    music_style: Optional[str] = Form(None, alias="musicStyle"),
    voice_style: Optional[str] = Form(None, alias="voiceStyle"),
    title: Optional[str] = Form(None),
    processor: ProjectProcessor = Depends(get_project_processor)
):
    """
    Turn an uploaded video into short clips.

    Creates a project in `processing` state, runs the clip generator, stores
    the generated clips and marks the project `completed`. Every call creates
    a new project; retried calls are not deduplicated.
    """
    try:
        logger.info(f"Received process request for video: {video_url}")
        project = await processor.process(
            video_url=video_url,
            prompt=prompt,
            music_style=music_style,
            voice_style=voice_style,
            title=title
        )

        return ProcessResponse(
            success=True,
            project_id=project.id,
            clips=project.clips,
            message="Video processed successfully"
        )

    except MissingFieldError as e:
        logger.warning(f"Rejected process request: {e.message}")
        raise HTTPException(status_code=400, detail="Missing required fields")
    except ClipForgeError as e:
        logger.error(f"Processing error: {e.message} ({e.__cause__})")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Processing failed")

@router.get("/mock-video/{clip_number}")
async def mock_video(clip_number: int):
    """Placeholder playback target for the clips the placeholder generator returns."""
    if clip_number not in (1, 2, 3):
        raise HTTPException(status_code=404, detail=f"Mock video {clip_number} not found")

    return {
        "clip": clip_number,
        "message": "Mock video placeholder, no rendered media is available yet"
    }
