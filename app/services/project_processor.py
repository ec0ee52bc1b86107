import logging
from datetime import datetime, timezone
from typing import Optional
from app.models.project import Project, ProjectStatusEnum, NO_STYLE, MUSIC_STYLES, VOICE_STYLES
from app.services.clip_generator import ClipGenerator
from app.services.errors import MissingFieldError, PersistenceError, ProcessingError
from app.services.project_manager import ProjectManager

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "AI Video Project"

STATUS_PROGRESS = {
    ProjectStatusEnum.COMPLETED: 100,
    ProjectStatusEnum.PROCESSING: 50,
}

STATUS_MESSAGES = {
    ProjectStatusEnum.COMPLETED: "Video processing completed successfully",
    ProjectStatusEnum.FAILED: "Video processing failed",
}
IN_PROGRESS_MESSAGE = "Processing in progress..."

def progress_for(status: ProjectStatusEnum) -> int:
    """Coarse progress percentage reported for a project status."""
    return STATUS_PROGRESS.get(status, 0)

def message_for(status: ProjectStatusEnum) -> str:
    return STATUS_MESSAGES.get(status, IN_PROGRESS_MESSAGE)

def default_title(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"{DEFAULT_TITLE} - {now.strftime('%Y-%m-%d')}"

def _normalize_style(value: Optional[str], vocabulary, kind: str) -> str:
    value = (value or "").strip() or NO_STYLE
    if value not in vocabulary:
        logger.warning(f"Unknown {kind} style '{value}', storing as given")
    return value

class ProjectProcessor:
    """Runs one submission through create → generate → save clips → complete.

    Any failure after the project row exists moves the project to ``failed``
    so it is never left in ``processing``.
    """

    def __init__(self, project_manager: ProjectManager, generator: ClipGenerator):
        self.project_manager = project_manager
        self.generator = generator

    async def process(
        self,
        video_url: Optional[str],
        prompt: Optional[str],
        music_style: Optional[str] = None,
        voice_style: Optional[str] = None,
        title: Optional[str] = None
    ) -> Project:
        """Process a video submission and return the completed project with its clips.

        Raises:
            MissingFieldError: video_url or prompt is absent; nothing is stored
            PersistenceError: a store write failed
            ProcessingError: the generator failed
        """
        video_url = (video_url or "").strip()
        prompt = (prompt or "").strip()

        missing = [name for name, value in (("videoUrl", video_url), ("prompt", prompt)) if not value]
        if missing:
            raise MissingFieldError(missing)

        music_style = _normalize_style(music_style, MUSIC_STYLES, "music")
        voice_style = _normalize_style(voice_style, VOICE_STYLES, "voice")
        title = (title or "").strip() or default_title()

        try:
            project = self.project_manager.insert_project({
                "title": title,
                "prompt": prompt,
                "original_video_url": video_url,
                "music_style": music_style,
                "voice_style": voice_style,
            })
        except PersistenceError as e:
            raise PersistenceError("Failed to create project") from e

        logger.info(f"Processing video with {self.generator.name} generator for project {project.id}")

        try:
            descriptors = await self.generator.generate(video_url, prompt, music_style, voice_style)
        except Exception as e:
            logger.error(f"Generator failed for project {project.id}: {str(e)}", exc_info=True)
            self._mark_failed(project.id, f"Generation failed: {str(e)}")
            raise ProcessingError("Processing failed") from e

        try:
            try:
                clips = self.project_manager.insert_clips(project.id, descriptors)
            except PersistenceError as e:
                raise PersistenceError("Failed to save clips") from e

            try:
                self.project_manager.update_project_status(project.id, ProjectStatusEnum.COMPLETED)
            except PersistenceError as e:
                raise PersistenceError("Failed to update project status") from e
        except PersistenceError as e:
            self._mark_failed(project.id, str(e.__cause__ or e))
            raise
        except Exception as e:
            logger.error(f"Could not finish project {project.id}: {str(e)}", exc_info=True)
            self._mark_failed(project.id, f"Processing failed: {str(e)}")
            raise ProcessingError("Processing failed") from e

        logger.info(f"AI processing complete, generated {len(clips)} clips")

        return project.model_copy(update={"status": ProjectStatusEnum.COMPLETED, "clips": clips})

    def _mark_failed(self, project_id: str, reason: str):
        try:
            self.project_manager.update_project_status(project_id, ProjectStatusEnum.FAILED, error=reason)
        except PersistenceError as e:
            logger.error(f"Could not mark project {project_id} as failed: {str(e)}")
