from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from enum import Enum
from datetime import datetime

class ProjectStatusEnum(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

# Sentinel stored when the user picked no music or voice style
NO_STYLE = "none"

MUSIC_STYLES = ("upbeat", "chill", "dramatic", "trending", NO_STYLE)
VOICE_STYLES = ("narrator", "casual", "energetic", "ai-generated", NO_STYLE)

class ClipDescriptor(BaseModel):
    """A clip as produced by a generator, before it is attached to a project."""
    title: str
    duration: int
    thumbnail_url: str
    video_url: str

class Clip(ClipDescriptor):
    id: str
    project_id: str
    created_at: datetime

class Project(BaseModel):
    id: str
    title: str
    prompt: str
    original_video_url: str
    music_style: str = NO_STYLE
    voice_style: str = NO_STYLE
    status: ProjectStatusEnum = ProjectStatusEnum.PROCESSING
    created_at: datetime
    updated_at: datetime
    error: Optional[str] = None
    clips: List[Clip] = []

class UploadResponse(BaseModel):
    url: str

class ProcessResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    project_id: str = Field(alias="projectId")
    clips: List[Clip]
    message: str

class ProjectStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(alias="projectId")
    status: ProjectStatusEnum
    progress: int
    clips: List[Clip] = []
    message: str

class JobStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(alias="jobId")
    status: ProjectStatusEnum
    progress: int
    message: str
