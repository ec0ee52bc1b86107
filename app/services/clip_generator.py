import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional
from app.config import PROCESSING_DELAY_SECONDS
from app.models.project import ClipDescriptor

class ClipGenerator(ABC):
    """Base class for clip generators.

    A generator turns a source video, a prompt and the chosen styles into the
    clips that get attached to a project. The processor only depends on this
    interface, so a real pipeline can replace the placeholder without touching
    the routers.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(f"clip_generator.{name}")

    @abstractmethod
    async def generate(self, video_url: str, prompt: str, music_style: str, voice_style: str) -> List[ClipDescriptor]:
        """Generate clips for a source video.

        Args:
            video_url: URL of the uploaded source video
            prompt: What the user asked for
            music_style: Background music style, or "none"
            voice_style: Voice-over style, or "none"

        Returns:
            The generated clip descriptors, in display order
        """
        pass

# Demo data returned for every request until real processing exists
PLACEHOLDER_CLIPS = [
    ClipDescriptor(
        title="Build Flappy Bird using Scratch AI",
        duration=30,
        thumbnail_url="https://hebbkx1anhila5yf.public.blob.vercel-storage.com/image-ohT2Hd7WREEkQ3FKEuJjhBYDoQEBto.png",
        video_url="/api/mock-video/1",
    ),
    ClipDescriptor(
        title="Coding Tips & Tricks",
        duration=45,
        thumbnail_url="/coding-tips-video-thumbnail.jpg",
        video_url="/api/mock-video/2",
    ),
    ClipDescriptor(
        title="Behind the Scenes",
        duration=60,
        thumbnail_url="/behind-the-scenes-coding-video.jpg",
        video_url="/api/mock-video/3",
    ),
]

class PlaceholderClipGenerator(ClipGenerator):
    """Simulates AI processing: waits, then returns the same three clips."""

    def __init__(self, delay_seconds: Optional[float] = None):
        super().__init__("placeholder")
        self.delay_seconds = PROCESSING_DELAY_SECONDS if delay_seconds is None else delay_seconds

    async def generate(self, video_url: str, prompt: str, music_style: str, voice_style: str) -> List[ClipDescriptor]:
        self.logger.info(f"Starting AI processing for: {video_url}")
        self.logger.info(f"Prompt: {prompt}")
        self.logger.info(f"Music style: {music_style}")
        self.logger.info(f"Voice style: {voice_style}")

        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        return [clip.model_copy() for clip in PLACEHOLDER_CLIPS]
