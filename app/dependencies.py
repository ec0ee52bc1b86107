from fastapi import Depends
from app.services.blob_storage import LocalBlobStorage
from app.services.clip_generator import ClipGenerator, PlaceholderClipGenerator
from app.services.project_manager import ProjectManager
from app.services.project_processor import ProjectProcessor

# Shared service instances, created on first use so importing the app never
# touches the filesystem. Tests swap them through app.dependency_overrides.
_project_manager = None
_blob_storage = None
_clip_generator = None

def get_project_manager() -> ProjectManager:
    global _project_manager
    if _project_manager is None:
        _project_manager = ProjectManager()
    return _project_manager

def get_blob_storage() -> LocalBlobStorage:
    global _blob_storage
    if _blob_storage is None:
        _blob_storage = LocalBlobStorage()
    return _blob_storage

def get_clip_generator() -> ClipGenerator:
    global _clip_generator
    if _clip_generator is None:
        _clip_generator = PlaceholderClipGenerator()
    return _clip_generator

def get_project_processor(
    project_manager: ProjectManager = Depends(get_project_manager),
    generator: ClipGenerator = Depends(get_clip_generator)
) -> ProjectProcessor:
    return ProjectProcessor(project_manager, generator)
