import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.dependencies import get_project_manager, get_blob_storage, get_clip_generator
from app.services.blob_storage import LocalBlobStorage
from app.services.clip_generator import PlaceholderClipGenerator
from app.services.project_manager import ProjectManager

@pytest.fixture
def project_manager(tmp_path):
    return ProjectManager(db_path=str(tmp_path / "projects.db"))

@pytest.fixture
def blob_storage(tmp_path):
    return LocalBlobStorage(upload_folder=str(tmp_path / "uploads"))

@pytest.fixture
def generator():
    return PlaceholderClipGenerator(delay_seconds=0)

@pytest.fixture
def client(project_manager, blob_storage, generator):
    app.dependency_overrides[get_project_manager] = lambda: project_manager
    app.dependency_overrides[get_blob_storage] = lambda: blob_storage
    app.dependency_overrides[get_clip_generator] = lambda: generator
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def process_form():
    return {
        "videoUrl": "https://x/vid.mp4",
        "prompt": "make shorts",
        "musicStyle": "upbeat",
        "voiceStyle": "narrator",
        "title": "My Project",
    }
