import uuid
from unittest.mock import patch
from app.models.project import ClipDescriptor, ProjectStatusEnum
from app.services.errors import PersistenceError, StatusCheckError

def _create_project(project_manager):
    return project_manager.insert_project({
        "title": "Pending",
        "prompt": "make shorts",
        "original_video_url": "https://x/vid.mp4",
    })

def test_status_after_processing(client, process_form):
    project_id = client.post("/api/process-video", data=process_form).json()["projectId"]

    response = client.get(f"/api/check-status/{project_id}")

    assert response.status_code == 200
    assert response.json()["projectId"] == project_id
    assert response.json()["status"] == "completed"
    assert response.json()["progress"] == 100
    assert len(response.json()["clips"]) == 3
    assert response.json()["message"] == "Video processing completed successfully"

def test_status_processing_project(client, project_manager):
    project = _create_project(project_manager)

    response = client.get(f"/api/check-status/{project.id}")

    assert response.status_code == 200
    assert response.json()["status"] == "processing"
    assert response.json()["progress"] == 50
    assert response.json()["clips"] == []
    assert response.json()["message"] == "Processing in progress..."

def test_status_failed_project(client, project_manager):
    project = _create_project(project_manager)
    project_manager.update_project_status(project.id, ProjectStatusEnum.FAILED, error="boom")

    response = client.get(f"/api/check-status/{project.id}")

    assert response.json()["status"] == "failed"
    assert response.json()["progress"] == 0
    assert response.json()["message"] == "Video processing failed"
    assert "boom" not in response.text

def test_status_unknown_project(client):
    response = client.get(f"/api/check-status/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"error": "Project not found"}

def test_status_store_error_is_generic(client, project_manager):
    with patch.object(project_manager, "get_project_with_clips", side_effect=PersistenceError("no such table: projects")):
        response = client.get(f"/api/check-status/{uuid.uuid4()}")

    assert response.status_code == 500
    assert response.json() == {"error": "Status check failed"}

def test_job_status_unknown_id_reports_completed(client):
    response = client.get("/api/job-status/anything-at-all")

    assert response.status_code == 200
    assert response.json() == {
        "jobId": "anything-at-all",
        "status": "completed",
        "progress": 100,
        "message": "Video processing completed successfully",
    }

def test_job_status_uses_stored_project(client, project_manager):
    project = _create_project(project_manager)

    response = client.get(f"/api/job-status/{project.id}")

    assert response.status_code == 200
    assert response.json()["jobId"] == project.id
    assert response.json()["status"] == "processing"
    assert response.json()["progress"] == 50

    project_manager.insert_clips(project.id, [
        ClipDescriptor(title="One", duration=10, thumbnail_url="/t.jpg", video_url="/v.mp4")
    ])
    project_manager.update_project_status(project.id, ProjectStatusEnum.COMPLETED)

    assert client.get(f"/api/job-status/{project.id}").json()["progress"] == 100

def test_job_status_store_error(client, project_manager):
    with patch.object(project_manager, "get_project_with_clips", side_effect=PersistenceError("disk I/O error")):
        response = client.get("/api/job-status/abc")

    assert response.status_code == 500
    assert response.json() == {"error": "Status check failed"}

def test_unopenable_store_reports_status_check_failed(client, tmp_path):
    from app.main import app
    from app.dependencies import get_project_manager
    from app.services.project_manager import ProjectManager

    # A directory can never be opened as a database file
    broken = ProjectManager(db_path=str(tmp_path))
    app.dependency_overrides[get_project_manager] = lambda: broken

    for path in (f"/api/check-status/{uuid.uuid4()}", "/api/job-status/abc"):
        response = client.get(path)
        assert response.status_code == 500
        assert response.json() == {"error": "Status check failed"}

def test_status_check_error_is_generic():
    error = StatusCheckError()

    assert error.status_code == 500
    assert error.message == "Status check failed"
