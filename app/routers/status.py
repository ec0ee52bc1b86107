from fastapi import APIRouter, HTTPException, Depends
import logging
from app.dependencies import get_project_manager
from app.models.project import ProjectStatusEnum, ProjectStatusResponse, JobStatusResponse
from app.services.errors import NotFoundError, StatusCheckError
from app.services.project_manager import ProjectManager
from app.services.project_processor import progress_for, message_for

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["status"],
    responses={404: {"description": "Not found"}},
)

@router.get("/check-status/{project_id}", response_model=ProjectStatusResponse)
async def check_project_status(project_id: str, project_manager: ProjectManager = Depends(get_project_manager)):
    """Get the processing status of a project together with its clips."""
    try:
        logger.info(f"Checking status for project: {project_id}")
        project = project_manager.get_project_with_clips(project_id)

        return ProjectStatusResponse(
            project_id=project_id,
            status=project.status,
            progress=progress_for(project.status),
            clips=project.clips,
            message=message_for(project.status)
        )

    except NotFoundError:
        logger.warning(f"Project not found: {project_id}")
        raise HTTPException(status_code=404, detail="Project not found")
    except Exception as e:
        logger.error(f"Status check error for project {project_id}: {str(e)}", exc_info=True)
        error = StatusCheckError()
        raise HTTPException(status_code=error.status_code, detail=error.message)

@router.get("/job-status/{job_id}", response_model=JobStatusResponse)
async def check_job_status(job_id: str, project_manager: ProjectManager = Depends(get_project_manager)):
    """
    Get the status of a processing job.

    Jobs are identified by their project id. Ids that match no stored project
    report a completed job, which is what clients polling before projects
    were persisted expect.
    """
    try:
        logger.info(f"Checking status for job: {job_id}")
        try:
            status = project_manager.get_project_with_clips(job_id).status
        except NotFoundError:
            logger.debug(f"No project for job {job_id}, reporting completed")
            status = ProjectStatusEnum.COMPLETED

        return JobStatusResponse(
            job_id=job_id,
            status=status,
            progress=progress_for(status),
            message=message_for(status)
        )

    except Exception as e:
        logger.error(f"Status check error for job {job_id}: {str(e)}", exc_info=True)
        error = StatusCheckError()
        raise HTTPException(status_code=error.status_code, detail=error.message)
