import sqlite3
import logging
import uuid
from typing import List, Optional, Dict, Any
from datetime import datetime, timezone
from pathlib import Path
from app.config import DATABASE_PATH
from app.models.project import Project, Clip, ClipDescriptor, ProjectStatusEnum, NO_STYLE
from app.services.errors import PersistenceError, NotFoundError

logger = logging.getLogger(__name__)

class ProjectManager:
    """Manager class for projects and their generated clips in the database.

    The database is opened and its tables created on first use, so building a
    manager never fails; an unreachable store surfaces as PersistenceError
    from the first read or write.
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = Path(db_path or DATABASE_PATH)
        self._initialized = False

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _connect(self) -> sqlite3.Connection:
        if not self._initialized:
            self._init_db()
        return self._open()

    def _init_db(self):
        """Initialize the SQLite database with required tables"""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = self._open()
        except (OSError, sqlite3.Error) as e:
            raise PersistenceError(f"Could not open project database: {str(e)}") from e

        try:
            cursor = conn.cursor()

            cursor.execute('''
            CREATE TABLE IF NOT EXISTS projects (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                prompt TEXT NOT NULL,
                original_video_url TEXT NOT NULL,
                music_style TEXT NOT NULL,
                voice_style TEXT NOT NULL,
                status TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                error TEXT
            )
            ''')

            cursor.execute('''
            CREATE TABLE IF NOT EXISTS clips (
                id TEXT PRIMARY KEY,
                project_id TEXT NOT NULL REFERENCES projects(id),
                position INTEGER NOT NULL,
                title TEXT NOT NULL,
                duration INTEGER NOT NULL,
                thumbnail_url TEXT NOT NULL,
                video_url TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
            ''')

            cursor.execute("CREATE INDEX IF NOT EXISTS idx_clips_project_id ON clips(project_id)")

            conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not initialize project database: {str(e)}") from e
        finally:
            conn.close()

        self._initialized = True
        logger.info(f"Project database initialized at {self.db_path}")

    def _project_from_row(self, row, clips: Optional[List[Clip]] = None) -> Project:
        """Convert a database row to a Project object"""
        return Project(
            id=row["id"],
            title=row["title"],
            prompt=row["prompt"],
            original_video_url=row["original_video_url"],
            music_style=row["music_style"],
            voice_style=row["voice_style"],
            status=ProjectStatusEnum(row["status"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            error=row["error"],
            clips=clips or []
        )

    def _clip_from_row(self, row) -> Clip:
        return Clip(
            id=row["id"],
            project_id=row["project_id"],
            title=row["title"],
            duration=row["duration"],
            thumbnail_url=row["thumbnail_url"],
            video_url=row["video_url"],
            created_at=datetime.fromisoformat(row["created_at"])
        )

    def insert_project(self, fields: Dict[str, Any]) -> Project:
        """Create a new project in the processing state.

        Args:
            fields: title, prompt, original_video_url and optionally
                music_style / voice_style

        Returns:
            The stored project

        Raises:
            PersistenceError: if the row could not be written
        """
        now = datetime.now(timezone.utc)
        project = Project(
            id=str(uuid.uuid4()),
            title=fields["title"],
            prompt=fields["prompt"],
            original_video_url=fields["original_video_url"],
            music_style=fields.get("music_style") or NO_STYLE,
            voice_style=fields.get("voice_style") or NO_STYLE,
            status=ProjectStatusEnum.PROCESSING,
            created_at=now,
            updated_at=now
        )

        logger.info(f"Creating project {project.id}: {project.title}")

        try:
            conn = self._connect()
            try:
                conn.execute(
                    "INSERT INTO projects (id, title, prompt, original_video_url, music_style, voice_style, status, created_at, updated_at, error) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        project.id,
                        project.title,
                        project.prompt,
                        project.original_video_url,
                        project.music_style,
                        project.voice_style,
                        project.status.value,
                        project.created_at.isoformat(),
                        project.updated_at.isoformat(),
                        project.error
                    )
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Error inserting project {project.id}: {str(e)}")
            raise PersistenceError(f"Failed to create project: {str(e)}") from e

        return project

    def insert_clips(self, project_id: str, descriptors: List[ClipDescriptor]) -> List[Clip]:
        """Insert a batch of clips for a project in a single transaction.

        Either every clip is stored or none is.
        """
        now = datetime.now(timezone.utc)
        clips = [
            Clip(
                id=str(uuid.uuid4()),
                project_id=project_id,
                title=descriptor.title,
                duration=descriptor.duration,
                thumbnail_url=descriptor.thumbnail_url,
                video_url=descriptor.video_url,
                created_at=now
            )
            for descriptor in descriptors
        ]

        logger.info(f"Saving {len(clips)} clips for project {project_id}")

        try:
            conn = self._connect()
            try:
                with conn:
                    conn.executemany(
                        "INSERT INTO clips (id, project_id, position, title, duration, thumbnail_url, video_url, created_at) "
                        "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                        [
                            (
                                clip.id,
                                clip.project_id,
                                position,
                                clip.title,
                                clip.duration,
                                clip.thumbnail_url,
                                clip.video_url,
                                clip.created_at.isoformat()
                            )
                            for position, clip in enumerate(clips)
                        ]
                    )
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Error inserting clips for project {project_id}: {str(e)}")
            raise PersistenceError(f"Failed to save clips: {str(e)}") from e

        return clips

    def update_project_status(self, project_id: str, status: ProjectStatusEnum, error: Optional[str] = None) -> None:
        """Update a project's status.

        Raises:
            PersistenceError: if the write failed or no project has this id
        """
        status = ProjectStatusEnum(status)
        updated_at = datetime.now(timezone.utc).isoformat()

        try:
            conn = self._connect()
            try:
                cursor = conn.execute(
                    "UPDATE projects SET status = ?, error = ?, updated_at = ? WHERE id = ?",
                    (status.value, error, updated_at, project_id)
                )
                conn.commit()
                updated = cursor.rowcount
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Error updating status of project {project_id}: {str(e)}")
            raise PersistenceError(f"Failed to update project status: {str(e)}") from e

        if updated == 0:
            raise PersistenceError(f"Failed to update project status: project {project_id} does not exist")

        logger.info(f"Project {project_id} is now {status.value}")

    def get_project_with_clips(self, project_id: str) -> Project:
        """Get a project and its clips by ID.

        Raises:
            NotFoundError: if no project has this id
            PersistenceError: if the store could not be read
        """
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT * FROM projects WHERE id = ?", (project_id,)).fetchone()
                clip_rows = []
                if row:
                    clip_rows = conn.execute(
                        "SELECT * FROM clips WHERE project_id = ? ORDER BY position",
                        (project_id,)
                    ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Error reading project {project_id}: {str(e)}")
            raise PersistenceError(f"Failed to read project: {str(e)}") from e

        if not row:
            raise NotFoundError(f"Project not found: {project_id}")

        return self._project_from_row(row, [self._clip_from_row(r) for r in clip_rows])

    def count_projects(self) -> int:
        try:
            conn = self._connect()
            try:
                return conn.execute("SELECT COUNT(*) FROM projects").fetchone()[0]
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to count projects: {str(e)}") from e
