import os
import re
import uuid
import logging
from pathlib import Path
from typing import Optional
from app.config import UPLOAD_FOLDER
from app.services.errors import StorageError, NotFoundError

logger = logging.getLogger(__name__)

# Route the stored files are served from, see app/routers/upload.py
SERVE_PREFIX = "api/uploads/"

def sanitize_filename(filename: Optional[str]) -> str:
    """Reduce a client supplied filename to a safe basename."""
    name = os.path.basename(filename or "").strip()
    name = re.sub(r"[^A-Za-z0-9._-]", "_", name)
    name = name.lstrip(".")
    return name or "video"

class LocalBlobStorage:
    """Blob store writing uploads to a local folder.

    Files are stored as ``<uuid hex>_<sanitized name>`` so two uploads with the
    same filename never collide.
    """

    def __init__(self, upload_folder: Optional[str] = None):
        self.upload_dir = Path(upload_folder or UPLOAD_FOLDER)

    def store(self, content: bytes, filename: str, base_url: str = "/") -> str:
        """Persist the bytes and return the URL they are served from.

        Raises:
            StorageError: if the file could not be written
        """
        stored_name = f"{uuid.uuid4().hex}_{sanitize_filename(filename)}"
        path = self.upload_dir / stored_name

        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Error writing upload to {path}: {str(e)}")
            raise StorageError(f"Failed to store {filename}: {str(e)}") from e

        if not base_url.endswith("/"):
            base_url += "/"
        url = f"{base_url}{SERVE_PREFIX}{stored_name}"
        logger.info(f"Stored upload {filename} ({len(content)} bytes) at {path}")
        logger.debug(f"Upload URL: {url}")
        return url

    def resolve(self, stored_name: str) -> Path:
        """Return the path of a stored file.

        Raises:
            NotFoundError: if the name is not a stored file in the upload folder
        """
        if stored_name != os.path.basename(stored_name) or stored_name.startswith("."):
            raise NotFoundError(f"File not found: {stored_name}")

        path = self.upload_dir / stored_name
        if not path.is_file():
            raise NotFoundError(f"File not found: {stored_name}")
        return path
