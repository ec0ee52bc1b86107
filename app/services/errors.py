class ClipForgeError(Exception):
    """Base class for errors raised by the clip pipeline.

    Each subclass carries the HTTP status code the routers map it to.
    """

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFieldError(ClipForgeError):
    """A required request field was absent or blank."""

    status_code = 400

    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class InvalidUploadError(ClipForgeError):
    status_code = 400


class PersistenceError(ClipForgeError):
    """A read or write against the project store failed."""


class NotFoundError(ClipForgeError):
    status_code = 404


class StorageError(ClipForgeError):
    """The blob store could not persist or locate a file."""


class ProcessingError(ClipForgeError):
    """The clip generator failed for a project."""


class StatusCheckError(ClipForgeError):
    """A status lookup failed for a reason other than a missing project.

    The message is fixed so store details never reach the client.
    """

    def __init__(self, message: str = "Status check failed"):
        super().__init__(message)
