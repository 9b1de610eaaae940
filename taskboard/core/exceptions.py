"""Named, expected failure kinds raised by services and translated to HTTP at one boundary."""

from fastapi import status


class TaskboardError(Exception):
    """Base for every expected service-layer failure (stable code + HTTP status)."""

    code: str = "L1999"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "The request could not be completed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(TaskboardError):
    """Requested entity is absent or retired."""

    code = "L1000"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "No match could be found with that ID."


class DuplicateIdentityError(TaskboardError):
    """A credential address is already registered."""

    code = "L1001"
    status_code = status.HTTP_409_CONFLICT
    default_message = "A user with that email address already exists."


class NotAuthorizedError(TaskboardError):
    """Principal is neither a member of the owning team nor an administrator."""

    code = "L1002"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not authorized to perform that operation."


class AlreadyExistsError(TaskboardError):
    """A role or permission code is already in use."""

    code = "L1003"
    status_code = status.HTTP_409_CONFLICT
    default_message = "That code is already in use."


class BadOperationError(TaskboardError):
    """Request is structurally invalid (e.g. a batch spanning several parents)."""

    code = "L1004"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "That operation is invalid and could not be completed."
