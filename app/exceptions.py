from fastapi import status


class ServiceError(Exception):
    """Base class for failures the core reports back to its caller."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    detail: str = "Request failed"
    headers: dict[str, str] | None = None

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid request data"


class NoFieldsProvided(ValidationError):
    detail = "At least one field must be provided"


class DuplicateEmail(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Email already registered"


class InvalidCredentials(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Incorrect email or password"


class InvalidToken(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Could not validate credentials"
    headers = {"WWW-Authenticate": "Bearer"}


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Task not found"


class AlreadyComplete(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Task is already complete"


class InternalFailure(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Internal Server Error"
