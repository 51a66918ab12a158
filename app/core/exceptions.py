"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500, extra: dict | None = None):
        """Initialize exception with message, status code and extra envelope fields."""
        self.message = message
        self.status_code = status_code
        self.extra = extra or {}
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class UnauthorizedException(AppException):
    """Unauthorized access exception."""

    def __init__(self, message: str = "Unauthorized"):
        """Initialize with 401 status code."""
        super().__init__(message, status_code=401)


class InvalidCredentialsException(UnauthorizedException):
    """Wrong email or password on the local login path."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class InvalidIdentityTokenException(UnauthorizedException):
    """Bearer token rejected by the external identity provider."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class ForbiddenException(AppException):
    """Forbidden access exception."""

    def __init__(self, message: str = "Forbidden"):
        """Initialize with 403 status code."""
        super().__init__(message, status_code=403)


class BadRequestException(AppException):
    """Bad request exception."""

    def __init__(self, message: str = "Bad request", extra: dict | None = None):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400, extra=extra)


class ValidationException(BadRequestException):
    """Missing or malformed input."""

    def __init__(self, message: str = "Validation error"):
        super().__init__(message)


class DuplicateAccountException(BadRequestException):
    """An account with this email already exists."""

    def __init__(self, message: str = "User already exists"):
        super().__init__(message)


class IncompleteIdentityException(BadRequestException):
    """External identity claim lacks the fields needed to resolve an account."""

    def __init__(self, message: str = "External identity is missing email and subject"):
        super().__init__(message)


class StorageException(AppException):
    """Data store write or read failed."""

    def __init__(self, message: str = "Storage operation failed"):
        """Initialize with 500 status code."""
        super().__init__(message, status_code=500)

