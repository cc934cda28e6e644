"""Forum error taxonomy.

Services raise these; ``app.core.exception_handlers`` turns them into JSON
responses. Routers never catch them.
"""
from typing import Optional


class ForumError(Exception):
    """Base class for every error the API reports on purpose"""

    status_code = 500
    code = "internal_error"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None) -> None:
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(ForumError):
    """Bad or missing input"""

    status_code = 400
    code = "validation_error"
    default_message = "Bad request"


class NotFoundError(ForumError):
    status_code = 404
    code = "not_found"
    default_message = "Resource not found"


class ConflictError(ForumError):
    status_code = 409
    code = "conflict"
    default_message = "Resource conflict"


class EmailTakenError(ConflictError):
    code = "email_taken"
    default_message = "Email already taken"


class UsernameTakenError(ConflictError):
    code = "username_taken"
    default_message = "Username already taken"


class AuthenticationError(ForumError):
    status_code = 401
    code = "unauthorized"
    default_message = "Unauthorized"


class InvalidCredentialsError(AuthenticationError):
    # Same message for unknown email and wrong password
    code = "invalid_credentials"
    default_message = "Invalid email or password"


class NotAuthenticatedError(AuthenticationError):
    code = "not_authenticated"
    default_message = "Unauthorized"


class AuthorizationError(ForumError):
    status_code = 403
    code = "forbidden"
    default_message = "Not enough permissions"


class StorageError(ForumError):
    """Unexpected backing-store failure; the raw cause goes to the log only"""

    status_code = 500
    code = "storage_error"
    default_message = "Internal server error"


class RequestTimeoutError(ForumError):
    status_code = 504
    code = "timeout"
    default_message = "request timeout"
