"""API error classes.

HTTP status codes and error codes for the account API.
"""


class APIError(Exception):
    """Base class for API errors.

    All API errors have a code, message, and HTTP status.
    Subclasses set default status_code.

    Attributes:
        code: Machine-readable error code (e.g., "NOT_FOUND").
        message: Human-readable error message.
        status_code: HTTP status code to return.
        errors: Optional field-level messages keyed by field name.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.errors = errors
        super().__init__(message)


class ValidationError(APIError):
    """Field validation failed (422).

    Use for request body rules that Pydantic cannot express, and for
    business-level field checks inside services.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=422,
            errors=errors,
        )

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Build a ValidationError carrying a single field message."""
        return cls(errors={field: [message]})


class DuplicateEmailError(ValidationError):
    """Email already belongs to another account (422).

    Surfaced as a field error on ``email`` so clients render it next to
    the input, same as any other validation failure.
    """

    def __init__(self) -> None:
        super().__init__(errors={"email": ["The email has already been taken."]})
        self.code = "DUPLICATE_EMAIL"


class UnauthorizedError(APIError):
    """Authentication required (401).

    Use when no valid bearer token is provided.
    """

    def __init__(self, message: str = "Unauthenticated.") -> None:
        super().__init__(
            code="UNAUTHORIZED",
            message=message,
            status_code=401,
        )


class InvalidCredentialsError(UnauthorizedError):
    """Login failed (401).

    The message is identical for unknown emails and wrong passwords so the
    response cannot be used to enumerate accounts.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials")
        self.code = "INVALID_CREDENTIALS"


class NotFoundError(APIError):
    """Resource not found (404)."""

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(
            code="NOT_FOUND",
            message=message,
            status_code=404,
        )


class RevocationError(APIError):
    """Logout could not revoke the presented token (500).

    Raised by the HTTP layer only. AuthService.logout() reports failure as
    False and never raises.
    """

    def __init__(self) -> None:
        super().__init__(
            code="REVOCATION_FAILED",
            message="Logout failed",
            status_code=500,
        )


class InternalError(APIError):
    """Unexpected server error (500).

    Use for unhandled exceptions. Never expose stack traces to clients.
    """

    def __init__(self, message: str = "An unexpected error occurred") -> None:
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
        )
