"""Response envelope models.

Consistent response format for all API endpoints:
``{"success": bool, "message": str?, "data": object?, "errors": object?}``.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, computed_field

T = TypeVar("T")


class PaginationMeta(BaseModel):
    """Pagination metadata for collections.

    Attributes:
        total: Total number of items across all pages.
        page: Current page number (1-indexed).
        per_page: Number of items per page.
    """

    total: int
    page: int
    per_page: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        """Calculate total number of pages.

        Returns:
            Number of pages needed to display all items.
            Returns 0 if total is 0.
        """
        if self.total == 0:
            return 0
        return (self.total + self.per_page - 1) // self.per_page


class DataResponse(BaseModel, Generic[T]):
    """Standard success envelope.

    Usage:
        @router.get("/users/{id}")
        async def show_user(id: UUID) -> DataResponse[UserEnvelope]:
            user = await service.get_user(id)
            return DataResponse(message="User retrieved", data=...)
    """

    success: bool = True
    message: str | None = None
    data: T | None = None


class ErrorResponse(BaseModel):
    """Standard error envelope.

    Usage in exception handlers:
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                message=exc.message, errors=exc.errors
            ).model_dump(exclude_none=True),
        )

    Attributes:
        success: Always False.
        message: Human-readable error message.
        errors: Optional field-level messages keyed by field name.
    """

    success: bool = False
    message: str
    errors: dict[str, list[str]] | None = None
