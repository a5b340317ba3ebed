"""Pagination utilities.

page (default 1), per_page (default 15, max 100).
"""

from dataclasses import dataclass

from fastapi import Query

from account_service.core.config import settings


@dataclass
class PaginationParams:
    """Pagination query parameters.

    Attributes:
        page: Current page number (1-indexed).
        per_page: Number of items per page.
    """

    page: int
    per_page: int

    @property
    def offset(self) -> int:
        """Number of items to skip (0 for page 1)."""
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        """Maximum number of items to return (same as per_page)."""
        return self.per_page


def pagination_params(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    per_page: int | None = Query(
        default=None,
        ge=1,
        le=100,
        description="Items per page (max 100)",
    ),
) -> PaginationParams:
    """FastAPI dependency for pagination query parameters.

    Validates page >= 1, per_page between 1 and 100. A missing per_page
    falls back to settings.default_per_page.

    Args:
        page: Page number (default 1, must be >= 1).
        per_page: Items per page (between 1 and 100).

    Returns:
        PaginationParams with validated page and per_page.
    """
    return PaginationParams(page=page, per_page=per_page or settings.default_per_page)
