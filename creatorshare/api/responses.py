"""
Response envelope helpers.

Every endpoint answers ``{"success": ..., "data": ..., "message": ...}``;
feed endpoints add a ``pagination`` block and failures carry ``error``.
"""

from typing import Any

from fastapi.responses import JSONResponse

from creatorshare.models.base import ApiResponse, PaginatedApiResponse, PaginationInfo
from creatorshare.services.search import Page


def success_response(data: Any = None, message: str | None = None) -> ApiResponse:
    return ApiResponse(success=True, data=data, message=message)


def paginated_response(page: Page, message: str | None = None) -> PaginatedApiResponse:
    return PaginatedApiResponse(
        success=True,
        data=page.items,
        message=message,
        pagination=PaginationInfo(**page.to_dict()),
    )


def error_response(
    error: str,
    status_code: int = 400,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error},
        headers=headers,
    )
