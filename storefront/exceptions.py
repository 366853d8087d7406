from fastapi import HTTPException
from typing import Any, Dict, Optional

class AppBaseException(HTTPException):
    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)

class InvalidQueryError(AppBaseException):
    def __init__(self, detail: str = "Search query is required"):
        super().__init__(status_code=400, detail=detail)

class RepositoryUnavailableError(AppBaseException):
    def __init__(self, detail: str = "Database connection issue"):
        super().__init__(
            status_code=503,
            detail=f"Service temporarily unavailable: {detail}",
            headers={"Retry-After": "30"}
        )

class SearchCancelledError(AppBaseException):
    def __init__(self, detail: str = "search was cancelled"):
        super().__init__(status_code=504, detail=f"Search cancelled: {detail}")

class SearchFailedError(AppBaseException):
    def __init__(self, detail: str):
        super().__init__(status_code=500, detail=f"Search error: {detail}")

class ConflictError(AppBaseException):
    def __init__(self, detail: str):
        super().__init__(status_code=409, detail=detail)

class ResourceNotFoundError(AppBaseException):
    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            status_code=404,
            detail=f"{resource_type} with id {resource_id} not found"
        )
