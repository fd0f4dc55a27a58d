"""
Error envelope returned for domain failures.
"""

from typing import Optional
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    code: str
    message: str
    field: Optional[str] = None
    index: Optional[int] = None


class ErrorResponse(BaseModel):
    error: ErrorDetail
