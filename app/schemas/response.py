from pydantic import BaseModel, Field
from typing import Any, List


class ApiResponse(BaseModel):
    """
    Standard success envelope.
    """
    success: bool = True
    message: str
    data: Any = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    success: bool = False
    message: str
    data: List[Any] = Field(default_factory=list)
