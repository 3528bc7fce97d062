"""OpenAI API compatible wire models"""

from typing import Optional, Union
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Error detail information"""
    message: Optional[str] = None
    type: Optional[str] = None
    param: Optional[str] = None
    code: Optional[Union[str, int]] = None


class ErrorResponse(BaseModel):
    """Error envelope returned on non-success status codes"""
    error: ErrorDetail
