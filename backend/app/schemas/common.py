from pydantic import BaseModel
from typing import Generic, TypeVar

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Success envelope: every 2xx body is ``{"data": ...}``"""
    data: T


class ErrorBody(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorBody


class SuccessFlag(BaseModel):
    success: bool = True
