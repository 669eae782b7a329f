from __future__ import annotations

from typing import Optional, Union
from pydantic import BaseModel, Field


class SubscribeRequest(BaseModel):
    # format is not validated; whatever the client sends is recorded
    email: str


class SubscribeResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: str
    code: Optional[Union[int, str]] = Field(default=None, examples=[403])


class HealthResponse(BaseModel):
    ok: bool = True
