# infergate/schemas/common.py
from pydantic import BaseModel, Field
from typing import Any, Literal


class ErrorInfo(BaseModel):
    """
    Machine-readable code plus a static, human-readable message.
    """
    code: str = Field(..., description="Stable error code, e.g. 'invalid_task'")
    message: str = Field(..., description="Static message, never contains internal details")


class SuccessEnvelope(BaseModel):
    """
    Envelope returned when the inference backend produced a result.
    """
    success: Literal[True] = Field(True, description="Always true for this shape")
    task: str = Field(..., description="Canonical task the request resolved to")
    model: str = Field(..., description="Model identifier the request was routed to")
    result: Any = Field(None, description="Opaque backend result, passed through unchanged")


class ErrorEnvelope(BaseModel):
    """
    Envelope returned for every failure, whatever stage produced it.
    """
    success: Literal[False] = Field(False, description="Always false for this shape")
    error: ErrorInfo
