# api/formatter.py
from typing import Dict, Mapping
from types import MappingProxyType

from fastapi import status
from fastapi.responses import JSONResponse, Response

from schemas.common import ErrorEnvelope, ErrorInfo, SuccessEnvelope
from utils.errors import ErrorDetail

CORS_HEADERS: Mapping[str, str] = MappingProxyType({
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, x-api-key",
    "Access-Control-Max-Age": "86400",
})


class ResponseFormatter:
    """
    Wraps pipeline outcomes into the uniform envelope.
    Every response carries the fixed cross-origin headers.
    """

    @staticmethod
    def _headers() -> Dict[str, str]:
        return dict(CORS_HEADERS)

    @classmethod
    def preflight(cls) -> Response:
        return Response(status_code=status.HTTP_204_NO_CONTENT, headers=cls._headers())

    @classmethod
    def success(cls, envelope: SuccessEnvelope) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=envelope.model_dump(mode="json"),
            headers=cls._headers(),
        )

    @classmethod
    def error(cls, error: ErrorDetail) -> JSONResponse:
        envelope = ErrorEnvelope(error=ErrorInfo(code=error.code, message=error.message))
        return JSONResponse(
            status_code=error.status_code,
            content=envelope.model_dump(),
            headers=cls._headers(),
        )
