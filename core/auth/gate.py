# core/auth/gate.py
import hmac
import logging
from typing import Optional

from fastapi import Request as FastAPIRequest

from core.engine.base import InferenceBackend
from schemas.request import trim_text
from utils.errors import ErrorCode
from utils.exceptions import APIError

logger = logging.getLogger(f"infergate.{__name__}")

API_KEY_HEADER = "x-api-key"
MAX_REQUEST_BYTES = 256 * 1024


class RequestGate:
    """
    Guardrails applied before a request body is parsed.

    The order of the checks in :meth:`admit` decides which error a caller sees
    when several conditions are violated at once, and must not change.
    """
    def __init__(self, max_request_bytes: int = MAX_REQUEST_BYTES, header_name: str = API_KEY_HEADER):
        self.max_request_bytes = max_request_bytes
        self.header_name = header_name

    @staticmethod
    def is_preflight(request: FastAPIRequest) -> bool:
        return request.method.upper() == "OPTIONS"

    def _get_client_ip(self, request: FastAPIRequest) -> str:
        return request.client.host if request.client else "unknown"

    def validate_api_key(self, request: FastAPIRequest, api_key: Optional[str]) -> bool:
        provided_key = request.headers.get(self.header_name)
        if not provided_key or not api_key:
            return False
        return hmac.compare_digest(trim_text(provided_key).encode("utf-8"), trim_text(api_key).encode("utf-8"))

    @staticmethod
    def validate_content_type(request: FastAPIRequest) -> bool:
        content_type = request.headers.get("content-type") or ""
        return "application/json" in content_type.lower()

    @staticmethod
    def declared_length(request: FastAPIRequest) -> Optional[int]:
        """The Content-Length header as a positive int; anything else counts as not declared."""
        raw = request.headers.get("content-length")
        if not raw:
            return None
        try:
            value = int(raw.strip())
        except ValueError:
            return None
        return value if value > 0 else None

    @staticmethod
    def check_configuration(backend: Optional[InferenceBackend], api_key: Optional[str]) -> None:
        """Deployment checks that come before any per-request check, for every method but OPTIONS."""
        if backend is None:
            logger.error("Rejecting request: no inference backend is configured.")
            raise APIError(ErrorCode.MISCONFIGURED_WORKER)

        if not api_key or not trim_text(api_key):
            logger.error("Rejecting request: no API key secret is configured.")
            raise APIError(ErrorCode.MISSING_API_KEY_SECRET)

    async def admit(self,
                    request: FastAPIRequest,
                    backend: Optional[InferenceBackend],
                    api_key: Optional[str]) -> bytes:
        """
        Runs every gate check in order and returns the raw request body.
        Raises:
            APIError: for the first failing check.
        """
        self.check_configuration(backend, api_key)

        if request.method.upper() != "POST":
            raise APIError(ErrorCode.METHOD_NOT_ALLOWED, reason=request.method)

        if not self.validate_api_key(request, api_key):
            logger.warning(f"Invalid or missing {self.header_name} from IP: {self._get_client_ip(request)}")
            raise APIError(ErrorCode.UNAUTHORIZED)

        if not self.validate_content_type(request):
            raise APIError(ErrorCode.INVALID_CONTENT_TYPE, reason=request.headers.get("content-type"))

        declared = self.declared_length(request)
        if declared is not None and declared > self.max_request_bytes:
            raise APIError(ErrorCode.PAYLOAD_TOO_LARGE, reason=f"declared {declared} bytes")

        return await self.read_body(request, enforce_limit=declared is None)

    async def read_body(self, request: FastAPIRequest, enforce_limit: bool = True) -> bytes:
        """Reads the body, stopping as soon as it grows past the limit when ``enforce_limit`` is set."""
        chunks = []
        size = 0
        async for chunk in request.stream():
            size += len(chunk)
            if enforce_limit and size > self.max_request_bytes:
                raise APIError(ErrorCode.PAYLOAD_TOO_LARGE, reason=f"body exceeds {self.max_request_bytes} bytes")
            chunks.append(chunk)
        return b"".join(chunks)
