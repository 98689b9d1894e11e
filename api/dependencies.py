# api/dependencies.py
from typing import Optional
from fastapi import Request

from core.auth.gate import RequestGate
from core.engine.base import InferenceBackend
from core.request.processor import RequestProcessor
from utils.errors import ErrorCode
from utils.exceptions import APIError

# --- Service Getters ---
# The backend and the API key may legitimately be missing; the gate reports
# that to the caller, so their getters return None instead of raising.

def get_backend(request: Request) -> Optional[InferenceBackend]:
    return getattr(request.app.state, 'backend', None)

def get_api_key(request: Request) -> Optional[str]:
    return getattr(request.app.state, 'api_key', None)

def get_request_gate(request: Request) -> RequestGate:
    if not hasattr(request.app.state, 'request_gate'):
        raise APIError(ErrorCode.INTERNAL_ERROR, reason="Request gate not available.")
    return request.app.state.request_gate

def get_request_proc(request: Request) -> RequestProcessor:
    if not hasattr(request.app.state, 'request_processor'):
        raise APIError(ErrorCode.INTERNAL_ERROR, reason="Request processor not available.")
    return request.app.state.request_processor
