# infergate/api/openapi/inference.py
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from api.dependencies import get_api_key, get_backend, get_request_gate, get_request_proc
from api.formatter import ResponseFormatter
from core.logging import log_request_outcome
from core.auth.gate import RequestGate
from core.engine.base import InferenceBackend
from core.request.processor import RequestProcessor

router = APIRouter()

# Common methods reach the handler and the gate. Any other method gets the
# framework's 405, which main.py answers after the same configuration checks.
GATEWAY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]


@router.api_route(
    "/{path:path}",
    methods=GATEWAY_METHODS,
    summary="Run Inference",
    description="Validates the request, routes it to the model for its task and returns the backend result.",
)
async def run_inference(
    request: Request,
    path: str,
    backend: Optional[InferenceBackend] = Depends(get_backend),
    api_key: Optional[str] = Depends(get_api_key),
    gate: RequestGate = Depends(get_request_gate),
    processor: RequestProcessor = Depends(get_request_proc),
) -> Response:
    if gate.is_preflight(request):
        return ResponseFormatter.preflight()

    raw_body = await gate.admit(request, backend, api_key)
    envelope = await processor.process(raw_body, backend)
    log_request_outcome(request.method, request.url.path, 200, task=envelope.task, model=envelope.model)
    return ResponseFormatter.success(envelope)
