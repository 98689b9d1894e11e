# infergate/engine/workers_ai.py

import logging
from typing import Any, Dict, Optional

import httpx

from utils.exceptions import BackendError
from .base import InferenceBackend

logger = logging.getLogger(f"infergate.{__name__}")

DEFAULT_BASE_URL = "https://api.cloudflare.com/client/v4"


class WorkersAIBackend(InferenceBackend):
    """
    Calls Cloudflare Workers AI through its REST API:
    POST {base_url}/accounts/{account_id}/ai/run/{model}

    The API wraps results as ``{"success": bool, "result": ..., "errors": [...]}``;
    only ``result`` is handed back to the gateway.
    """
    BACKEND_NAME = "workers_ai"

    def __init__(self,
                 account_id: str,
                 api_token: str,
                 base_url: str = DEFAULT_BASE_URL,
                 timeout_s: float = 60.0,
                 client: Optional[httpx.AsyncClient] = None):
        if not account_id or not api_token:
            raise ValueError("WorkersAIBackend requires both account_id and api_token.")
        self._account_id = account_id
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout_s)
        self._headers = {"Authorization": f"Bearer {api_token}"}

    def _run_url(self, model: str) -> str:
        # Model ids such as "@cf/meta/llama-3-8b-instruct" are path segments as-is
        return f"{self._base_url}/accounts/{self._account_id}/ai/run/{model}"

    async def run(self, model: str, payload: Dict[str, Any]) -> Any:
        url = self._run_url(model)
        try:
            response = await self._client.post(url, json=payload, headers=self._headers)
        except httpx.HTTPError as e:
            raise BackendError(f"Workers AI request for '{model}' failed: {e.__class__.__name__}") from e

        if response.status_code >= 400:
            raise BackendError(f"Workers AI returned HTTP {response.status_code} for '{model}'", status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            raise BackendError(f"Workers AI returned a non-JSON body for '{model}'", status_code=response.status_code) from e

        if not isinstance(body, dict) or not body.get("success", False):
            errors = body.get("errors") if isinstance(body, dict) else None
            raise BackendError(f"Workers AI reported failure for '{model}': {errors}", status_code=response.status_code)

        logger.debug(f"Workers AI call for '{model}' succeeded.")
        return body.get("result")

    async def close(self) -> None:
        await self._client.aclose()
