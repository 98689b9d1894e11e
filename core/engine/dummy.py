# infergate/engine/dummy.py

import hashlib
import logging
from typing import Any, Dict, List

from .base import InferenceBackend

logger = logging.getLogger(f"infergate.{__name__}")

class DummyBackend(InferenceBackend):
    """
    Deterministic local stand-in for the inference backend.
    Lets the gateway run without credentials; never calls the network.
    """
    BACKEND_NAME = "dummy"

    def __init__(self, embedding_dim: int = 8):
        self._embedding_dim = min(embedding_dim, hashlib.sha256().digest_size)

    async def run(self, model: str, payload: Dict[str, Any]) -> Any:
        logger.debug(f"DummyBackend: running '{model}' with keys {sorted(payload)}")
        if "text" in payload:
            return {"shape": [1, self._embedding_dim], "data": [self._embed(payload["text"])]}

        messages = payload.get("messages") or []
        last_content = messages[-1].get("content", "") if messages else ""
        return {"response": f"[{model}] {last_content}"}

    def _embed(self, text: str) -> List[float]:
        # Stable pseudo-embedding derived from the text digest
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        return [round(digest[i] / 255.0, 6) for i in range(self._embedding_dim)]
