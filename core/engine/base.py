# infergate/engine/base.py
from abc import ABC, abstractmethod
from typing import Any, Dict


class InferenceBackend(ABC):
    """
    Interface for external AI inference backends.
    The gateway depends only on this interface; the backend itself is opaque.
    """

    @abstractmethod
    async def run(self, model: str, payload: Dict[str, Any]) -> Any:
        """
        Runs ``model`` on ``payload``.
        Args:
            model (str): Model identifier, e.g. "@cf/meta/llama-3-8b-instruct".
            payload (Dict[str, Any]): Task-specific request body, already validated
                                      and clamped by the gateway.
        Returns:
            Any: The backend's result, returned to the caller unchanged.
        Raises:
            Exception: Any failure; the gateway reports it as ai_inference_failed.
        """
        raise NotImplementedError

    async def close(self) -> None:
        """Releases network resources held by the backend, if any."""
        return None
