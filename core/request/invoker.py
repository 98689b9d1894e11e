# infergate/request/invoker.py
import asyncio
import logging
import math
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Union

from core.engine.base import InferenceBackend
from core.model.tasks import CanonicalTask
from schemas.request import (
    GenerationParameters,
    trim_text,
    TEMPERATURE_RANGE,
    DEFAULT_TEMPERATURE,
    MAX_TOKENS_RANGE,
    DEFAULT_MAX_TOKENS,
)
from utils.errors import ErrorCode
from utils.exceptions import APIError

logger = logging.getLogger(f"infergate.{__name__}")


def _as_number(value: Any) -> Optional[Union[int, float]]:
    """Returns ``value`` if it is a JSON number (booleans and NaN excluded), else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def clamp_temperature(value: Any) -> float:
    number = _as_number(value)
    if number is None:
        return DEFAULT_TEMPERATURE
    low, high = TEMPERATURE_RANGE
    return float(min(max(number, low), high))


def clamp_max_tokens(value: Any) -> int:
    number = _as_number(value)
    if number is None:
        return DEFAULT_MAX_TOKENS
    low, high = MAX_TOKENS_RANGE
    return int(min(max(number, low), high))


def build_chat_payload(input_data: Dict[str, Any]) -> Dict[str, Any]:
    params = GenerationParameters(
        temperature=clamp_temperature(input_data.get("temperature")),
        max_tokens=clamp_max_tokens(input_data.get("max_tokens")),
    )
    return {"messages": input_data["messages"], **params.model_dump()}


def build_embedding_payload(input_data: Dict[str, Any]) -> Dict[str, Any]:
    return {"text": trim_text(input_data["text"])}


PayloadBuilder = Callable[[Dict[str, Any]], Dict[str, Any]]

TASK_PAYLOAD_BUILDERS: Mapping[CanonicalTask, PayloadBuilder] = MappingProxyType({
    CanonicalTask.CHAT: build_chat_payload,
    CanonicalTask.REASONING: build_chat_payload,
    CanonicalTask.EMBEDDING: build_embedding_payload,
})


class InferenceInvoker:
    """
    Builds the backend request for a validated input and awaits the backend once.
    """
    def __init__(self, builders: Mapping[CanonicalTask, PayloadBuilder] = TASK_PAYLOAD_BUILDERS):
        self._builders = builders

    def build_payload(self, task: CanonicalTask, input_data: Dict[str, Any]) -> Dict[str, Any]:
        return self._builders[task](input_data)

    async def invoke(self,
                     backend: InferenceBackend,
                     task: CanonicalTask,
                     model: str,
                     input_data: Dict[str, Any]) -> Any:
        """
        Args:
            backend (InferenceBackend): The configured inference capability.
            task (CanonicalTask): Resolved task, selects the payload builder.
            model (str): Model identifier from the ModelRouter.
            input_data (Dict[str, Any]): The validated ``input`` object.
        Returns:
            Any: The backend result, unchanged.
        Raises:
            APIError: ai_inference_failed when the backend raises or the call is
                      cancelled. The underlying error is logged, never returned
                      to the caller.
        """
        payload = self.build_payload(task, input_data)
        try:
            return await backend.run(model, payload)
        except (asyncio.CancelledError, Exception) as e:
            logger.error(f"Inference call to model '{model}' for task '{task.value}' failed: {e}", exc_info=True)
            raise APIError(ErrorCode.AI_INFERENCE_FAILED, reason=str(e)) from e
