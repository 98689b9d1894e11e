# infergate/request/processor.py
import json
import logging
from typing import Any, Optional

from core.engine.base import InferenceBackend
from core.model.router import ModelRouter
from core.model.tasks import TaskResolver
from core.model.validator import PayloadValidator
from schemas.common import SuccessEnvelope
from utils.errors import ErrorCode
from utils.exceptions import APIError
from .invoker import InferenceInvoker

logger = logging.getLogger(f"infergate.{__name__}")


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def _parse_int(literal: str) -> Any:
    # Integers past the interpreter's digit limit become float (inf) and are clamped later
    try:
        return int(literal)
    except ValueError:
        return float(literal)


class RequestProcessor:
    """
    Runs an admitted request body through the pipeline:
    parse -> resolve task -> validate input -> select model -> invoke backend.
    Each stage either hands over to the next one or raises APIError.
    """
    def __init__(self,
                 model_router: Optional[ModelRouter] = None,
                 task_resolver: Optional[TaskResolver] = None,
                 payload_validator: Optional[PayloadValidator] = None,
                 invoker: Optional[InferenceInvoker] = None):
        self._model_router: ModelRouter = model_router or ModelRouter()
        self._task_resolver: TaskResolver = task_resolver or TaskResolver()
        self._payload_validator: PayloadValidator = payload_validator or PayloadValidator()
        self._invoker: InferenceInvoker = invoker or InferenceInvoker()

    @property
    def model_router(self) -> ModelRouter:
        return self._model_router

    @staticmethod
    def parse_body(raw_body: bytes) -> Any:
        """An empty body parses as an empty object."""
        try:
            return json.loads(raw_body or b"{}", parse_constant=_reject_constant, parse_int=_parse_int)
        except (ValueError, RecursionError) as e:
            raise APIError(ErrorCode.INVALID_JSON, reason=str(e)) from e

    async def process(self, raw_body: bytes, backend: InferenceBackend) -> SuccessEnvelope:
        body = self._payload_validator.validate_body(self.parse_body(raw_body))

        task = self._task_resolver.resolve(body.get("task"))
        if task is None:
            raise APIError(ErrorCode.INVALID_TASK)

        input_data = self._payload_validator.validate_input(body, task)
        model = self._model_router.select_model(task)
        logger.info(f"Routing '{task.value}' request to model '{model}'.")

        result = await self._invoker.invoke(backend, task, model, input_data)
        return SuccessEnvelope(task=task.value, model=model, result=result)
