# infergate/core/model/validator.py
from typing import Any, Dict, Mapping, NamedTuple, Type
from types import MappingProxyType
from pydantic import BaseModel, ValidationError

from schemas.request import ChatInput, EmbeddingInput
from utils.errors import ErrorCode, ErrorDetail
from utils.exceptions import APIError
from .tasks import CanonicalTask
import logging

logger = logging.getLogger(f"infergate.{__name__}")


class InputRule(NamedTuple):
    schema: Type[BaseModel]
    error: ErrorDetail


# Reasoning models take the same chat-style message list as chat models.
TASK_INPUT_RULES: Mapping[CanonicalTask, InputRule] = MappingProxyType({
    CanonicalTask.CHAT: InputRule(ChatInput, ErrorCode.INVALID_CHAT_INPUT),
    CanonicalTask.REASONING: InputRule(ChatInput, ErrorCode.INVALID_CHAT_INPUT),
    CanonicalTask.EMBEDDING: InputRule(EmbeddingInput, ErrorCode.INVALID_EMBEDDING_INPUT),
})


class PayloadValidator:
    """
    Enforces the shape contract of a parsed request body.
    Every check raises APIError with a fixed code on failure.
    """
    def __init__(self, rules: Mapping[CanonicalTask, InputRule] = TASK_INPUT_RULES):
        self._rules = rules

    def validate_body(self, body: Any) -> Dict[str, Any]:
        """The body must be a JSON object (not an array, not a primitive)."""
        if not isinstance(body, dict):
            raise APIError(ErrorCode.INVALID_BODY_TYPE, reason=f"body is {type(body).__name__}")
        return body

    def validate_input(self, body: Dict[str, Any], task: CanonicalTask) -> Dict[str, Any]:
        """
        Checks ``body["input"]`` against the rule registered for ``task``.

        Returns:
            The caller's ``input`` object, unchanged.
        """
        input_data = body.get("input")
        if not isinstance(input_data, dict):
            raise APIError(ErrorCode.MISSING_INPUT)

        rule = self._rules[task]
        try:
            rule.schema.model_validate(input_data)
        except ValidationError as e:
            logger.info(f"Rejected {task.value} input: {e.error_count()} validation error(s).")
            raise APIError(rule.error, reason=str(e)) from e
        return input_data
