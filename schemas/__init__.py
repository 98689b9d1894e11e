# infergate/schemas/__init__.py
from .common import ErrorInfo, SuccessEnvelope, ErrorEnvelope
from .request import (
    ChatMessage,
    ChatInput,
    EmbeddingInput,
    GenerationParameters,
)
__all__ = [
    "ErrorInfo",
    "SuccessEnvelope",
    "ErrorEnvelope",
    "ChatMessage",
    "ChatInput",
    "EmbeddingInput",
    "GenerationParameters",
]
