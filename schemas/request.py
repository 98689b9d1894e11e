# infergate/schemas/request.py
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from typing import List

MAX_MESSAGES = 64
MAX_EMBEDDING_CHARS = 8000

TEMPERATURE_RANGE = (0.0, 2.0)
DEFAULT_TEMPERATURE = 0.7
MAX_TOKENS_RANGE = (1, 2048)
DEFAULT_MAX_TOKENS = 512

# Whitespace trimmed from caller text: ASCII whitespace, Unicode space separators,
# line and paragraph separators and the BOM. Unlike str.strip(), \x1c-\x1f and
# \x85 are kept.
TRIM_CHARS = (
    "\t\n\x0b\x0c\r \xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def trim_text(value: str) -> str:
    return value.strip(TRIM_CHARS)


class ChatMessage(BaseModel):
    """
    One chat turn. Extra keys are allowed; the caller's original objects are
    what gets forwarded to the backend.
    """
    model_config = ConfigDict(extra="allow")
    role: StrictStr = Field(..., description="Speaker role, e.g. 'system', 'user', 'assistant'")
    content: StrictStr = Field(..., description="Message text")

    @field_validator("role", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not trim_text(value):
            raise ValueError("must not be blank")
        return value


class ChatInput(BaseModel):
    """
    Shape contract for the chat and reasoning tasks.
    """
    messages: List[ChatMessage] = Field(..., min_length=1, max_length=MAX_MESSAGES)


class EmbeddingInput(BaseModel):
    """
    Shape contract for the embedding task.
    """
    text: StrictStr = Field(..., description="Text to embed")

    @field_validator("text")
    @classmethod
    def trimmed_length(cls, value: str) -> str:
        trimmed = trim_text(value)
        if not trimmed:
            raise ValueError("text must not be blank")
        if len(trimmed) > MAX_EMBEDDING_CHARS:
            raise ValueError(f"text must be at most {MAX_EMBEDDING_CHARS} characters after trimming")
        return value


class GenerationParameters(BaseModel):
    """
    Sampling parameters as sent to the backend, always inside their ranges.
    """
    temperature: float = Field(DEFAULT_TEMPERATURE, ge=TEMPERATURE_RANGE[0], le=TEMPERATURE_RANGE[1])
    max_tokens: int = Field(DEFAULT_MAX_TOKENS, ge=MAX_TOKENS_RANGE[0], le=MAX_TOKENS_RANGE[1])
