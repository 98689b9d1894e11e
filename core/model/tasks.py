# infergate/core/model/tasks.py
import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional

from schemas.request import trim_text

logger = logging.getLogger(f"infergate.{__name__}")


class CanonicalTask(str, Enum):
    CHAT = "chat"
    REASONING = "reasoning"
    EMBEDDING = "embedding"


DEFAULT_TASK = CanonicalTask.CHAT

CANONICAL_TASKS: FrozenSet[str] = frozenset(task.value for task in CanonicalTask)

TASK_ALIASES: Mapping[str, str] = MappingProxyType({
    "embed": CanonicalTask.EMBEDDING.value,
    "embeddings": CanonicalTask.EMBEDDING.value,
    "vectorize": CanonicalTask.EMBEDDING.value,
    "reason": CanonicalTask.REASONING.value,
    "analysis": CanonicalTask.REASONING.value,
    "chat": CanonicalTask.CHAT.value,
    "conversation": CanonicalTask.CHAT.value,
})


class TaskResolver:
    """
    Normalizes the free-form ``task`` field of a request to a canonical task.
    """
    def __init__(self, aliases: Mapping[str, str] = TASK_ALIASES, default: CanonicalTask = DEFAULT_TASK):
        self._aliases = aliases
        self._default = default

    def resolve(self, raw_task: Any) -> Optional[CanonicalTask]:
        """
        Args:
            raw_task: the ``task`` value from the request body, any JSON type.
        Returns:
            The canonical task, or None when it cannot be resolved. Absent or
            empty values resolve to the default task.
        """
        if isinstance(raw_task, (list, dict)):
            logger.info("Unresolved task: not a scalar value.")
            return None
        if not raw_task:
            return self._default

        cleaned = trim_text(str(raw_task)).lower()
        normalized = self._aliases.get(cleaned, cleaned)
        if normalized not in CANONICAL_TASKS:
            logger.info(f"Unresolved task '{cleaned[:64]}'.")
            return None
        return CanonicalTask(normalized)
