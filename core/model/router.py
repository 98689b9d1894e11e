# infergate/core/model/router.py
import logging
from types import MappingProxyType
from typing import Mapping, Optional

from .tasks import CanonicalTask

logger = logging.getLogger(f"infergate.{__name__}")

DEFAULT_MODELS: Mapping[CanonicalTask, str] = MappingProxyType({
    CanonicalTask.CHAT: "@cf/meta/llama-3-8b-instruct",
    CanonicalTask.REASONING: "@cf/deepseek/deepseek-r1-distill-qwen-32b",
    CanonicalTask.EMBEDDING: "@cf/baai/bge-large-en-v1.5",
})


class ModelRouter:
    """
    Maps a canonical task to the model identifier the backend should run.
    The table is frozen when the router is built.
    """
    def __init__(self, overrides: Optional[Mapping[str, str]] = None):
        table = dict(DEFAULT_MODELS)
        for task_name, model_id in (overrides or {}).items():
            try:
                task = CanonicalTask(task_name)
            except ValueError:
                logger.warning(f"Ignoring model override for unknown task '{task_name}'.")
                continue
            table[task] = model_id
            logger.info(f"Model for task '{task.value}' overridden to '{model_id}'.")
        self._models: Mapping[CanonicalTask, str] = MappingProxyType(table)

    @property
    def models(self) -> Mapping[CanonicalTask, str]:
        return self._models

    def select_model(self, task: CanonicalTask) -> str:
        return self._models[task]
