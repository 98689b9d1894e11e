import pytest

from core.model.router import DEFAULT_MODELS, ModelRouter
from core.model.tasks import CanonicalTask


def test_every_task_has_a_model():
    router = ModelRouter()
    for task in CanonicalTask:
        assert router.select_model(task) == DEFAULT_MODELS[task]


def test_default_model_identifiers():
    router = ModelRouter()
    assert router.select_model(CanonicalTask.CHAT) == "@cf/meta/llama-3-8b-instruct"
    assert router.select_model(CanonicalTask.REASONING) == "@cf/deepseek/deepseek-r1-distill-qwen-32b"
    assert router.select_model(CanonicalTask.EMBEDDING) == "@cf/baai/bge-large-en-v1.5"


def test_overrides_apply_and_unknown_tasks_are_ignored():
    router = ModelRouter(overrides={"embedding": "@cf/custom/embedder", "translate": "@cf/x/y"})
    assert router.select_model(CanonicalTask.EMBEDDING) == "@cf/custom/embedder"
    assert router.select_model(CanonicalTask.CHAT) == DEFAULT_MODELS[CanonicalTask.CHAT]
    assert len(router.models) == len(CanonicalTask)


def test_table_is_read_only():
    router = ModelRouter()
    with pytest.raises(TypeError):
        router.models[CanonicalTask.CHAT] = "@cf/other"
