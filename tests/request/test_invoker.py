import asyncio

import pytest

from conftest import FailingBackend, RecordingBackend
from core.model.tasks import CanonicalTask
from core.request.invoker import InferenceInvoker, clamp_max_tokens, clamp_temperature
from utils.exceptions import APIError

MESSAGES = [{"role": "user", "content": "Hi"}]


@pytest.mark.parametrize(
    "value, expected",
    [
        (5, 2.0),
        (-1, 0.0),
        (0, 0.0),
        (2, 2.0),
        (0.25, 0.25),
        (float("inf"), 2.0),
        (float("-inf"), 0.0),
        (float("nan"), 0.7),
        (True, 0.7),
        ("1.0", 0.7),
        (None, 0.7),
        (10 ** 400, 2.0),
    ],
)
def test_clamp_temperature(value, expected):
    assert clamp_temperature(value) == pytest.approx(expected)


@pytest.mark.parametrize(
    "value, expected",
    [
        (99999, 2048),
        (0, 1),
        (-3, 1),
        (1, 1),
        (2048, 2048),
        (700, 700),
        (100.9, 100),
        (float("nan"), 512),
        (False, 512),
        ("64", 512),
        (None, 512),
    ],
)
def test_clamp_max_tokens(value, expected):
    result = clamp_max_tokens(value)
    assert result == expected
    assert isinstance(result, int)


def test_chat_payload_shape():
    payload = InferenceInvoker().build_payload(
        CanonicalTask.CHAT, {"messages": MESSAGES, "temperature": 5, "max_tokens": 0, "top_p": 0.1}
    )
    assert payload == {"messages": MESSAGES, "temperature": 2.0, "max_tokens": 1}
    assert payload["messages"] is MESSAGES


def test_reasoning_payload_matches_chat():
    invoker = InferenceInvoker()
    input_data = {"messages": MESSAGES}
    assert invoker.build_payload(CanonicalTask.REASONING, input_data) == invoker.build_payload(CanonicalTask.CHAT, input_data)


def test_embedding_payload_is_trimmed_text_only():
    payload = InferenceInvoker().build_payload(CanonicalTask.EMBEDDING, {"text": "  vector me \n", "extra": 1})
    assert payload == {"text": "vector me"}


def test_embedding_payload_trims_unicode_whitespace_only():
    payload = InferenceInvoker().build_payload(CanonicalTask.EMBEDDING, {"text": "\u3000\ufeffword\x1e\xa0"})
    assert payload == {"text": "word\x1e"}


def test_invoke_passes_model_and_payload_and_returns_result():
    backend = RecordingBackend(result={"response": "ok"})
    result = asyncio.run(
        InferenceInvoker().invoke(backend, CanonicalTask.CHAT, "@cf/model", {"messages": MESSAGES, "temperature": -1})
    )
    assert result == {"response": "ok"}
    assert backend.calls == [("@cf/model", {"messages": MESSAGES, "temperature": 0.0, "max_tokens": 512})]


@pytest.mark.parametrize(
    "exc", [RuntimeError("boom"), asyncio.TimeoutError(), ValueError("bad"), asyncio.CancelledError()]
)
def test_backend_failures_become_ai_inference_failed(exc):
    backend = FailingBackend(exc)
    with pytest.raises(APIError) as exc_info:
        asyncio.run(InferenceInvoker().invoke(backend, CanonicalTask.EMBEDDING, "@cf/embed", {"text": "x"}))
    assert exc_info.value.error_code == "ai_inference_failed"
    assert exc_info.value.status_code == 502
    assert backend.calls == 1
