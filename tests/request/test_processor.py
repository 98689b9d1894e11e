import asyncio
import json

import pytest

from conftest import RecordingBackend
from core.model.router import ModelRouter
from core.request.processor import RequestProcessor
from utils.exceptions import APIError


def process(raw_body: bytes, backend=None, processor: RequestProcessor = None):
    processor = processor or RequestProcessor()
    return asyncio.run(processor.process(raw_body, backend or RecordingBackend()))


def error_code(raw_body: bytes) -> str:
    with pytest.raises(APIError) as exc_info:
        process(raw_body)
    return exc_info.value.error_code


@pytest.mark.parametrize("raw", [b"{", b"{'a': 1}", b"\xff\xfe\x00", b'{"t": NaN}', b"Infinity"])
def test_unparseable_bodies(raw):
    assert error_code(raw) == "invalid_json"


def test_empty_body_parses_as_empty_object():
    assert RequestProcessor.parse_body(b"") == {}


def test_stage_order_body_type_then_task_then_input():
    assert error_code(b"[]") == "invalid_body_type"
    assert error_code(json.dumps({"task": "summarize"}).encode()) == "invalid_task"
    assert error_code(json.dumps({"task": "embed"}).encode()) == "missing_input"
    assert error_code(json.dumps({"task": "embed", "input": {"text": ""}}).encode()) == "invalid_embedding_input"


def test_success_envelope():
    backend = RecordingBackend(result={"data": [[1.0]]})
    processor = RequestProcessor(model_router=ModelRouter(overrides={"embedding": "@cf/test/embedder"}))
    envelope = process(json.dumps({"task": "vectorize", "input": {"text": " hi "}}).encode(), backend, processor)
    assert envelope.success is True
    assert envelope.task == "embedding"
    assert envelope.model == "@cf/test/embedder"
    assert envelope.result == {"data": [[1.0]]}
    assert backend.calls == [("@cf/test/embedder", {"text": "hi"})]


def test_backend_not_called_for_rejected_input():
    backend = RecordingBackend()
    with pytest.raises(APIError):
        process(json.dumps({"input": {"messages": []}}).encode(), backend)
    assert backend.calls == []


def test_integers_past_the_digit_limit_parse_as_infinity():
    body = RequestProcessor.parse_body(('{"max_tokens": ' + "9" * 5000 + ', "n": -' + "1" * 5000 + "}").encode())
    assert body["max_tokens"] == float("inf")
    assert body["n"] == float("-inf")
    assert RequestProcessor.parse_body(b'{"max_tokens": 12}') == {"max_tokens": 12}
