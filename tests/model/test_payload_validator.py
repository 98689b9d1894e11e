import pytest

from core.model.tasks import CanonicalTask
from core.model.validator import PayloadValidator
from utils.exceptions import APIError


@pytest.fixture
def validator() -> PayloadValidator:
    return PayloadValidator()


def rejected_code(func, *args) -> str:
    with pytest.raises(APIError) as exc_info:
        func(*args)
    return exc_info.value.error_code


@pytest.mark.parametrize("body", [[], [{"input": {}}], "text", 3, None, True])
def test_body_must_be_an_object(validator, body):
    assert rejected_code(validator.validate_body, body) == "invalid_body_type"


@pytest.mark.parametrize("body", [{}, {"input": None}, {"input": []}, {"input": "hi"}])
def test_input_object_is_required(validator, body):
    assert rejected_code(validator.validate_input, body, CanonicalTask.CHAT) == "missing_input"


def test_valid_chat_input_is_returned_unchanged(validator):
    input_data = {"messages": [{"role": "user", "content": "Hi", "extra": 1}], "temperature": 9}
    assert validator.validate_input({"input": input_data}, CanonicalTask.CHAT) is input_data


@pytest.mark.parametrize(
    "messages",
    [
        [],
        "hello",
        {"role": "user", "content": "hi"},
        [{"role": "user"}],
        [{"content": "hi"}],
        [{"role": " ", "content": "hi"}],
        [{"role": "user", "content": ""}],
        [{"role": "user", "content": 5}],
        [{"role": 1, "content": "hi"}],
        [None],
        ["user: hi"],
        [{"role": "user", "content": "hi"}] * 65,
    ],
)
def test_invalid_chat_messages(validator, messages):
    body = {"input": {"messages": messages}}
    assert rejected_code(validator.validate_input, body, CanonicalTask.CHAT) == "invalid_chat_input"


def test_missing_messages_is_invalid_chat_input(validator):
    assert rejected_code(validator.validate_input, {"input": {}}, CanonicalTask.CHAT) == "invalid_chat_input"


def test_reasoning_shares_chat_rules(validator):
    body = {"input": {"messages": []}}
    assert rejected_code(validator.validate_input, body, CanonicalTask.REASONING) == "invalid_chat_input"
    ok = {"input": {"messages": [{"role": "user", "content": "Why?"}]}}
    assert validator.validate_input(ok, CanonicalTask.REASONING) == ok["input"]


@pytest.mark.parametrize(
    "text", ["", "    ", "\ufeff", "\u2028\u3000", None, 12, ["a"], "b" * 8001, " " + "b" * 8001 + " "]
)
def test_invalid_embedding_text(validator, text):
    body = {"input": {"text": text}}
    assert rejected_code(validator.validate_input, body, CanonicalTask.EMBEDDING) == "invalid_embedding_input"


@pytest.mark.parametrize("text", ["a", "  padded  ", "c" * 8000, "\n" + "c" * 8000 + "\n", "\x1c", "\x85"])
def test_valid_embedding_text(validator, text):
    body = {"input": {"text": text}}
    assert validator.validate_input(body, CanonicalTask.EMBEDDING) == {"text": text}
