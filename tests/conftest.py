import pytest
from typing import Any, Dict, List, Tuple

from fastapi.testclient import TestClient

from core.config import ConfigManager, DictConfigLoader
from core.engine.base import InferenceBackend
from main import create_app

API_KEY = "test-secret"


class RecordingBackend(InferenceBackend):
    """Test double that records every (model, payload) it receives."""

    def __init__(self, result: Any = None):
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.result = result if result is not None else {"response": "hello"}

    async def run(self, model: str, payload: Dict[str, Any]) -> Any:
        self.calls.append((model, payload))
        return self.result

    @property
    def last_payload(self) -> Dict[str, Any]:
        return self.calls[-1][1]

    @property
    def last_model(self) -> str:
        return self.calls[-1][0]


class FailingBackend(InferenceBackend):
    """Test double whose every call fails."""

    def __init__(self, exc: BaseException = None):
        self.exc = exc or RuntimeError("upstream exploded: secret internals")
        self.calls = 0

    async def run(self, model: str, payload: Dict[str, Any]) -> Any:
        self.calls += 1
        raise self.exc


def make_config(**sections: Any) -> ConfigManager:
    data: Dict[str, Any] = {
        "server": {"port": 8000, "log_level": "info"},
        "auth": {"api_key": None, "api_key_env": "INFERGATE_TEST_UNSET_KEY"},
        "backend": {"type": None},
        "models": {},
    }
    data.update(sections)
    return ConfigManager(loader=DictConfigLoader(data))


@pytest.fixture
def config() -> ConfigManager:
    return make_config()


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def client(config: ConfigManager, backend: RecordingBackend) -> TestClient:
    app = create_app(config_manager=config, backend=backend, api_key=API_KEY)
    return TestClient(app)


@pytest.fixture
def headers() -> Dict[str, str]:
    return {"x-api-key": API_KEY, "content-type": "application/json"}


def chat_body(**input_fields: Any) -> Dict[str, Any]:
    input_data = {"messages": [{"role": "user", "content": "Hi"}]}
    input_data.update(input_fields)
    return {"task": "chat", "input": input_data}
