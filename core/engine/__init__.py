# infergate/engine/__init__.py
from .base import InferenceBackend
from .dummy import DummyBackend
from .workers_ai import WorkersAIBackend
from .factory import BackendRegistry, backend_registry

__all__ = [
    "InferenceBackend",
    "DummyBackend",
    "WorkersAIBackend",
    "BackendRegistry",
    "backend_registry",
]
