# infergate/engine/factory.py
from typing import Dict, Type, Optional, List, Any
import logging

from core.config import ConfigManager
from .base import InferenceBackend
from .dummy import DummyBackend
from .workers_ai import WorkersAIBackend, DEFAULT_BASE_URL

logger = logging.getLogger(f"infergate.{__name__}")


class BackendRegistry:
    """
    Manages the registration and creation of inference backend instances.
    """
    def __init__(self):
        self._backends: Dict[str, Type[InferenceBackend]] = {} # Stores name -> backend class

        # Auto-register known backends
        self.register_backend(WorkersAIBackend.BACKEND_NAME, WorkersAIBackend)
        self.register_backend(DummyBackend.BACKEND_NAME, DummyBackend)

    def register_backend(self, name: str, backend_class: Type[InferenceBackend]) -> None:
        """
        Registers a backend class with a given name.
        Args:
            name (str): The unique name for the backend type (e.g., "workers_ai").
            backend_class (Type[InferenceBackend]): The class of the backend to register.
        """
        if not issubclass(backend_class, InferenceBackend):
            raise TypeError(f"Backend class {backend_class.__name__} must inherit from InferenceBackend.")
        if name in self._backends:
            logger.warning(f"Warning: Backend with name '{name}' already registered. Overwriting.")
        self._backends[name] = backend_class
        logger.debug(f"Backend '{name}' (class: {backend_class.__name__}) registered.")

    def get_backend_class(self, name: str) -> Optional[Type[InferenceBackend]]:
        return self._backends.get(name)

    def get_all_backends(self) -> List[str]:
        return list(self._backends.keys())

    def create_backend(self, config: ConfigManager) -> Optional[InferenceBackend]:
        """
        Creates the backend named by ``backend.type`` in the configuration.
        Returns:
            Optional[InferenceBackend]: The backend, or None when it is not configured
                                        or cannot be built. The gateway answers every
                                        request with misconfigured_worker in that case.
        """
        name = config.get_config("backend.type")
        if not name:
            logger.warning("No inference backend configured (backend.type is empty).")
            return None

        backend_class = self.get_backend_class(name)
        if not backend_class:
            logger.error(f"Error: Backend class for '{name}' not found. Known backends: {self.get_all_backends()}")
            return None

        try:
            backend_kwargs = self._backend_kwargs(backend_class, config)
            backend = backend_class(**backend_kwargs)
        except (TypeError, ValueError) as e:
            logger.error(f"Error creating backend '{name}': {e}")
            return None

        logger.info(f"Inference backend '{name}' created.")
        return backend

    def _backend_kwargs(self, backend_class: Type[InferenceBackend], config: ConfigManager) -> Dict[str, Any]:
        if issubclass(backend_class, WorkersAIBackend):
            return {
                "account_id": config.get_secret("backend.account_id", "backend.account_id_env", "CLOUDFLARE_ACCOUNT_ID"),
                "api_token": config.get_secret("backend.api_token", "backend.api_token_env", "CLOUDFLARE_API_TOKEN"),
                "base_url": config.get_config("backend.base_url", DEFAULT_BASE_URL),
                "timeout_s": float(config.get_config("backend.timeout_s", 60)),
            }
        if issubclass(backend_class, DummyBackend):
            return {"embedding_dim": int(config.get_config("backend.embedding_dim", 8))}
        return {}

# Global instance of the registry
backend_registry = BackendRegistry()
