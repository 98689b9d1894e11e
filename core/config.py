# infergate/core/config.py

import copy
import os
import yaml
from typing import Any, Dict, List, Optional
import logging
logger = logging.getLogger(f"infergate.{__name__}")

DEFAULT_CONFIG_PATH = "config/config.yaml"
CONFIG_PATH_ENV = "INFERGATE_CONFIG_PATH"

# Used when no configuration file is present
DEFAULT_CONFIG: Dict[str, Any] = {
    "server": {"host": "0.0.0.0", "port": 8000, "workers": 1, "log_level": "info"},
    "logging": {"file": {"path": None}},
    "auth": {"api_key": None, "api_key_env": "INFERGATE_API_KEY"},
    "backend": {
        "type": "workers_ai",
        "base_url": "https://api.cloudflare.com/client/v4",
        "account_id": None,
        "account_id_env": "CLOUDFLARE_ACCOUNT_ID",
        "api_token_env": "CLOUDFLARE_API_TOKEN",
        "timeout_s": 60,
    },
    "models": {},
}


class ValidationResult:
    def __init__(self, valid: bool, errors: List[str] = None):
        self.valid = valid
        self.errors = errors or []

    def __bool__(self):
        return self.valid

class ConfigValidator:
    """
    Validate the configuration.
    Checks that each known section, when present, has the expected type.
    """
    def __init__(self):
        self._schemas: Dict[str, Any] = {
            "server": dict,
            "logging": dict,
            "auth": dict,
            "backend": dict,
            "models": dict,
        }
        self._required = ("server",)

    def validate(self, config: Any) -> ValidationResult:
        if not isinstance(config, dict):
            return ValidationResult(False, [f"Configuration root must be a mapping, got {type(config)}"])

        errors = []
        for key in self._required:
            if key not in config:
                errors.append(f"Configuration is missing the key: '{key}'")
        for key, expected_type in self._schemas.items():
            if key in config and config[key] is not None and not isinstance(config[key], expected_type):
                errors.append(f"Configuration part '{key}' has the wrong type, expected {expected_type}, got {type(config[key])}")

        models = config.get("models") or {}
        if isinstance(models, dict):
            for task, model_id in models.items():
                if not isinstance(model_id, str) or not model_id.strip():
                    errors.append(f"Model identifier for task '{task}' must be a non-empty string")

        if errors:
            return ValidationResult(False, errors)
        return ValidationResult(True)


class ConfigLoader:
    """
    Configuration loading interface.
    """
    def load(self) -> Dict:
        raise NotImplementedError


class FileConfigLoader(ConfigLoader):
    """
    Load configuration from a configuration file (YAML/JSON).
    """
    def __init__(self, file_path: str, file_format: str = "yaml"):
        self._file_path = file_path
        self._format = file_format.lower()
        if not os.path.exists(self._file_path):
            raise FileNotFoundError(f"Configuration file not found: {self._file_path}")

    def load(self) -> Dict:
        """Load configuration from a file"""
        try:
            with open(self._file_path, 'r', encoding='utf-8') as f:
                if self._format == "yaml":
                    return yaml.safe_load(f) or {}
                elif self._format == "json":
                    import json
                    return json.load(f)
                else:
                    raise ValueError(f"Unsupported configuration file format: {self._format}")
        except Exception as e:
            logger.error(f"Failed to load configuration file '{self._file_path}': {e}")
            raise


class DictConfigLoader(ConfigLoader):
    """
    Serve configuration from an in-memory mapping (defaults, tests).
    """
    def __init__(self, data: Dict[str, Any]):
        self._data = data

    def load(self) -> Dict:
        return copy.deepcopy(self._data)


class ConfigManager:
    """
    Loads, validates and serves the gateway configuration.
    Values are read once at start-up and treated as read-only afterwards.
    """
    def __init__(self, loader: ConfigLoader = None, validator: ConfigValidator = None):
        self._config_data: Dict = {}
        self._loader = loader
        self._validator = validator or ConfigValidator()

        if self._loader:
            self.load_config()

    def load_config(self) -> bool:
        """Load configuration, if a loader is provided."""
        if not self._loader:
            logger.error("Error: No configuration loader (ConfigLoader) provided.")
            return False
        try:
            new_config = self._loader.load()
            validation_result = self._validator.validate(new_config)
            if not validation_result:
                logger.error(f"Configuration validation failed: {validation_result.errors}")
                return False
            self._config_data = new_config
            logger.info("Configuration loaded and validated successfully.")
            return True
        except Exception as e:
            logger.error(f"Error loading configuration: {e}")
            return False

    def get_config(self, path: str, default: Any = None) -> Any:
        """
        Get a configuration item by path, e.g. "server.port".
        """
        if not self._config_data:
            logger.warning("Warning: Configuration data is empty. Possibly not loaded or loading failed.")
            return default

        value = self._config_data
        for key in path.split('.'):
            if not isinstance(value, dict) or key not in value:
                return default
            value = value[key]
        return default if value is None else value

    def get_secret(self, value_path: str, env_path: str, default_env: Optional[str] = None) -> Optional[str]:
        """
        Resolve a secret: the environment variable named at ``env_path`` wins
        over the literal value at ``value_path``. Blank values count as unset.
        """
        env_name = self.get_config(env_path, default_env)
        if env_name:
            env_value = os.getenv(env_name)
            if env_value and env_value.strip():
                return env_value
        value = self.get_config(value_path)
        if isinstance(value, str) and value.strip():
            return value
        return None

    def get_api_key(self) -> Optional[str]:
        """The shared secret callers must present in ``x-api-key``."""
        return self.get_secret("auth.api_key", "auth.api_key_env", "INFERGATE_API_KEY")


_config_manager: Optional[ConfigManager] = None

def get_config_manager(config_file_path: str = None) -> ConfigManager:
    """
    Get the process-wide ConfigManager.
    On first call, the file at ``config_file_path`` (or ``$INFERGATE_CONFIG_PATH``,
    or ``config/config.yaml``) is loaded; a missing file falls back to DEFAULT_CONFIG.
    """
    global _config_manager
    if _config_manager is None:
        if config_file_path is None:
            config_file_path = os.getenv(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)

        if os.path.exists(config_file_path):
            loader: ConfigLoader = FileConfigLoader(file_path=config_file_path)
        else:
            logger.warning(f"Warning: Configuration file '{config_file_path}' not found. Using built-in default configuration.")
            loader = DictConfigLoader(DEFAULT_CONFIG)
        _config_manager = ConfigManager(loader=loader)

    return _config_manager
