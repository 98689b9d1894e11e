# infergate/auth/__init__.py
from .gate import RequestGate, API_KEY_HEADER, MAX_REQUEST_BYTES

__all__ = [
    "RequestGate",
    "API_KEY_HEADER",
    "MAX_REQUEST_BYTES",
]
