from http import HTTPStatus

from fastapi import status

class ErrorDetail:
    def __init__(self, status_code: int, code: str, message: str):
        self.status_code = status_code
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"ErrorDetail({self.status_code}, {self.code!r})"

class ErrorCode:
    """Gateway error code and message definitions"""

    # Configuration errors (deployment defects)
    MISCONFIGURED_WORKER = ErrorDetail(status.HTTP_500_INTERNAL_SERVER_ERROR, "misconfigured_worker", "AI binding is not configured.")
    MISSING_API_KEY_SECRET = ErrorDetail(status.HTTP_500_INTERNAL_SERVER_ERROR, "missing_api_key_secret", "API key is not configured.")
    INTERNAL_ERROR = ErrorDetail(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", "An unexpected internal server error occurred.")

    # Request gate errors
    METHOD_NOT_ALLOWED = ErrorDetail(status.HTTP_405_METHOD_NOT_ALLOWED, "method_not_allowed", "Method not allowed. Use POST.")
    UNAUTHORIZED = ErrorDetail(status.HTTP_401_UNAUTHORIZED, "unauthorized", "Invalid or missing API key.")
    INVALID_CONTENT_TYPE = ErrorDetail(status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, "invalid_content_type", "Content-Type must be application/json.")
    PAYLOAD_TOO_LARGE = ErrorDetail(HTTPStatus.REQUEST_ENTITY_TOO_LARGE.value, "payload_too_large", "Payload too large.")

    # Payload errors
    INVALID_JSON = ErrorDetail(status.HTTP_400_BAD_REQUEST, "invalid_json", "Invalid JSON payload.")
    INVALID_BODY_TYPE = ErrorDetail(status.HTTP_400_BAD_REQUEST, "invalid_body_type", "Request body must be a JSON object.")
    INVALID_TASK = ErrorDetail(status.HTTP_400_BAD_REQUEST, "invalid_task", "Unsupported task type.")
    MISSING_INPUT = ErrorDetail(status.HTTP_400_BAD_REQUEST, "missing_input", "Input payload is required.")
    INVALID_CHAT_INPUT = ErrorDetail(status.HTTP_400_BAD_REQUEST, "invalid_chat_input", "Chat requests require a messages array with role and content.")
    INVALID_EMBEDDING_INPUT = ErrorDetail(status.HTTP_400_BAD_REQUEST, "invalid_embedding_input", "Embedding requests require a non-empty text field.")

    # Inference backend errors
    AI_INFERENCE_FAILED = ErrorDetail(status.HTTP_502_BAD_GATEWAY, "ai_inference_failed", "AI provider error. Please retry.")
