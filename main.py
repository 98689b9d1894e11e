# main.py
import logging
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.formatter import ResponseFormatter
from utils.exceptions import APIError
from utils.errors import ErrorCode, ErrorDetail
# Core and services
from core.config import get_config_manager, ConfigManager
from core.logging import log_request_outcome, setup_logging
from core.auth.gate import RequestGate
from core.engine.base import InferenceBackend
from core.engine.factory import backend_registry
from core.model.router import ModelRouter
from core.request.processor import RequestProcessor
# API Routers
from api.openapi.inference import router as inference_router


logger = logging.getLogger(f"infergate.{__name__}")

APP_NAME = "infergate"
APP_VERSION = "1.0.0"


def create_app(config_manager: Optional[ConfigManager] = None,
               backend: Optional[InferenceBackend] = None,
               api_key: Optional[str] = None) -> FastAPI:
    """
    Builds the gateway application.

    ``backend`` and ``api_key`` default to what the configuration provides;
    either may end up missing, which the request gate reports per request.
    """
    config = config_manager or get_config_manager()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(config)
        models = {task.value: model for task, model in app.state.request_processor.model_router.models.items()}
        logger.info(f"{APP_NAME} {APP_VERSION} starting. Models: {models}")
        yield
        # Shutdown
        logger.info("Application shutdown...")
        if app.state.backend is not None:
            await app.state.backend.close()
            logger.info("Inference backend closed.")

    app = FastAPI(
        title=config.get_config("server.name", "Inference Gateway"),
        description="Validates, routes and forwards chat, reasoning and embedding requests to an AI inference backend.",
        version=APP_VERSION,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.backend = backend if backend is not None else backend_registry.create_backend(config)
    app.state.api_key = api_key if api_key is not None else config.get_api_key()
    app.state.request_gate = RequestGate()
    app.state.request_processor = RequestProcessor(
        model_router=ModelRouter(overrides=config.get_config("models", {})),
    )

    register_exception_handlers(app)
    app.include_router(inference_router, tags=["Inference"])
    return app


def register_exception_handlers(app: FastAPI) -> None:

    def error_response(request: Request, error: ErrorDetail):
        log_request_outcome(request.method, request.url.path, error.status_code, code=error.code)
        return ResponseFormatter.error(error)

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        if exc.reason:
            logger.debug(f"{exc.error_code}: {exc.reason}")
        return error_response(request, exc.error)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            # Methods the router does not list still answer configuration errors first
            state = request.app.state
            try:
                RequestGate.check_configuration(getattr(state, "backend", None), getattr(state, "api_key", None))
            except APIError as config_error:
                return error_response(request, config_error.error)
            return error_response(request, ErrorCode.METHOD_NOT_ALLOWED)
        try:
            phrase = HTTPStatus(exc.status_code).phrase
        except ValueError:
            phrase = "Error"
        return error_response(request, ErrorDetail(exc.status_code, f"http_{exc.status_code}", f"{phrase}."))

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception for request {request.url.path}: {exc}", exc_info=True)
        return error_response(request, ErrorCode.INTERNAL_ERROR)


app = create_app()

# To run this application:
# pip install -e .
# Then run: uvicorn main:app --reload   (or: python run.py)
