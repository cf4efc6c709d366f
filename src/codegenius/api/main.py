"""
FastAPI application for the CodeGenius gateway.

This module configures the FastAPI application, registers the health and
code-assist routes, installs CORS and request logging middleware, and maps
gateway errors to HTTP responses.  :func:`create_app` takes the
configuration (and optionally a backend) explicitly; the module-level
``app`` is built from the environment for use with Uvicorn.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..backend import TextGenerationBackend
from ..config import Config
from ..errors import ClientInputError
from ..gateway import MISSING_TEXT_MESSAGE, CodeAssistGateway
from ..models import MAX_TEXT_LENGTH, CodeAssistRequest, HealthResponse, Operation, ResponseEnvelope


logger = logging.getLogger("codegenius")

if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[codegenius] %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

logger.setLevel(logging.INFO)


router = APIRouter()


def get_gateway(request: Request) -> CodeAssistGateway:
    return request.app.state.gateway


def _envelope_response(envelope: ResponseEnvelope) -> JSONResponse:
    status_code = 500 if envelope.is_error else 200
    return JSONResponse(status_code=status_code, content=envelope.to_body())


@router.get("/", response_model=HealthResponse)
@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Return a simple health check response."""
    config: Config = request.app.state.config
    return HealthResponse(status="ok", message=f"{config.app_title} API Server Running")


@router.post("/api/execute", response_model=ResponseEnvelope, response_model_exclude_none=True)
async def execute_code(
    req: Optional[CodeAssistRequest] = Body(None),
    gateway: CodeAssistGateway = Depends(get_gateway),
) -> JSONResponse:
    """Ask the model to narrate the output of running the snippet."""
    return await _run(gateway, Operation.EXECUTE, req)


@router.post("/api/fix", response_model=ResponseEnvelope, response_model_exclude_none=True)
async def fix_code(
    req: Optional[CodeAssistRequest] = Body(None),
    gateway: CodeAssistGateway = Depends(get_gateway),
) -> JSONResponse:
    """Ask the model for an improved version of the snippet plus an explanation."""
    return await _run(gateway, Operation.FIX, req)


async def _run(
    gateway: CodeAssistGateway,
    operation: Operation,
    req: Optional[CodeAssistRequest],
) -> JSONResponse:
    if req is not None:
        logger.info("[/api/%s] language=%s, %d chars", operation.value, req.language, len(req.text or ""))
    try:
        envelope = await gateway.handle(operation, req)
    except ClientInputError:
        raise
    except Exception as exc:
        logger.exception("[/api/%s] Unhandled error: %s", operation.value, exc)
        envelope = ResponseEnvelope(
            text=f"Error processing your request: {exc}. Please try again.",
            is_error=True,
            error_message=str(exc),
        )
    return _envelope_response(envelope)


def _client_error_response(message: str, details=None) -> JSONResponse:
    envelope = ResponseEnvelope(is_error=True, error_message=message, error_details=details)
    return JSONResponse(status_code=400, content=envelope.to_body())


async def client_input_error_handler(request: Request, exc: ClientInputError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return _client_error_response(exc.message, exc.details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    # A body that is not a JSON object carries no text at all.
    if any(tuple(err.get("loc", ())) == ("body",) for err in errors):
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, MISSING_TEXT_MESSAGE)
        return _client_error_response(MISSING_TEXT_MESSAGE)
    if any(err.get("type") == "string_too_long" for err in errors):
        logger.warning("Rejected %s %s: text too large", request.method, request.url.path)
        envelope = ResponseEnvelope(
            is_error=True,
            error_message=f"Request text too large (limit {MAX_TEXT_LENGTH} characters)",
        )
        return JSONResponse(status_code=413, content=envelope.to_body())
    logger.warning("Invalid request body for %s %s", request.method, request.url.path)
    return _client_error_response("Invalid request body", jsonable_encoder(errors))


def create_app(
    config: Optional[Config] = None,
    backend: Optional[TextGenerationBackend] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    if config is None:
        config = Config.from_env()

    logger.info(
        "Loaded config: upstream_url=%s, model=%s, failure_policy=%s, cors_origins=%s",
        config.upstream_url,
        config.model,
        config.failure_policy,
        list(config.cors_origins),
    )
    logger.info("API key present: %s", config.upstream_configured)

    app = FastAPI(title=f"{config.app_title} Code Assist Gateway", version="0.1.0")
    app.state.config = config
    app.state.gateway = CodeAssistGateway(config, backend)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every incoming request and the resulting status code."""
        method = request.method
        path = request.url.path
        client = getattr(request.client, "host", "unknown")

        logger.info("Incoming request: %s %s from %s", method, path, client)
        response = await call_next(request)
        logger.info("Response: %s %s -> %s", method, path, response.status_code)
        return response

    app.add_exception_handler(ClientInputError, client_input_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(router)
    return app


app = create_app()
