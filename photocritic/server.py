"""HTTP surface — GET /health and POST /analyze over a shared PhotoAnalyzer."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as SchemaError

from photocritic.constants import (
    MSG_ANALYZE_FAIL,
    MSG_BAD_REQUEST,
    MSG_ERR_ANALYSIS_FAILED,
    MSG_ERR_IMAGE_REQUIRED,
    MSG_ERR_INVALID_FORMAT,
    MSG_ERR_INVALID_IMAGE,
    MSG_UNEXPECTED_FAIL,
)
from photocritic.errors import ClientInputError, DecodeError, InvalidRequest, ProcessingError
from photocritic.pipeline import PhotoAnalyzer
from photocritic.schemas import AnalyzeRequest, AnalyzeResponse, ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)

_CORS_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
_CORS_HEADERS = ["Origin", "Content-Length", "Content-Type", "Authorization"]


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _client_message(exc: ClientInputError) -> str:
    match exc:
        case DecodeError():
            return MSG_ERR_INVALID_IMAGE
        case _:
            return MSG_ERR_IMAGE_REQUIRED


def create_app(analyzer: PhotoAnalyzer) -> FastAPI:
    """Build the API around one analyzer; the analyzer is reused across requests."""
    app = FastAPI(title="photocritic", version="0.1.0")
    app.state.analyzer = analyzer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=_CORS_METHODS,
        allow_headers=_CORS_HEADERS,
    )

    @app.exception_handler(ClientInputError)
    async def client_input_error(_: Request, exc: ClientInputError) -> JSONResponse:
        logger.info(MSG_BAD_REQUEST, exc.stage, exc)
        return _error(400, _client_message(exc))

    @app.exception_handler(ProcessingError)
    async def processing_error(_: Request, exc: ProcessingError) -> JSONResponse:
        logger.error(MSG_ANALYZE_FAIL, exc.stage, exc)
        return _error(500, MSG_ERR_ANALYSIS_FAILED)

    @app.exception_handler(Exception)
    async def unexpected_error(_: Request, exc: Exception) -> JSONResponse:
        logger.exception(MSG_UNEXPECTED_FAIL, exc)
        return _error(500, MSG_ERR_ANALYSIS_FAILED)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse()

    @app.post(
        "/analyze",
        response_model=AnalyzeResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def analyze(request: Request) -> AnalyzeResponse:
        try:
            body = AnalyzeRequest.model_validate_json(await request.body())
        except SchemaError as exc:
            logger.info(MSG_BAD_REQUEST, InvalidRequest.stage, exc)
            return _error(400, MSG_ERR_INVALID_FORMAT)

        if not body.image:
            raise InvalidRequest("image field is missing or empty")

        analysis = await request.app.state.analyzer.analyze(body.image)
        return AnalyzeResponse(**analysis.to_response())

    return app
