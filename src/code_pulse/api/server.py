"""FastAPI server for code-pulse."""

import time
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .. import __version__
from ..analysis.pipeline import VelocityAnalyzer
from ..config.settings import get_settings
from ..exceptions import CodePulseError, UnexpectedError, ValidationError
from ..logging import configure_logging, get_logger
from ..middleware import (
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
)
from ..models.commit import VelocityPoint

settings = get_settings()
configure_logging(settings.log_level)
logger = get_logger(__name__)

START_TIME = time.time()


class AnalyzeRequest(BaseModel):
    """Request model for velocity analysis."""
    url: str


class AnalyzeResponse(BaseModel):
    """Successful analysis response."""
    success: bool = True
    data: List[VelocityPoint]


class ErrorResponse(BaseModel):
    """Failed analysis response."""
    success: bool = False
    error: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("server_started", version=__version__)
    yield
    logger.info("server_stopped")


app = FastAPI(
    title="Code Pulse API",
    description="Development velocity analysis for public GitHub repositories",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.max_request_size)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(RequestIDMiddleware)


def _error_response(exc: CodePulseError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


@app.exception_handler(CodePulseError)
async def code_pulse_error_handler(request: Request, exc: CodePulseError):
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _error_response(ValidationError("Invalid request body: a 'url' string is required."))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error("analyze_error", error=str(exc), error_type=type(exc).__name__)
    return _error_response(UnexpectedError())


def get_analyzer() -> VelocityAnalyzer:
    """Provide a fresh analyzer per request."""
    return VelocityAnalyzer(settings)


def bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    """Extract the upstream credential from an ``Authorization: Bearer`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@app.get("/health")
async def health():
    """Liveness probe."""
    return {
        "status": "ok",
        "version": __version__,
        "uptime_seconds": int(time.time() - START_TIME),
    }


@app.post(
    "/api/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse},
               404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze(
    body: AnalyzeRequest,
    analyzer: VelocityAnalyzer = Depends(get_analyzer),
    token: Optional[str] = Depends(bearer_token),
) -> AnalyzeResponse:
    """
    Analyze the development velocity of a public GitHub repository.

    The most recent commits are fetched and, for each pair of adjacent
    commits with complete data, the lines changed by the newer commit are
    divided by the whole minutes elapsed since the older one (minimum 1).
    Points are returned oldest first.
    """
    points = await analyzer.analyze(body.url, token)
    return AnalyzeResponse(data=points)
