"""
FastAPI application for REDCF.

Provides REST API endpoints for:
- Rental house analysis (annual tables and IRR)
- Standalone IRR of dated cash flows
- IRR sensitivity to the holding period
"""

import os
import logging
import traceback
from typing import Dict, Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from redcf import __version__
from redcf.api.routes import analysis
from redcf.utils.error_utils import (
    ConvergenceError,
    DCFAnalysisError,
    DegenerateCashFlowError,
    InputValidationError,
)

logger = logging.getLogger("redcf")


app = FastAPI(
    title="REDCF API",
    description="Discounted cash flow analysis of rental real estate",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

_default_origins = "http://localhost:3000,http://localhost:5173,http://localhost:8501"
_cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", _default_origins).split(",")]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, exc: DCFAnalysisError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.message,
            "detail": str(exc.__cause__) if exc.__cause__ else None,
            "type": type(exc).__name__,
        },
    )


@app.exception_handler(InputValidationError)
async def input_validation_exception_handler(request: Request, exc: InputValidationError):
    logger.warning(f"Invalid input on {request.method} {request.url.path}: {exc.message}")
    return _error_response(status.HTTP_400_BAD_REQUEST, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request body on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request",
            "detail": str(exc.errors()),
            "type": InputValidationError.__name__,
        },
    )


@app.exception_handler(DegenerateCashFlowError)
async def degenerate_cash_flow_exception_handler(request: Request, exc: DegenerateCashFlowError):
    logger.warning(f"Degenerate cash flows on {request.method} {request.url.path}: {exc.message}")
    return _error_response(422, exc)


@app.exception_handler(ConvergenceError)
async def convergence_exception_handler(request: Request, exc: ConvergenceError):
    logger.warning(f"IRR did not converge on {request.method} {request.url.path}: {exc.message}")
    return _error_response(422, exc)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {type(exc).__name__}: {exc}")
    logger.error(traceback.format_exc())
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "type": type(exc).__name__,
        },
    )


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """API health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "service": "redcf-api",
    }


app.include_router(analysis.router, prefix="/api/analysis", tags=["Analysis"])


@app.get("/")
async def root() -> Dict[str, Any]:
    """API root endpoint with service information."""
    return {
        "service": "REDCF API",
        "version": __version__,
        "docs": "/api/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "redcf.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
