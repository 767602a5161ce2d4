#!/usr/bin/env python3
"""
Review Sentiment Service
FastAPI application exposing the lexicon-based review classifier
"""

import json
import uuid
from datetime import datetime, UTC
from typing import Any, Dict, Tuple

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from config import Config, get_config
from services.logging_utils import get_structured_logger
from services.observability import metrics_router, record_request_metrics, request_timer, elapsed
from services.report import format_report
from services.sentiment import ClassificationResult, SentimentService
from services.validation import ReviewValidationError, validate_review

# Initialize logger
logger = get_structured_logger(__name__)

# Global state
config = get_config()
sentiment_service = SentimentService()

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Initialize FastAPI app
app = FastAPI(
    title="Review Sentiment Service",
    description="Lexicon-based sentiment classification for short reviews",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(metrics_router)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Attach a request id and record request metrics"""
    header = get_config().REQUEST_ID_HEADER
    request_id = request.headers.get(header) or uuid.uuid4().hex
    request.state.request_id = request_id

    start = request_timer()
    response = await call_next(request)
    duration = elapsed(start)

    response.headers[header] = request_id
    record_request_metrics(request, response.status_code, duration)
    logger.debug(
        f"{request.method} {request.url.path} -> {response.status_code}",
        request_id=request_id,
        duration=duration,
    )
    return response


async def _read_payload(request: Request) -> Any:
    # Unparseable bodies count as having no review
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


async def _classify_request(request: Request) -> Tuple[str, ClassificationResult, str]:
    payload = await _read_payload(request)
    review = validate_review(payload)
    mode = sentiment_service.mode
    return review, sentiment_service.analyze(review), mode


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@app.post("/api/analyze")
async def analyze_review(request: Request):
    """Classify the sentiment of a review"""
    try:
        _, result, _ = await _classify_request(request)
        return {"success": True, "data": result.to_dict()}
    except ReviewValidationError as e:
        logger.info("Review rejected", reason=e.message, request_id=request.state.request_id)
        return _error_response(e.message, 400)
    except Exception:
        logger.exception("Error analyzing sentiment", request_id=request.state.request_id)
        return _error_response(INTERNAL_ERROR_MESSAGE, 500)


@app.post("/api/analyze/report")
async def analyze_review_report(request: Request):
    """Classify a review and return a plain-text summary"""
    try:
        review, result, mode = await _classify_request(request)
        return PlainTextResponse(format_report(review, result, mode))
    except ReviewValidationError as e:
        logger.info("Review rejected", reason=e.message, request_id=request.state.request_id)
        return _error_response(e.message, 400)
    except Exception:
        logger.exception("Error building sentiment report", request_id=request.state.request_id)
        return _error_response(INTERNAL_ERROR_MESSAGE, 500)


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"ok": True, "timestamp": datetime.now(UTC).isoformat()}


# Startup event
@app.on_event("startup")
async def startup_event():
    """Log the active classifier setup"""
    lexicon = sentiment_service.lexicon
    logger.info(
        "Starting Review Sentiment Service...",
        mode=sentiment_service.mode,
        positive_words=len(lexicon.positive_words),
        negative_words=len(lexicon.negative_words),
        neutral_words=len(lexicon.neutral_words),
    )


def server_options(cfg: Config) -> Dict[str, Any]:
    """uvicorn settings for the given config; reload only in development"""
    return {
        "host": "0.0.0.0",
        "port": cfg.PORT,
        "reload": cfg.APP_ENV == "development",
    }


if __name__ == "__main__":
    uvicorn.run("app:app", **server_options(get_config()))
