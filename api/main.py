"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from api.routes import blackjack, stats
from blackjack.errors import NoActiveSession, SessionAlreadyActive
from config import config, setup_logging

logger = logging.getLogger(__name__)

# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    enabled=config.rate_limit.enabled,
    default_limits=[f"{config.rate_limit.requests_per_minute}/minute"],
)


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


def _session_already_active_handler(request: Request, exc: SessionAlreadyActive) -> JSONResponse:
    """Tell the player to finish the current game first."""
    return JSONResponse(
        status_code=409,
        content={"detail": "You already have a blackjack game in progress. Hit or stand to finish it."},
    )


def _no_active_session_handler(request: Request, exc: NoActiveSession) -> JSONResponse:
    """Tell the player to start a game first."""
    return JSONResponse(
        status_code=404,
        content={"detail": "No active blackjack game found. Start a new one."},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging when the server starts."""
    setup_logging()
    logger.info("Blackjack table API starting")
    yield


app = FastAPI(
    title="Blackjack Table",
    description="Blackjack games for chat-bot players",
    version="0.1.0",
    debug=config.debug,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(SessionAlreadyActive, _session_already_active_handler)
app.add_exception_handler(NoActiveSession, _no_active_session_handler)

# CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors.allowed_origins,
    allow_credentials=config.cors.allow_credentials,
    allow_methods=config.cors.allow_methods,
    allow_headers=config.cors.allow_headers,
)


@app.get("/api/health")
@limiter.limit(f"{config.rate_limit.requests_per_minute}/minute")
async def health_check(request: Request) -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


# Include routers
app.include_router(blackjack.router, prefix="/api/blackjack", tags=["blackjack"])
app.include_router(stats.router, prefix="/api/stats", tags=["stats"])


def serve() -> None:
    """Run the API with uvicorn."""
    logger.info("Serving on %s:%d", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.logging.level.lower())


if __name__ == "__main__":
    serve()
