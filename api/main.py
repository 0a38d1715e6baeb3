"""FastAPI application entry point."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.routes import game
from config import config
from core.errors import DeckExhausted, InvalidRank

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


def _deck_exhausted_handler(request: Request, exc: DeckExhausted) -> JSONResponse:
    """The game cannot continue without a new deal."""
    return JSONResponse(
        status_code=409,
        content={"detail": f"{exc}; reset required"},
    )


def _invalid_rank_handler(request: Request, exc: InvalidRank) -> JSONResponse:
    """Stored session data held a card outside the standard deck."""
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)},
    )


app = FastAPI(
    title="Blackjack",
    description="Player versus dealer blackjack rules engine API",
    version="0.1.0",
    debug=config.debug,
)

# Add rate limiter to app state and exception handlers
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(DeckExhausted, _deck_exhausted_handler)
app.add_exception_handler(InvalidRank, _invalid_rank_handler)

# Apply the default per-client limit to every route
app.add_middleware(SlowAPIMiddleware)

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
app.include_router(game.router, prefix="/api/game", tags=["game"])
