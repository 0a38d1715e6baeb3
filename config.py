"""Configuration management with environment variable support."""

import os
import secrets
from dataclasses import dataclass, field

from core.rules import RuleSet


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


def _parse_seed() -> int | None:
    """Parse GAME_SEED environment variable."""
    seed = os.getenv("GAME_SEED")
    if seed is None or not seed.strip():
        return None
    return int(seed)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(default_factory=lambda: _env_flag("RATE_LIMIT_ENABLED", "true"))
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    )


@dataclass(frozen=True)
class GameConfig:
    """Default game configuration."""

    seed: int | None = field(default_factory=_parse_seed)
    dealer_draw_threshold: int = field(
        default_factory=lambda: int(os.getenv("DEALER_DRAW_THRESHOLD", "16"))
    )
    dealer_draws_to_completion: bool = field(
        default_factory=lambda: _env_flag("DEALER_DRAWS_TO_COMPLETION")
    )
    equal_21_is_draw: bool = field(default_factory=lambda: _env_flag("EQUAL_21_IS_DRAW"))

    def rules(self) -> RuleSet:
        """Build the table rules for new games."""
        return RuleSet(
            dealer_draw_threshold=self.dealer_draw_threshold,
            dealer_draws_to_completion=self.dealer_draws_to_completion,
            equal_21_is_draw=self.equal_21_is_draw,
        )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_flag("DEBUG"))
    session_ttl: int = 3600  # Session timeout in seconds

    game: GameConfig = field(default_factory=GameConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Global configuration instance
config = AppConfig()
