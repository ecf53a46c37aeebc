"""Configuration management with environment variable support."""

import os
import secrets
from dataclasses import dataclass, field


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


def _env_flag(name: str, default: str) -> bool:
    """Read a true/false environment variable."""
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
class RedisConfig:
    """Redis connection configuration."""

    enabled: bool = field(default_factory=lambda: _env_flag("REDIS_ENABLED", "true"))
    host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    db: int = field(default_factory=lambda: int(os.getenv("REDIS_DB", "0")))
    password: str | None = field(default_factory=lambda: os.getenv("REDIS_PASSWORD"))

    @property
    def url(self) -> str:
        """Build Redis connection URL."""
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


@dataclass(frozen=True)
class TrainerConfig:
    """Strategy drill configuration."""

    low_deck_threshold: int = field(
        default_factory=lambda: int(os.getenv("LOW_DECK_THRESHOLD", "10"))
    )
    auto_advance_seconds: float = field(
        default_factory=lambda: float(os.getenv("AUTO_ADVANCE_SECONDS", "2.0"))
    )
    ace_mode_default: bool = field(default_factory=lambda: _env_flag("ACE_MODE_DEFAULT", "false"))

    def __post_init__(self) -> None:
        """Validate drill settings."""
        if not 4 <= self.low_deck_threshold <= 52:
            raise ValueError("low_deck_threshold must be between 4 and 52")
        if self.auto_advance_seconds < 0:
            raise ValueError("auto_advance_seconds must not be negative")


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_flag("DEBUG", "false"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    session_ttl: int = 3600  # Session timeout in seconds

    redis: RedisConfig = field(default_factory=RedisConfig)
    trainer: TrainerConfig = field(default_factory=TrainerConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Global configuration instance
config = AppConfig()
