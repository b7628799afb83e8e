"""Configuration management with environment variable support."""

import os
import secrets
from dataclasses import dataclass, field
from decimal import Decimal

from blackjack_core.rules import Rules


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


def _env_bool(name: str, default: str) -> bool:
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

    enabled: bool = field(default_factory=lambda: _env_bool("RATE_LIMIT_ENABLED", "true"))
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
    """Defaults for new tables."""

    bankroll: Decimal = field(
        default_factory=lambda: Decimal(os.getenv("BJ_BANKROLL", "1000"))
    )
    seats: int = field(default_factory=lambda: int(os.getenv("BJ_SEATS", "1")))
    num_decks: int = field(default_factory=lambda: int(os.getenv("BJ_DECKS", "6")))
    penetration: float = field(
        default_factory=lambda: float(os.getenv("BJ_PENETRATION", "0.75"))
    )
    blackjack_payout: float = field(
        default_factory=lambda: float(os.getenv("BJ_BLACKJACK_PAYOUT", "1.5"))
    )
    dealer_stands_on_soft_17: bool = field(
        default_factory=lambda: _env_bool("BJ_STANDS_SOFT_17", "true")
    )

    def rules(self) -> Rules:
        """
        Build engine rules from the configured defaults.

        Raises:
            ValueError: If an environment value is out of range
        """
        return Rules(
            decks=self.num_decks,
            penetration=self.penetration,
            blackjack_payout=self.blackjack_payout,
            dealer_stands_on_soft_17=self.dealer_stands_on_soft_17,
        )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_bool("DEBUG", "false"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    session_ttl: int = 3600  # Session timeout in seconds

    game: GameConfig = field(default_factory=GameConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Global configuration instance
config = AppConfig()
