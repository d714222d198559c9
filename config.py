"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field

from core.strategy.rules import RuleSet


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class SeedConfig:
    """Remote seed service configuration. No URL means unseeded shuffles."""

    url: str | None = field(default_factory=lambda: os.getenv("SEED_URL") or None)
    token: str | None = field(default_factory=lambda: os.getenv("SEED_TOKEN") or None)
    timeout: float = field(default_factory=lambda: float(os.getenv("SEED_TIMEOUT", "3.0")))

    @property
    def enabled(self) -> bool:
        return self.url is not None


@dataclass(frozen=True)
class GameConfig:
    """Default table configuration."""

    starting_balance: int = field(
        default_factory=lambda: int(os.getenv("STARTING_BALANCE", "1000"))
    )
    auto_bet_amount: int = field(default_factory=lambda: int(os.getenv("AUTO_BET_AMOUNT", "5")))
    # 1.0 is real time, 0 skips every pause
    pacing_speed: float = field(default_factory=lambda: float(os.getenv("PACING_SPEED", "0")))

    num_decks: int = field(default_factory=lambda: int(os.getenv("NUM_DECKS", "6")))
    reshuffle_threshold: float = field(
        default_factory=lambda: float(os.getenv("RESHUFFLE_THRESHOLD", "0.25"))
    )
    late_surrender: bool = field(default_factory=lambda: _env_flag("LATE_SURRENDER", "true"))

    def __post_init__(self) -> None:
        if self.starting_balance < 0:
            raise ValueError("starting_balance cannot be negative")
        if self.auto_bet_amount < 1:
            raise ValueError("auto_bet_amount must be positive")
        if self.pacing_speed < 0:
            raise ValueError("pacing_speed cannot be negative")

    @property
    def rules(self) -> RuleSet:
        """Table rules built from this configuration."""
        return RuleSet(
            num_decks=self.num_decks,
            reshuffle_threshold=self.reshuffle_threshold,
            surrender="late" if self.late_surrender else "none",
        )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_flag("DEBUG", "false"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    game: GameConfig = field(default_factory=GameConfig)
    seed: SeedConfig = field(default_factory=SeedConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)


# Global configuration instance
config = AppConfig()
