"""
core/config.py
──────────────
Centralised application settings via ``pydantic-settings``.

All configuration is driven by environment variables (or a ``.env`` file
in the ``backend/`` directory).  ``pydantic-settings`` validates types at
startup, so bad values fail fast with a clear error message.

Usage
-----
    from core.config import get_settings

    settings = get_settings()
    print(settings.RISK_FREE_RATE)
"""

import secrets
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the backend/ directory so relative .env paths work from any cwd.
_BACKEND_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables / ``.env`` file.

    Attributes:
        APP_TITLE:              Human-readable API name shown in OpenAPI docs.
        APP_VERSION:            Semantic version string.
        APP_DESCRIPTION:        Short description shown in the OpenAPI UI.
        DEBUG:                  Enable verbose logging.
        LOG_LEVEL:              Root log level when ``DEBUG`` is off.
        FRONTEND_URL:           Optional deployed frontend origin for CORS.
        RISK_FREE_RATE:         Annual risk-free rate for the Sharpe ratio.
        TRADING_DAYS_PER_YEAR:  Annualization factor for daily statistics.
        SYNTH_STRATEGY:         Price-series synthesizer registry key.
        SYNTH_DAILY_DRIFT:      Mean daily log return of the random walk.
        SYNTH_DAILY_VOLATILITY: Daily log-return std-dev of the random walk.
        SYNTH_SEED_NONCE:       Process-level nonce mixed into every seed.
        BENCHMARK_BTC_ID:       Asset id of the bitcoin benchmark.
        BENCHMARK_ETH_ID:       Asset id of the ethereum benchmark.
        DEFAULT_WINDOW_DAYS:    Lookback used when a request omits ``days``.
        MAX_WINDOW_DAYS:        Largest lookback the API accepts.
        ANALYSIS_MAX_WORKERS:   Thread-pool size for per-asset synthesis.
        STATIC_QUOTES:          Asset id → ``{symbol, current_price}`` served
                                by the built-in price resolver.
    """

    model_config = SettingsConfigDict(
        env_file=str(_BACKEND_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        # Extra env vars are ignored.
        extra="ignore",
    )

    # ── API metadata ──────────────────────────────────────────────────────
    APP_TITLE: str = "Crypto Portfolio Analytics API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = (
        "Portfolio risk analytics for the crypto dashboard: risk metrics, "
        "benchmark comparison and per-asset risk contributions."
    )

    # ── Feature flags / logging ───────────────────────────────────────────
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ── CORS ──────────────────────────────────────────────────────────────
    FRONTEND_URL: str = ""

    # ── Risk engine ───────────────────────────────────────────────────────
    RISK_FREE_RATE: float = Field(default=0.02, ge=0.0, le=0.20)
    TRADING_DAYS_PER_YEAR: int = Field(default=252, ge=1)

    SYNTH_STRATEGY: str = "random_walk"
    SYNTH_DAILY_DRIFT: float = Field(default=0.0005, ge=-0.05, le=0.05)
    SYNTH_DAILY_VOLATILITY: float = Field(default=0.035, gt=0.0, le=0.5)
    # Random per process unless pinned, so paths are stable within a session.
    SYNTH_SEED_NONCE: str = Field(default_factory=lambda: secrets.token_hex(8))

    BENCHMARK_BTC_ID: str = "bitcoin"
    BENCHMARK_ETH_ID: str = "ethereum"

    DEFAULT_WINDOW_DAYS: int = Field(default=30, ge=1)
    MAX_WINDOW_DAYS: int = Field(default=365, ge=1)
    ANALYSIS_MAX_WORKERS: int = Field(default=4, ge=1, le=32)

    # ── Price resolution ──────────────────────────────────────────────────
    STATIC_QUOTES: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """
        Build the full CORS allow-list.

        Hard-coded dev origins plus the optional ``FRONTEND_URL`` env var.
        """
        origins: List[str] = [
            "http://localhost:5173",   # Vite / React dev server
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
        if self.FRONTEND_URL:
            origins.append(self.FRONTEND_URL)
        return origins

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_log_level(cls, v: str) -> str:
        """Normalise and validate the log level name."""
        level = v.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown LOG_LEVEL '{v}'")
        return level

    @field_validator("SYNTH_SEED_NONCE")
    @classmethod
    def _nonce_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("SYNTH_SEED_NONCE must not be empty")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached ``Settings`` singleton.

    The instance is created (and the ``.env`` file parsed) only once per
    process lifetime, courtesy of ``functools.lru_cache``.

    Returns:
        Settings: Validated application configuration.
    """
    return Settings()
