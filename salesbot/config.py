"""
Centralized configuration with environment variable overrides.

Model endpoints, retrieval thresholds, session lifetime and proxy limits
are all configurable here. Nothing is hardcoded in engine or tool logic.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_KB_DIR = PACKAGE_DIR / "data" / "kb"


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class ModelConfig:
    """Generation and embedding service settings."""

    api_key: str = os.getenv("OPENAI_API_KEY", "")
    base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    chat_model: str = os.getenv("CHAT_MODEL", "gpt-4o-mini")
    chat_temperature: float = _safe_float("CHAT_TEMPERATURE", "0")
    embedding_model: str = os.getenv("EMBEDDING_MODEL", "text-embedding-3-small")
    chat_timeout_sec: float = _safe_float("CHAT_TIMEOUT_SECONDS", "40")
    embed_timeout_sec: float = _safe_float("EMBED_TIMEOUT_SECONDS", "30")
    connect_timeout_sec: float = _safe_float("CONNECT_TIMEOUT_SECONDS", "20")


@dataclass(frozen=True)
class RetrievalConfig:
    """Knowledge retrieval and item matching thresholds."""

    min_relevance_score: float = _clamp(_safe_float("MIN_RELEVANCE_SCORE", "0.12"), 0.0, 1.0)
    item_match_min_score: float = _safe_float("ITEM_MATCH_MIN_SCORE", "0.18")
    search_limit: int = _safe_int("SEARCH_LIMIT", "5")
    default_recommendation_score: float = _safe_float("DEFAULT_RECOMMENDATION_SCORE", "0.20")
    default_recommendation_count: int = _safe_int("DEFAULT_RECOMMENDATION_COUNT", "3")
    catalog_limit: int = _safe_int("CATALOG_LIMIT", "6")


@dataclass(frozen=True)
class SessionConfig:
    """In-memory conversation state lifetime."""

    ttl_seconds: int = _safe_int("SESSION_TTL_SECONDS", "1800")


@dataclass(frozen=True)
class ProxyConfig:
    """Multi-turn demo proxy limits."""

    max_messages: int = _safe_int("PROXY_MAX_MESSAGES", "8")
    cache_ttl_seconds: int = _safe_int("PROXY_CACHE_TTL_SECONDS", "45")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    model: ModelConfig = field(default_factory=ModelConfig)
    retrieval: RetrievalConfig = field(default_factory=RetrievalConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    proxy: ProxyConfig = field(default_factory=ProxyConfig)
    kb_dir: Path = Path(os.getenv("KB_DIR", str(DEFAULT_KB_DIR)))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not 0.0 <= config.model.chat_temperature <= 2.0:
        raise ValueError(
            f"CHAT_TEMPERATURE must be between 0.0 and 2.0, got {config.model.chat_temperature}"
        )
    for timeout_name, timeout_value in [
        ("CHAT_TIMEOUT_SECONDS", config.model.chat_timeout_sec),
        ("EMBED_TIMEOUT_SECONDS", config.model.embed_timeout_sec),
        ("CONNECT_TIMEOUT_SECONDS", config.model.connect_timeout_sec),
    ]:
        if timeout_value <= 0:
            raise ValueError(f"{timeout_name} must be > 0, got {timeout_value}")

    for score_name, score_value in [
        ("MIN_RELEVANCE_SCORE", config.retrieval.min_relevance_score),
        ("ITEM_MATCH_MIN_SCORE", config.retrieval.item_match_min_score),
        ("DEFAULT_RECOMMENDATION_SCORE", config.retrieval.default_recommendation_score),
    ]:
        if not 0.0 <= score_value <= 1.0:
            raise ValueError(f"{score_name} must be between 0.0 and 1.0, got {score_value}")

    if config.retrieval.search_limit < 1:
        raise ValueError(f"SEARCH_LIMIT must be >= 1, got {config.retrieval.search_limit}")
    if config.retrieval.default_recommendation_count < 0:
        raise ValueError(
            "DEFAULT_RECOMMENDATION_COUNT must be >= 0, "
            f"got {config.retrieval.default_recommendation_count}"
        )
    if config.retrieval.catalog_limit < 1:
        raise ValueError(f"CATALOG_LIMIT must be >= 1, got {config.retrieval.catalog_limit}")
    if config.session.ttl_seconds < 0:
        raise ValueError(
            f"SESSION_TTL_SECONDS must be >= 0, got {config.session.ttl_seconds}"
        )
    if config.proxy.max_messages < 1:
        raise ValueError(f"PROXY_MAX_MESSAGES must be >= 1, got {config.proxy.max_messages}")
    if config.proxy.cache_ttl_seconds < 1:
        raise ValueError(
            f"PROXY_CACHE_TTL_SECONDS must be >= 1, got {config.proxy.cache_ttl_seconds}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info(
        "Configuration loaded (generation service %s, kb dir %s)",
        "configured" if config.model.api_key else "not configured",
        config.kb_dir,
    )
    return config


# Singleton instance
settings = load_config()
