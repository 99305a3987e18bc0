# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - CacheConfig (dataclass)
#     ttl_seconds: int             (default 3600)
#     fallback_key_prefix: str     (default "cache_")
#
# - PersistenceConfig (dataclass)
#     snapshot_dir: str            (default "metadata/")
#
# - LogConfig (dataclass)
#     enabled: bool                (default True)
#
# - AppConfig (dataclass)
#     cache: CacheConfig
#     persistence: PersistenceConfig
#     log: LogConfig
#     data_stream_url: str         (default "http://127.0.0.1:8000/ingest/next")
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from polystore.config import get_config
#   config = get_config()
#   print(config.cache.ttl_seconds)
#   print(config.persistence.snapshot_dir)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class CacheConfig:
    """Cache store configuration."""
    ttl_seconds: int = 3600  # Simulated, never enforced
    fallback_key_prefix: str = "cache_"


@dataclass
class PersistenceConfig:
    """Where store state is written between runs."""
    snapshot_dir: str = "metadata/"


@dataclass
class LogConfig:
    """Console logging switch."""
    enabled: bool = True


@dataclass
class AppConfig:
    """Main application configuration."""
    cache: CacheConfig = field(default_factory=CacheConfig)
    persistence: PersistenceConfig = field(default_factory=PersistenceConfig)
    log: LogConfig = field(default_factory=LogConfig)
    data_stream_url: str = "http://127.0.0.1:8000/ingest/next"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    cache_config = CacheConfig(
        ttl_seconds=int(os.getenv("CACHE_TTL_SECONDS", "3600")),
        fallback_key_prefix=os.getenv("CACHE_KEY_PREFIX", "cache_")
    )

    persistence_config = PersistenceConfig(
        snapshot_dir=os.getenv("SNAPSHOT_DIR", "metadata/")
    )

    log_config = LogConfig(
        enabled=_env_flag("POLYSTORE_LOG", "true")
    )

    _config_instance = AppConfig(
        cache=cache_config,
        persistence=persistence_config,
        log=log_config,
        data_stream_url=os.getenv("DATA_STREAM_URL", "http://127.0.0.1:8000/ingest/next")
    )

    return _config_instance
