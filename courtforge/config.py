"""Configuration utilities for Courtforge.

Reads environment variables and exposes configuration values for the application.

Notes on narration + logging flags:
- USE_LLM_NARRATION:
  When False (default), obituaries and succession narratives use the
  deterministic templates in `succession.py`. When True and an
  OPENAI_API_KEY is present, `narration.py` asks the model to embellish
  an obituary, falling back to the template on any failure.
- EVENT_LOG_PATH / MEMORY_LOG_PATH:
  Read at call time by `get_event_log_path` / `get_memory_log_path`, so
  tests can redirect logs with monkeypatch.setenv, or pass explicit paths
  to `run_simulation`.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


DEFAULT_DB_URL = "sqlite:///courtforge.db"
DEFAULT_EVENT_LOG_PATH = Path(os.getenv("EVENT_LOG_PATH", "logs/courtforge_events.jsonl"))
DEFAULT_MEMORY_LOG_PATH = Path(os.getenv("MEMORY_LOG_PATH", "logs/courtforge_memories.jsonl"))


def _bool_from_env(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def _int_from_env(name: str) -> Optional[int]:
    val = os.getenv(name)
    if val is None or not val.strip():
        return None
    try:
        return int(val)
    except ValueError:
        return None


# Narration flags (module-level constants for easy import by the narration layer)
USE_LLM_NARRATION: bool = _bool_from_env("USE_LLM_NARRATION", default=False)
LLM_MODEL_NAME: str = os.getenv("LLM_MODEL_NAME", "gpt-4.1-mini")
OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        database_url: SQLAlchemy connection URL.
        echo_sql: Whether to echo SQL statements to stdout.
        log_level: Application log level string.
        simulate_ticks: Default number of ticks to run when not provided via CLI.
        persist_to_db: Whether the simulation should persist state to the database.
        rng_seed: Optional seed for the court random source; unset means a fresh run.
    """

    database_url: str = os.getenv("DATABASE_URL", DEFAULT_DB_URL)
    echo_sql: bool = os.getenv("ECHO_SQL", "false").lower() in {"1", "true", "yes", "on"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    simulate_ticks: int = int(os.getenv("SIM_TICKS", "24"))
    persist_to_db: bool = os.getenv("PERSIST_TO_DB", "false").lower() in {"1", "true", "yes", "on"}
    rng_seed: Optional[int] = _int_from_env("RNG_SEED")


def get_settings() -> Settings:
    """Return a Settings instance using current environment variables."""
    return Settings(
        database_url=os.getenv("DATABASE_URL", DEFAULT_DB_URL),
        echo_sql=_bool_from_env("ECHO_SQL", default=False),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        simulate_ticks=int(os.getenv("SIM_TICKS", "24")),
        persist_to_db=_bool_from_env("PERSIST_TO_DB", default=False),
        rng_seed=_int_from_env("RNG_SEED"),
    )


def get_event_log_path() -> Path:
    """Return the effective JSONL court event log path from env or default."""
    return Path(os.getenv("EVENT_LOG_PATH", "logs/courtforge_events.jsonl"))


def get_memory_log_path() -> Path:
    """Return the effective JSONL narrative memory path from env or default."""
    return Path(os.getenv("MEMORY_LOG_PATH", "logs/courtforge_memories.jsonl"))
