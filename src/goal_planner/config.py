# src/goal_planner/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (offline demo mode works without a key).
- Settings stay injectable: tests build their own object instead of reading env.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

ENV_PREFIX = "PLANNER"

# Value shipped in the original .env template; treated as "no key configured".
PLACEHOLDER_API_KEY = "your_openai_api_key_here"

SORT_STRATEGIES = ("topological", "pairwise")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def normalize_api_key(raw: str | None) -> Optional[str]:
    """Return a usable API key or None (empty and placeholder values are ignored)."""
    if raw is None:
        return None
    key = raw.strip()
    if not key or key == PLACEHOLDER_API_KEY:
        return None
    return key


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- LLM (OpenAI-compatible) ----
    openai_api_key: Optional[str]
    openai_base_url: str
    llm_models: List[str]
    llm_temperature: float
    llm_max_tokens: int
    llm_connect_timeout: float
    llm_read_timeout: float
    llm_first_token_timeout: float
    extra_headers: Dict[str, str]

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    plans_path: Path

    # ---- Display ----
    sort_strategy: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "goal-planner")
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        openai_api_key = normalize_api_key(_first_env(_k("OPENAI_API_KEY"), "OPENAI_API_KEY", default=None))
        openai_base_url = _env(_k("OPENAI_BASE_URL"), "https://api.openai.com/v1")
        llm_models = _env_list(_k("LLM_MODELS"), ["gpt-3.5-turbo"])
        llm_temperature = _env_float(_k("LLM_TEMPERATURE"), 0.7)
        llm_max_tokens = _env_int(_k("LLM_MAX_TOKENS"), 2000)

        first_token = _env_float(_k("LLM_FIRST_TOKEN_TIMEOUT_SECONDS"), 30.0)
        # keep read >= first_token as a sane baseline
        read_timeout = max(_env_float(_k("LLM_READ_TIMEOUT_SECONDS"), 60.0), first_token)
        connect_timeout = _env_float(_k("LLM_CONNECT_TIMEOUT_SECONDS"), 5.0)

        extra_headers: Dict[str, str] = {}
        referer = _env(_k("HTTP_REFERER"), "").strip()
        if referer:
            extra_headers["HTTP-Referer"] = referer
            extra_headers["X-Title"] = app_name

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/planner"))
        plans_path = _env_path(_k("PLANS_PATH"), data_dir / "task_plans.json")

        sort_strategy = _env(_k("SORT_STRATEGY"), "topological").strip().lower()
        if sort_strategy not in SORT_STRATEGIES:
            sort_strategy = "topological"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            openai_api_key=openai_api_key,
            openai_base_url=openai_base_url,
            llm_models=llm_models,
            llm_temperature=llm_temperature,
            llm_max_tokens=llm_max_tokens,
            llm_connect_timeout=connect_timeout,
            llm_read_timeout=read_timeout,
            llm_first_token_timeout=first_token,
            extra_headers=extra_headers,
            data_dir=data_dir,
            plans_path=plans_path,
            sort_strategy=sort_strategy,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
