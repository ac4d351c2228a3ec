# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets; keep them in .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "PLANNER_APP_NAME": "App display name (default: goal-planner).",
    "PLANNER_LOG_LEVEL": "Console logging level (default: WARNING; unknown names fall back to WARNING; the file log keeps DEBUG).",
    # LLM (OpenAI-compatible)
    "PLANNER_OPENAI_API_KEY": "API key; OPENAI_API_KEY is also read. Unset => offline demo plans.",
    "PLANNER_OPENAI_BASE_URL": "API base URL (default: https://api.openai.com/v1).",
    "PLANNER_LLM_MODELS": "Comma/space separated list of models to try in order (default: gpt-3.5-turbo).",
    "PLANNER_LLM_TEMPERATURE": "Sampling temperature (default: 0.7).",
    "PLANNER_LLM_MAX_TOKENS": "Max completion tokens (default: 2000).",
    "PLANNER_LLM_CONNECT_TIMEOUT_SECONDS": "Connect timeout (default: 5).",
    "PLANNER_LLM_READ_TIMEOUT_SECONDS": "Read timeout (default: 60, never below the first-token timeout).",
    "PLANNER_LLM_FIRST_TOKEN_TIMEOUT_SECONDS": "Give up on a model without output after this long (default: 30).",
    "PLANNER_HTTP_REFERER": "Optional HTTP-Referer/X-Title headers (OpenRouter-style gateways).",
    # Paths (gitignored)
    "PLANNER_DATA_DIR": "Local data directory (default: .local/planner).",
    "PLANNER_PLANS_PATH": "Saved plans JSON file (default: <data_dir>/task_plans.json).",
    # Display
    "PLANNER_SORT_STRATEGY": "Task ordering: topological (default) or pairwise.",
}
