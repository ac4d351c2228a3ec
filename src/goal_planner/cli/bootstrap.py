# src/goal_planner/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (LLM or offline demo, plan store).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import LLMClient
from ..core.state import AppState
from ..llm.client import OpenAIChatClient
from ..llm.gateway import LLMPlanGateway
from ..llm.offline import OfflineLLMClient
from ..storage.file_slot import FileSlot
from ..storage.plan_store import PlanStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.plans_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    llm_client: LLMClient
    offline = False
    try:
        llm_client = OpenAIChatClient(settings)
    except RuntimeError as e:
        # No key configured: demo data instead of external calls.
        logger.info("LLM unavailable (%s); using offline demo plans.", e)
        llm_client = OfflineLLMClient()
        offline = True

    return AppState(
        settings=settings,
        gateway=LLMPlanGateway(llm_client),
        plan_store=PlanStore(FileSlot(settings.plans_path)),
        offline=offline,
    )
