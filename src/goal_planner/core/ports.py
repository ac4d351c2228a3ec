# src/goal_planner/core/ports.py

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations, so the LLM
provider and the storage slot stay swappable and tests can use fakes.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from .models import Task

ChatMessage = dict[str, str]
# OpenAI-style chat messages: {"role": "...", "content": "..."}.


class LLMClient(Protocol):
    """Streaming chat completion client (OpenAI-compatible)."""

    def stream_chat(self, messages: list[ChatMessage], system_prompt: str) -> Iterable[str]: ...


class PlanGateway(Protocol):
    """Turns a goal into a complete task list, or raises GenerationError."""

    def generate(self, goal: str) -> list[Task]: ...


class KeyValueSlot(Protocol):
    """
    A single named slot of text.

    read() returns None when nothing was written yet.
    write() replaces the whole slot; it raises OSError when storage is unavailable.
    """

    def read(self) -> str | None: ...

    def write(self, text: str) -> None: ...
