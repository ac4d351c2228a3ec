# src/goal_planner/llm/prompts.py

from __future__ import annotations

from typing import Final

SYSTEM_PROMPT: Final[str] = (
    "You are an AI task planner that breaks down goals into actionable tasks with realistic "
    "timelines and dependencies. Provide detailed, actionable tasks with clear deadlines."
)

_USER_PROMPT_TEMPLATE: Final[str] = """
Break down this goal into actionable tasks with suggested deadlines and dependencies:

Goal: {goal}

Please format your response as a JSON object with the following structure:
{{
  "tasks": [
    {{
      "id": "1",
      "title": "Task title",
      "description": "Detailed description of the task",
      "estimatedDuration": "X days/hours",
      "deadline": "YYYY-MM-DD",
      "dependencies": []
    }}
  ]
}}

"dependencies" lists the ids of tasks this task depends on.
Today is {today}. Consider logical dependencies between tasks, provide realistic timelines,
and ensure the entire plan can be completed by the deadline if specified in the goal.
""".strip()


def build_user_prompt(goal: str, today: str) -> str:
    return _USER_PROMPT_TEMPLATE.format(goal=goal, today=today)
