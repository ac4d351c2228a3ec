# src/goal_planner/storage/plan_store.py

from __future__ import annotations

import copy
import json
import logging
import uuid
from collections.abc import Sequence
from datetime import UTC, datetime

from ..core.errors import StorageError
from ..core.models import Plan, Task
from ..core.ports import KeyValueSlot

logger = logging.getLogger(__name__)


class PlanStore:
    """
    Saved plans, most recent first, kept as one JSON array in a key-value slot.

    - save() always adds a new plan at the front and rewrites the whole slot.
      Saved plans are never updated or deleted.
    - Reads are fail-safe: an unreadable slot means "no saved plans", and
      individual malformed entries are skipped.
    - Writes are not: save() refuses to overwrite a slot it cannot parse, and
      carries skipped entries over unchanged.
    """

    def __init__(self, slot: KeyValueSlot) -> None:
        self._slot = slot

    # ---- low-level helpers ----

    def _parse_slot(self) -> list:
        """Raw stored records; raises StorageError if the slot holds something unusable."""
        try:
            raw = self._slot.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Saved plans are unreadable: {e}") from e
        if not raw or not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise StorageError(f"Saved plans are not valid JSON: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"Saved plans hold {type(data).__name__}, not a list")
        return data

    def _read_records(self) -> list:
        try:
            return self._parse_slot()
        except StorageError as e:
            logger.warning("%s; treating as empty.", e)
            return []

    @staticmethod
    def _record_to_plan(record: object) -> Plan | None:
        try:
            plan = Plan.from_dict(record)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        if plan.id is None:
            return None
        return plan

    @staticmethod
    def _new_plan_id() -> str:
        return uuid.uuid4().hex

    @staticmethod
    def _now_iso() -> str:
        return datetime.now(UTC).isoformat()

    # ---- public API ----

    def load_all(self) -> list[Plan]:
        """Saved plans in stored order (most recent first)."""
        plans: list[Plan] = []
        skipped = 0
        for record in self._read_records():
            plan = self._record_to_plan(record)
            if plan is None:
                skipped += 1
                continue
            plans.append(plan)
        if skipped:
            logger.warning("Skipped %d malformed saved plan(s).", skipped)
        return plans

    def get(self, plan_id: str) -> Plan | None:
        for plan in self.load_all():
            if plan.id == plan_id:
                return plan
        return None

    def save(self, goal: str, tasks: Sequence[Task]) -> Plan:
        """
        Persist (goal, tasks) as a new plan and return it.

        Raises StorageError if the slot cannot be read back or written; a slot
        holding unparseable data is left untouched.
        """
        plan = Plan(
            goal=goal,
            tasks=copy.deepcopy(list(tasks)),
            id=self._new_plan_id(),
            created_at=self._now_iso(),
        )

        # Existing records are kept verbatim, malformed ones included.
        existing = self._parse_slot()
        records = [plan.to_dict(), *existing]
        text = json.dumps(records, ensure_ascii=False, indent=2)

        try:
            self._slot.write(text)
        except OSError as e:
            raise StorageError(f"Could not save plan: {e}") from e

        logger.info("Saved plan id=%s tasks=%d total_plans=%d", plan.id, len(plan.tasks), len(records))
        return plan
