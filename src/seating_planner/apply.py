"""Write an accepted seating plan back to the guest store."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from .models import SeatingPlan

logger = logging.getLogger(__name__)

AssignFn = Callable[[str, str], object]


@dataclass
class ApplyResult:
    """Outcome of :func:`apply_plan`, one entry per guest write."""

    applied: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def apply_plan(plan: SeatingPlan, assign_guest: AssignFn) -> ApplyResult:
    """Call ``assign_guest(guest_id, table_name)`` for every seated guest.

    Writes are independent and not transactional: a failing write is logged
    and recorded, the remaining writes still run. The store keeps the table
    name as the guest's assignment.
    """
    result = ApplyResult()
    for table in plan.tables:
        for gid in table.guests:
            try:
                assign_guest(gid, table.name)
            except Exception as exc:  # store errors are per guest
                logger.warning("Could not assign %s to %s: %s", gid, table.name, exc)
                result.failed[gid] = str(exc)
            else:
                result.applied.append(gid)
    if plan.unseated:
        logger.info("%d guests left unseated by the plan", len(plan.unseated))
    return result
