from dataclasses import dataclass
from typing import Dict, List, Sequence

from app.models.entities import Assignment, Resource


@dataclass(frozen=True)
class ResourceLoad:
    resource_id: str
    capacity: int
    used: int

    @property
    def remaining(self) -> int:
        return self.capacity - self.used


@dataclass(frozen=True)
class AllocationSummary:
    total: int
    assigned: int
    unassigned: int
    mean_skill_match: float  # over assigned tasks only
    loads: List[ResourceLoad]


def summarize(assignments: Sequence[Assignment], resources: Sequence[Resource]) -> AllocationSummary:
    used: Dict[str, int] = {r.id: 0 for r in resources}
    matches = []
    for a in assignments:
        if a.is_assigned:
            used[a.resource.id] = used.get(a.resource.id, 0) + a.task.story_points
            matches.append(a.skill_match)

    return AllocationSummary(
        total=len(assignments),
        assigned=len(matches),
        unassigned=len(assignments) - len(matches),
        mean_skill_match=sum(matches) / len(matches) if matches else 0.0,
        loads=[ResourceLoad(r.id, r.available_days, used[r.id]) for r in resources],
    )


def build_message(summary: AllocationSummary) -> str:
    if summary.total == 0:
        return "No tasks to allocate"
    msg = f"Assigned {summary.assigned} of {summary.total} tasks"
    if summary.unassigned:
        msg += f" ({summary.unassigned} unassigned)"
    return msg
