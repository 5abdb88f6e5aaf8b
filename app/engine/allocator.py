"""
Greedy Skill-Based Allocator

Assigns prioritized tasks to capacity-limited resources in a single pass.

Algorithm:
    1. Copy each resource's available days into a local capacity map
    2. Stable-sort tasks by priority (High > Medium > Low)
    3. For every task, scan resources in list order and keep the one with the
       strictly highest skill match that still has capacity for the task
    4. Assign and deduct capacity, or mark the task unassigned

Time Complexity: O(t * r) where t = tasks, r = resources

Tie-breaking is first-found: a later resource with an equal match never
replaces an earlier one, so the order of the resources list matters.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, Sequence

from app.models.entities import Assignment, AssignmentStatus, Resource, SkillMatrix, Task

logger = logging.getLogger(__name__)

_NO_SKILLS: FrozenSet[str] = frozenset()


def skill_match(task: Task, skills: Iterable[str]) -> float:
    """
    Fraction of the task's required skills covered by a skill set.

    Returns:
        Ratio in [0, 1]; the denominator is the task's own skill count
    """
    return len(task.skills_needed.intersection(skills)) / len(task.skills_needed)


def sort_by_priority(tasks: Sequence[Task]) -> List[Task]:
    """Highest priority first; equal priorities keep their input order."""
    return sorted(tasks, key=lambda t: t.priority.rank, reverse=True)


def allocate(
    tasks: Sequence[Task],
    resources: Sequence[Resource],
    skill_matrix: SkillMatrix,
) -> List[Assignment]:
    """
    Decide an assignment for every task.

    Args:
        tasks: Tasks to allocate (any order)
        resources: Candidate resources, scanned in the given order
        skill_matrix: Map of resource_id to owned skills

    Returns:
        One Assignment per task, ordered by priority descending

    Raises:
        ValueError: if two resources share an id

    The resource objects are not modified; remaining capacity lives in a map
    local to this call.
    """
    remaining: Dict[str, int] = {}
    for r in resources:
        if r.id in remaining:
            raise ValueError(f"duplicate resource id: {r.id}")
        remaining[r.id] = r.available_days

    results: List[Assignment] = []
    for task in sort_by_priority(tasks):
        best = None
        best_match = 0.0
        for r in resources:
            if remaining[r.id] < task.story_points:
                continue
            match = skill_match(task, skill_matrix.get(r.id, _NO_SKILLS))
            if match > best_match:
                best, best_match = r, match

        if best is not None:
            remaining[best.id] -= task.story_points
            logger.debug(
                f"Task {task.id} ({task.priority.value}) -> {best.id} "
                f"match={best_match:.2f} remaining={remaining[best.id]}"
            )
            results.append(Assignment(task, best, best_match, AssignmentStatus.ASSIGNED))
        else:
            logger.debug(f"Task {task.id} ({task.priority.value}) unassigned")
            results.append(Assignment(task, None, 0.0, AssignmentStatus.UNASSIGNED))

    return results
