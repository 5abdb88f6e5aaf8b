"""
Seedable mock data for allocation runs.

Stands in for an external tracker: produces tasks, resources and a skill
matrix. All randomness goes through one private random.Random, so two
generators built with the same seed produce identical data.
"""

import logging
import random
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from app.engine.capacity import with_capacity
from app.models.entities import Priority, Resource, SkillMatrix, Task

logger = logging.getLogger(__name__)

DEFAULT_SKILLS = (
    "python", "java", "javascript", "react", "sql", "oracle",
    "docker", "kubernetes", "aws", "testing", "design", "devops",
)

TASK_VERBS = ("Implement", "Refactor", "Fix", "Review", "Migrate", "Document")
TASK_SUBJECTS = ("login flow", "billing API", "search index", "CI pipeline", "reporting dashboard", "data export")
FIRST_NAMES = ("Alice", "Bob", "Charlie", "Dana", "Eve", "Frank", "Grace", "Heidi", "Ivan", "Judy")

STORY_POINTS = (1, 2, 3, 5, 8, 13)
AVAILABILITY_STEPS = (0.5, 0.6, 0.7, 0.8, 0.9, 1.0)


@dataclass(frozen=True)
class AllocationInput:
    tasks: List[Task]
    resources: List[Resource]
    skill_matrix: SkillMatrix


class MockDataGenerator:
    def __init__(self, seed: Optional[int] = None, skills: Sequence[str] = DEFAULT_SKILLS):
        if not skills:
            raise ValueError("skills must not be empty")
        self.seed = seed
        self.skills = tuple(skills)
        self._rng = random.Random(seed)

    def generate_tasks(self, count: int) -> List[Task]:
        _check_count(count)
        tasks = []
        for i in range(1, count + 1):
            needed = self._rng.sample(self.skills, k=self._rng.randint(1, min(3, len(self.skills))))
            tasks.append(Task(
                id=f"task-{i}",
                title=f"{self._rng.choice(TASK_VERBS)} {self._rng.choice(TASK_SUBJECTS)}",
                priority=self._rng.choice(list(Priority)),
                skills_needed=frozenset(needed),
                story_points=self._rng.choice(STORY_POINTS),
                description=f"Requires {', '.join(sorted(needed))}",
            ))
        return tasks

    def generate_resources(self, count: int) -> List[Resource]:
        _check_count(count)
        return [
            Resource(
                id=f"res-{i}",
                name=f"{self._rng.choice(FIRST_NAMES)} #{i}",
                availability=self._rng.choice(AVAILABILITY_STEPS),
            )
            for i in range(1, count + 1)
        ]

    def generate_skill_matrix(
        self,
        resources: Sequence[Resource],
        min_skills: int = 1,
        max_skills: int = 4,
    ) -> SkillMatrix:
        if min_skills < 0 or min_skills > max_skills:
            raise ValueError("require 0 <= min_skills <= max_skills")
        upper = min(max_skills, len(self.skills))
        lower = min(min_skills, upper)
        return {
            r.id: frozenset(self._rng.sample(self.skills, k=self._rng.randint(lower, upper)))
            for r in resources
        }

    def generate(self, task_count: int, resource_count: int, start: date, end: date) -> AllocationInput:
        """Full allocator input with resource capacity derived for [start, end)."""
        resources = self.generate_resources(resource_count)
        matrix = self.generate_skill_matrix(resources)
        tasks = self.generate_tasks(task_count)
        logger.info(
            f"Generated {len(tasks)} tasks, {len(resources)} resources (seed={self.seed})"
        )
        return AllocationInput(
            tasks=tasks,
            resources=with_capacity(resources, start, end),
            skill_matrix=matrix,
        )


def _check_count(count: int) -> None:
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
