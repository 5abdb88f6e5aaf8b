from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, value: str) -> "Priority":
        """Resolve a wire value ("High", "medium", ...) to a Priority."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"unknown priority: {value!r}")

    # str-mixin would otherwise compare alphabetically
    def __lt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank >= other.rank


_PRIORITY_RANK = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}


class AssignmentStatus(str, Enum):
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"


# resource id -> owned skills; a missing id means no skills
SkillMatrix = Dict[str, FrozenSet[str]]


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    priority: Priority
    skills_needed: FrozenSet[str]
    story_points: int  # effort cost
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "priority", Priority.parse(self.priority))
        object.__setattr__(self, "skills_needed", frozenset(self.skills_needed))
        if not self.skills_needed:
            raise ValueError(f"task {self.id} must require at least one skill")
        if self.story_points < 1:
            raise ValueError(f"task {self.id} story_points must be positive")


@dataclass(frozen=True)
class Resource:
    id: str
    name: str
    availability: float = 1.0  # fraction of working days
    available_days: int = 0  # capacity for the allocation window

    def __post_init__(self):
        if not 0.0 <= self.availability <= 1.0:
            raise ValueError(f"resource {self.id} availability must be in [0, 1]")
        if self.available_days < 0:
            raise ValueError(f"resource {self.id} available_days must be non-negative")


@dataclass(frozen=True)
class Assignment:
    task: Task
    resource: Optional[Resource]
    skill_match: float
    status: AssignmentStatus

    @property
    def is_assigned(self) -> bool:
        return self.status is AssignmentStatus.ASSIGNED
