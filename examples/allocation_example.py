"""
Example: Running an allocation without the HTTP layer

Builds a small team by hand, lets the seeded generator produce a backlog,
and prints who gets what.
"""

from datetime import date

from app.engine.allocator import allocate
from app.engine.capacity import with_capacity
from app.generators.mock_data import MockDataGenerator
from app.models.entities import Resource
from app.utils.scoring import build_message, summarize


# 1. Describe the team; capacity is derived from the sprint window below
team = [
    Resource(id="alice", name="Alice", availability=1.0),
    Resource(id="bob", name="Bob", availability=0.6),
    Resource(id="carol", name="Carol", availability=0.8),
]
skills = {
    "alice": frozenset({"python", "sql", "docker"}),
    "bob": frozenset({"react", "javascript", "design"}),
    "carol": frozenset({"java", "oracle", "sql"}),
}

# 2. Two-week sprint
sprint_start, sprint_end = date(2026, 3, 2), date(2026, 3, 16)
team = with_capacity(team, sprint_start, sprint_end)

# 3. Reproducible backlog
backlog = MockDataGenerator(seed=2026).generate_tasks(12)

# 4. Allocate and report
assignments = allocate(backlog, team, skills)
for a in assignments:
    who = a.resource.name if a.resource else "-"
    print(f"{a.task.priority.value:<6} {a.task.id:<8} {who:<6} {a.skill_match:.2f}")

print(build_message(summarize(assignments, team)))
