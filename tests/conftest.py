import pytest
from app.models.entities import Priority, Resource, Task


def _make_task(task_id, skills, points=1, priority=Priority.MEDIUM):
    return Task(
        id=task_id,
        title=f"Task {task_id}",
        priority=priority,
        skills_needed=frozenset(skills),
        story_points=points,
    )


@pytest.fixture
def java_task():
    """Single high-priority java task."""
    return _make_task("task-1", ["java"], points=3, priority=Priority.HIGH)


@pytest.fixture
def java_resources():
    """Two resources that both fully cover a java task."""
    resources = [
        Resource(id="r1", name="Alice", availability=1.0, available_days=5),
        Resource(id="r2", name="Bob", availability=1.0, available_days=5),
    ]
    matrix = {
        "r1": frozenset({"java"}),
        "r2": frozenset({"java", "oracle"}),
    }
    return resources, matrix


@pytest.fixture
def mixed_scenario():
    """Tasks of every priority competing for two resources."""
    tasks = [
        _make_task("low-1", ["python"], points=2, priority=Priority.LOW),
        _make_task("high-1", ["python", "sql"], points=3, priority=Priority.HIGH),
        _make_task("med-1", ["react"], points=2, priority=Priority.MEDIUM),
        _make_task("high-2", ["sql"], points=4, priority=Priority.HIGH),
        _make_task("med-2", ["docker"], points=1, priority=Priority.MEDIUM),
    ]
    resources = [
        Resource(id="dev-a", name="Dana", availability=1.0, available_days=5),
        Resource(id="dev-b", name="Eve", availability=0.5, available_days=6),
    ]
    matrix = {
        "dev-a": frozenset({"python", "sql"}),
        "dev-b": frozenset({"sql", "react"}),
    }
    return tasks, resources, matrix


@pytest.fixture
def custom_payload():
    """JSON body for /allocate/custom."""
    return {
        "tasks": [
            {"id": "t1", "title": "Fix login", "priority": "Low", "skillsNeeded": ["java"], "storyPoints": 2},
            {"id": "t2", "title": "Tune queries", "priority": "High", "skillsNeeded": ["java", "oracle"], "storyPoints": 3},
            {"id": "t3", "title": "New UI", "priority": "Medium", "skillsNeeded": ["react"], "storyPoints": 1},
        ],
        "resources": [
            {"id": "r1", "name": "Alice", "availability": 1.0, "availableDays": 5},
            {"id": "r2", "name": "Bob", "availability": 0.8, "availableDays": 4},
        ],
        "skillMatrix": {
            "r1": ["java"],
            "r2": ["java", "oracle"],
        },
    }


@pytest.fixture
def make_task():
    """Factory for tasks with sensible defaults."""
    return _make_task
