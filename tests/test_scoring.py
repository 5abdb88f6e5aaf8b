from app.engine.allocator import allocate
from app.utils.scoring import build_message, summarize


class TestSummary:
    """Per-resource load and counts for an allocation."""

    def test_counts_and_loads(self, mixed_scenario):
        tasks, resources, matrix = mixed_scenario
        summary = summarize(allocate(tasks, resources, matrix), resources)

        assert summary.total == 5
        assert summary.assigned == 4
        assert summary.unassigned == 1
        assert summary.mean_skill_match == 1.0
        loads = {load.resource_id: load for load in summary.loads}
        assert loads["dev-a"].used == 5 and loads["dev-a"].remaining == 0
        assert loads["dev-b"].used == 6 and loads["dev-b"].remaining == 0

    def test_mean_over_assigned_only(self, java_resources, make_task):
        resources, matrix = java_resources
        tasks = [
            make_task("half", ["oracle", "go"], points=1),
            make_task("none", ["cobol"], points=1),
        ]
        summary = summarize(allocate(tasks, resources, matrix), resources)

        assert summary.mean_skill_match == 0.5

    def test_empty(self, java_resources):
        resources, _ = java_resources
        summary = summarize([], resources)

        assert summary.total == 0
        assert summary.mean_skill_match == 0.0
        assert all(load.used == 0 for load in summary.loads)


class TestMessage:
    def test_all_assigned(self, java_task, java_resources):
        resources, matrix = java_resources
        summary = summarize(allocate([java_task], resources, matrix), resources)
        assert build_message(summary) == "Assigned 1 of 1 tasks"

    def test_some_unassigned(self, mixed_scenario):
        tasks, resources, matrix = mixed_scenario
        summary = summarize(allocate(tasks, resources, matrix), resources)
        assert build_message(summary) == "Assigned 4 of 5 tasks (1 unassigned)"

    def test_no_tasks(self, java_resources):
        resources, _ = java_resources
        assert build_message(summarize([], resources)) == "No tasks to allocate"
