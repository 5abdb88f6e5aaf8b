import pytest
from datetime import date

from app.generators.mock_data import DEFAULT_SKILLS, MockDataGenerator


class TestMockDataGenerator:
    """Seeded generation must be reproducible and well-formed."""

    def test_same_seed_same_data(self):
        start, end = date(2026, 4, 6), date(2026, 4, 20)
        first = MockDataGenerator(seed=11).generate(15, 4, start, end)
        second = MockDataGenerator(seed=11).generate(15, 4, start, end)
        assert first == second

    def test_different_seed_differs(self):
        start, end = date(2026, 4, 6), date(2026, 4, 20)
        first = MockDataGenerator(seed=1).generate(30, 6, start, end)
        second = MockDataGenerator(seed=2).generate(30, 6, start, end)
        assert first != second

    def test_counts_and_unique_ids(self):
        gen = MockDataGenerator(seed=5)
        tasks = gen.generate_tasks(12)
        resources = gen.generate_resources(4)

        assert len(tasks) == 12
        assert len({t.id for t in tasks}) == 12
        assert len({r.id for r in resources}) == 4

    def test_tasks_use_known_skills(self):
        tasks = MockDataGenerator(seed=9).generate_tasks(20)
        for t in tasks:
            assert t.skills_needed
            assert t.skills_needed <= set(DEFAULT_SKILLS)
            assert t.story_points > 0

    def test_skill_matrix_covers_every_resource(self):
        gen = MockDataGenerator(seed=9)
        resources = gen.generate_resources(5)
        matrix = gen.generate_skill_matrix(resources, min_skills=2, max_skills=3)

        assert set(matrix) == {r.id for r in resources}
        for skills in matrix.values():
            assert 2 <= len(skills) <= 3

    def test_capacity_derived_for_window(self):
        data = MockDataGenerator(seed=4).generate(3, 3, date(2026, 1, 5), date(2026, 1, 19))
        for r in data.resources:
            assert r.available_days == int(10 * r.availability)

    def test_custom_skill_pool(self):
        tasks = MockDataGenerator(seed=1, skills=["rust"]).generate_tasks(3)
        assert all(t.skills_needed == {"rust"} for t in tasks)

    def test_zero_counts(self):
        data = MockDataGenerator(seed=1).generate(0, 0, date(2026, 1, 5), date(2026, 1, 6))
        assert data.tasks == [] and data.resources == [] and data.skill_matrix == {}

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            MockDataGenerator(seed=1).generate_tasks(-1)

    def test_empty_skill_pool_rejected(self):
        with pytest.raises(ValueError):
            MockDataGenerator(skills=[])
