"""Tests for statistics aggregation."""

from datetime import timedelta

import pytest

from tasklens.engine.statistics import compute_statistics, completion_percentage
from tasklens.models.task import TaskStatus, TaskPriority


class TestCounts:
    """Test basic counts."""

    def test_empty_collection(self, now):
        stats = compute_statistics([], now)
        assert stats.total == 0
        assert stats.completion_percentage == 0
        assert stats.has_tasks is False

    def test_status_and_priority_counts(self, example_tasks, now):
        stats = compute_statistics(list(example_tasks), now)
        assert stats.total == 3
        assert stats.completed == 1
        assert stats.pending == 2
        assert stats.high_priority == 1
        assert stats.medium_priority == 1
        assert stats.low_priority == 1
        assert stats.completed + stats.pending == stats.total
        assert stats.has_tasks is True


class TestDueSoonAndOverdue:
    """Test due-soon/overdue classification."""

    def test_example_counts(self, example_tasks, now):
        stats = compute_statistics(list(example_tasks), now)
        assert stats.due_soon == 2
        assert stats.overdue == 0

    def test_pending_past_due_is_overdue(self, make_task, now):
        stats = compute_statistics([make_task(due_in=timedelta(hours=-1))], now)
        assert stats.overdue == 1
        assert stats.due_soon == 0

    def test_window_boundaries(self, make_task, now):
        exactly_three_days = make_task(due_in=timedelta(days=3))
        just_past_window = make_task(due_in=timedelta(days=3, seconds=1))
        exactly_now = make_task(due_in=timedelta(0))
        stats = compute_statistics([exactly_three_days, just_past_window, exactly_now], now)
        # Inclusive at now + 3 days, exclusive at now; a task due exactly now is neither
        assert stats.due_soon == 1
        assert stats.overdue == 0

    def test_completed_tasks_never_count(self, make_task, now):
        tasks = [
            make_task(status=TaskStatus.COMPLETED, due_in=timedelta(days=1)),
            make_task(status=TaskStatus.COMPLETED, due_in=timedelta(days=-1)),
        ]
        stats = compute_statistics(tasks, now)
        assert stats.due_soon == 0
        assert stats.overdue == 0

    def test_undated_tasks_never_count(self, make_task, now):
        stats = compute_statistics([make_task(), make_task(priority=TaskPriority.HIGH)], now)
        assert stats.due_soon == 0
        assert stats.overdue == 0

    def test_custom_window(self, make_task, now):
        task = make_task(due_in=timedelta(days=5))
        assert compute_statistics([task], now).due_soon == 0
        assert compute_statistics([task], now, due_soon_window=timedelta(days=7)).due_soon == 1


class TestCompletionPercentage:
    """Test completion percentage rounding."""

    @pytest.mark.parametrize(
        "completed,total,expected",
        [(0, 0, 0), (0, 3, 0), (1, 3, 33), (2, 3, 67), (1, 8, 13), (1, 2, 50), (4, 4, 100)],
    )
    def test_rounds_half_up(self, completed, total, expected):
        assert completion_percentage(completed, total) == expected
