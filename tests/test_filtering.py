"""Tests for the filtering stage of the derivation engine."""

from tasklens.engine.filtering import filter_tasks
from tasklens.models.task import TaskStatus, TaskPriority
from tasklens.models.view import ViewSelection


class TestStatusFilter:
    """Test status filtering."""

    def test_all_keeps_every_task(self, example_tasks):
        assert filter_tasks(list(example_tasks), ViewSelection()) == list(example_tasks)

    def test_pending_only(self, example_tasks):
        a, b, c = example_tasks
        result = filter_tasks([a, b, c], ViewSelection(filter_status="pending"))
        assert result == [a, c]

    def test_completed_only(self, example_tasks):
        a, b, c = example_tasks
        result = filter_tasks([a, b, c], ViewSelection(filter_status="completed"))
        assert result == [b]


class TestPriorityFilter:
    """Test priority filtering."""

    def test_exact_match(self, example_tasks):
        a, b, c = example_tasks
        assert filter_tasks([a, b, c], ViewSelection(filter_priority="high")) == [a]
        assert filter_tasks([a, b, c], ViewSelection(filter_priority="low")) == [c]


class TestCategoryFilter:
    """Test category filtering."""

    def test_membership_not_substring(self, make_task):
        work = make_task("Work task", categories=["Work"])
        homework = make_task("Homework task", categories=["Homework"])
        result = filter_tasks([work, homework], ViewSelection(filter_category="Work"))
        assert result == [work]

    def test_match_in_any_position(self, make_task):
        task = make_task("Tagged", categories=["Personal", "Urgent"])
        assert filter_tasks([task], ViewSelection(filter_category="Urgent")) == [task]

    def test_case_sensitive(self, make_task):
        task = make_task("Tagged", categories=["Work"])
        assert filter_tasks([task], ViewSelection(filter_category="work")) == []

    def test_unknown_category_yields_empty(self, make_task):
        task = make_task("Tagged", categories=["Work"])
        assert filter_tasks([task], ViewSelection(filter_category="Travel")) == []


class TestCombinedFilters:
    """Filters combine with logical AND."""

    def test_all_filters_must_pass(self, make_task):
        match = make_task("Match", status=TaskStatus.PENDING, priority=TaskPriority.HIGH, categories=["Work"])
        wrong_status = make_task("Done", status=TaskStatus.COMPLETED, priority=TaskPriority.HIGH, categories=["Work"])
        wrong_priority = make_task("Low", status=TaskStatus.PENDING, priority=TaskPriority.LOW, categories=["Work"])
        wrong_category = make_task("Home", status=TaskStatus.PENDING, priority=TaskPriority.HIGH, categories=["Home"])

        selection = ViewSelection(filter_status="pending", filter_priority="high", filter_category="Work")
        result = filter_tasks([match, wrong_status, wrong_priority, wrong_category], selection)
        assert result == [match]

    def test_filtering_is_idempotent(self, example_tasks):
        selection = ViewSelection(filter_status="pending", filter_priority="all")
        once = filter_tasks(list(example_tasks), selection)
        twice = filter_tasks(once, selection)
        assert twice == once

    def test_input_is_not_mutated(self, example_tasks):
        tasks = list(example_tasks)
        filter_tasks(tasks, ViewSelection(filter_status="completed"))
        assert tasks == list(example_tasks)
