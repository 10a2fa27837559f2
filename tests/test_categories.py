"""Tests for category facet extraction."""

from tasklens.engine.categories import available_categories, category_suggestions


def test_union_dedupe_sort(make_task):
    tasks = [make_task(categories=["Work", "Urgent"]), make_task(categories=["Personal"])]
    assert available_categories(tasks) == ["Personal", "Urgent", "Work"]


def test_duplicates_across_tasks_collapse(make_task):
    tasks = [make_task(categories=["Work"]), make_task(categories=["Work", "Home"])]
    assert available_categories(tasks) == ["Home", "Work"]


def test_empty_input_yields_empty_output():
    assert available_categories([]) == []


def test_seed_labels_are_included(make_task):
    tasks = [make_task(categories=["Garden"])]
    assert available_categories(tasks, seed=("Work", "Garden")) == ["Garden", "Work"]


def test_suggestions_exclude_selected(make_task):
    tasks = [make_task(categories=["Garden", "Work"])]
    assert category_suggestions(["Work"], tasks, seed=("Travel",)) == ["Garden", "Travel"]
