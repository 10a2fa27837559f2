"""Category facet extraction for tasklens."""

from typing import Iterable, List, Sequence

from tasklens.models.task import Task


def available_categories(tasks: Sequence[Task], seed: Iterable[str] = ()) -> List[str]:
    """Union of all task categories (plus an optional seed), deduplicated and sorted.

    Args:
        tasks: Raw task collection
        seed: Extra labels to offer even if no task uses them yet

    Returns:
        Sorted list of distinct labels; empty for empty input and seed
    """
    labels = set(seed)
    for task in tasks:
        labels.update(task.categories)
    return sorted(labels)


def category_suggestions(
    selected: Iterable[str],
    tasks: Sequence[Task],
    seed: Iterable[str] = (),
) -> List[str]:
    """Labels to suggest while editing a task, excluding those already selected."""
    chosen = set(selected)
    return [label for label in available_categories(tasks, seed) if label not in chosen]
