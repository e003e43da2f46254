"""Tests for page arithmetic."""

import pytest

from section_menu import Paginator


@pytest.mark.parametrize(
    "count, size, expected",
    [(0, 3, 1), (1, 3, 1), (3, 3, 1), (4, 3, 2), (5, 2, 3), (10, 1, 10)],
)
def test_total_pages(count, size, expected):
    assert Paginator(size).total_pages(count) == expected


def test_bounds_five_items_two_per_page():
    paginator = Paginator(2)
    assert paginator.bounds(0, 5) == (0, 2)
    assert paginator.bounds(1, 5) == (2, 4)
    assert paginator.bounds(2, 5) == (4, 5)


def test_bounds_never_inverted_past_the_end():
    start, end = Paginator(2).bounds(4, 5)
    assert end >= start


def test_contains():
    paginator = Paginator(2)
    assert paginator.contains(0, 0)
    assert paginator.contains(2, 5)
    assert not paginator.contains(3, 5)
    assert not paginator.contains(-1, 5)


def test_rejects_non_positive_page_size():
    with pytest.raises(ValueError):
        Paginator(0)
