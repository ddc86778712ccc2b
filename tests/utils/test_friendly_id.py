# -*- coding: utf-8 -*-
import pytest

from utils.friendly_id import (
    FriendlyIdCounter,
    max_friendly_number,
    next_friendly_id,
    parse_friendly_number,
    pick_latest,
)


def test_first_id_when_collection_is_empty():
    assert next_friendly_id("TC", None) == "TC-1"


@pytest.mark.parametrize(
    "last, expected",
    [
        ("TC-1", "TC-2"),
        ("TC-9", "TC-10"),
        ("TC-41", "TC-42"),
        ("TC-abc", "TC-1"),
        ("BUG-3", "TC-1"),
    ],
)
def test_next_id_from_last(last, expected):
    assert next_friendly_id("TC", last) == expected


@pytest.mark.parametrize(
    "last, expected",
    [
        (None, "RUN-001"),
        ("RUN-001", "RUN-002"),
        ("RUN-099", "RUN-100"),
        ("RUN-999", "RUN-1000"),
    ],
)
def test_run_ids_are_zero_padded(last, expected):
    assert next_friendly_id("RUN", last, width=3) == expected


def test_parse_rejects_foreign_prefix():
    assert parse_friendly_number("TASK-4", "TASK") == 4
    assert parse_friendly_number("TASK-4", "TC") is None
    assert parse_friendly_number(None, "TC") is None


def test_pick_latest_prefers_largest_suffix():
    assert pick_latest(["TC-3", "TC-12", "TC-7"], "TC") == "TC-12"
    assert pick_latest([], "TC") is None


def test_max_number_ignores_unparsable():
    assert max_friendly_number(["BUG-2", "BUG-x", None, "BUG-5"], "BUG") == 5
    assert max_friendly_number([], "BUG") == 0


def test_counter_increments_locally():
    counter = FriendlyIdCounter("TC", "TC-4")
    assert [counter.next() for _ in range(3)] == ["TC-5", "TC-6", "TC-7"]


def test_sequential_allocation_has_no_gaps():
    """空集合上连续分配 n 个编号：TC-1..TC-n，无间隔无重复"""
    last = None
    issued = []
    for _ in range(25):
        last = next_friendly_id("TC", last)
        issued.append(last)
    assert issued == [f"TC-{i}" for i in range(1, 26)]
