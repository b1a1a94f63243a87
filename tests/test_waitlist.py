from __future__ import annotations

import pytest

from cpu_sim.core import OrderedWaitlist
from cpu_sim.model import Job
from cpu_sim.schedulers import Discipline, comparator


def _by_key(a: tuple[str, int], b: tuple[str, int]) -> int:
    return a[1] - b[1]


def _job(job_id: int, arrival: int, run_time: int, priority: int = 0) -> Job:
    return Job.arrive(job_id, arrival, run_time, priority)


def test_insert_returns_position_and_keeps_order() -> None:
    waitlist: OrderedWaitlist[tuple[str, int]] = OrderedWaitlist(_by_key)
    assert waitlist.insert(("a", 5)) == 0
    assert waitlist.insert(("b", 1)) == 0
    assert waitlist.insert(("c", 3)) == 1
    assert waitlist.insert(("d", 9)) == 3
    keys = [waitlist.at(i)[1] for i in range(waitlist.size())]
    assert keys == [1, 3, 5, 9]


def test_equal_keys_keep_insertion_order() -> None:
    waitlist: OrderedWaitlist[tuple[str, int]] = OrderedWaitlist(_by_key)
    for item in [("first", 2), ("x", 1), ("second", 2), ("third", 2)]:
        waitlist.insert(item)
    assert [item[0] for item in waitlist] == ["x", "first", "second", "third"]


def test_order_is_non_decreasing_for_many_inserts() -> None:
    waitlist: OrderedWaitlist[tuple[str, int]] = OrderedWaitlist(_by_key)
    for index, key in enumerate([7, 3, 3, 9, 0, 5, 3, 8, 1, 1, 6]):
        waitlist.insert((f"item{index}", key))
    for i in range(waitlist.size() - 1):
        assert _by_key(waitlist.at(i), waitlist.at(i + 1)) <= 0


def test_explicit_comparator_overrides_bound_one() -> None:
    waitlist: OrderedWaitlist[tuple[str, int]] = OrderedWaitlist(_by_key)
    waitlist.insert(("a", 1))
    waitlist.insert(("b", 2))
    position = waitlist.insert(("c", 5), compare=lambda a, b: b[1] - a[1])
    assert position == 0


def test_peek_poll_and_empty_results() -> None:
    waitlist: OrderedWaitlist[tuple[str, int]] = OrderedWaitlist(_by_key)
    assert waitlist.peek() is None
    assert waitlist.poll() is None
    waitlist.insert(("a", 2))
    waitlist.insert(("b", 1))
    assert waitlist.peek() == ("b", 1)
    assert waitlist.size() == 2
    assert waitlist.poll() == ("b", 1)
    assert waitlist.poll() == ("a", 2)
    assert waitlist.poll() is None


def test_at_and_remove_at_out_of_range_return_none() -> None:
    waitlist: OrderedWaitlist[tuple[str, int]] = OrderedWaitlist(_by_key)
    waitlist.insert(("a", 1))
    assert waitlist.at(1) is None
    assert waitlist.at(-1) is None
    assert waitlist.remove_at(3) is None
    assert len(waitlist) == 1


def test_remove_at_shifts_later_entries() -> None:
    waitlist: OrderedWaitlist[tuple[str, int]] = OrderedWaitlist(_by_key)
    for item in [("a", 1), ("b", 2), ("c", 3)]:
        waitlist.insert(item)
    assert waitlist.remove_at(1) == ("b", 2)
    assert waitlist.at(1) == ("c", 3)
    assert waitlist.size() == 2


def test_remove_all_uses_identity_not_comparator() -> None:
    waitlist: OrderedWaitlist[Job] = OrderedWaitlist(comparator(Discipline.RR))
    job_a = _job(1, 0, 4)
    job_b = _job(2, 0, 4)
    waitlist.insert(job_a)
    waitlist.insert(job_b)
    waitlist.insert(job_a)

    assert waitlist.remove_all(job_a) == 2
    assert list(waitlist) == [job_b]
    assert waitlist.remove_all(job_a) == 0


def test_remove_all_ignores_equal_value_copies() -> None:
    waitlist: OrderedWaitlist[Job] = OrderedWaitlist(comparator(Discipline.FCFS))
    job = _job(1, 0, 4)
    twin = _job(1, 0, 4)
    assert job == twin
    waitlist.insert(twin)
    assert waitlist.remove_all(job) == 0
    assert waitlist.size() == 1


def test_clear_and_none_rejected() -> None:
    waitlist: OrderedWaitlist[tuple[str, int]] = OrderedWaitlist(_by_key)
    waitlist.insert(("a", 1))
    waitlist.clear()
    assert waitlist.size() == 0
    with pytest.raises(ValueError, match="cannot hold None"):
        waitlist.insert(None)
