"""Tests for content order conflict resolution."""

import pytest

from src.dashboard.services.upcoming_content import (
    InvalidContentOrderError,
    OrderSlot,
    OrderWrite,
    StoreFailureError,
    parse_content_order,
    plan_order_shift,
    resolve_order_conflict,
)


def slots(*pairs):
    return [OrderSlot(id=cid, content_order=order) for cid, order in pairs]


def apply(snapshot, writes):
    """Apply writes one at a time, returning every intermediate mapping."""
    orders = {s.id: s.content_order for s in snapshot}
    steps = []
    for write in writes:
        orders[write.id] = write.new_order
        steps.append(dict(orders))
    return steps


class TestParseContentOrder:
    def test_parses_text(self):
        assert parse_content_order("3") == 3
        assert parse_content_order(" 12 ") == 12

    def test_accepts_int(self):
        assert parse_content_order(0) == 0

    @pytest.mark.parametrize("value", ["", "abc", "1.5", "-1", -2, None, True])
    def test_rejects_invalid(self, value):
        with pytest.raises(InvalidContentOrderError):
            parse_content_order(value)

    def test_invalid_order_is_value_error(self):
        """Callers that only know ValueError still catch it."""
        with pytest.raises(ValueError):
            parse_content_order("x")


class TestPlanOrderShift:
    def test_no_conflict_no_writes(self):
        snapshot = slots(("a", 0), ("b", 2), ("c", 3))
        assert plan_order_shift(snapshot, 1) == []

    def test_empty_snapshot(self):
        assert plan_order_shift([], 0) == []

    def test_insert_at_taken_order(self):
        snapshot = slots(("a", 0), ("b", 1), ("c", 2), ("d", 3))
        writes = plan_order_shift(snapshot, 1)
        assert writes == [
            OrderWrite(id="d", old_order=3, new_order=4),
            OrderWrite(id="c", old_order=2, new_order=3),
            OrderWrite(id="b", old_order=1, new_order=2),
        ]

    def test_writes_descending(self):
        snapshot = slots(("b", 1), ("d", 7), ("a", 0), ("c", 2))
        writes = plan_order_shift(snapshot, 0)
        assert [w.old_order for w in writes] == [7, 2, 1, 0]

    def test_excluded_record_neither_conflicts_nor_shifts(self):
        snapshot = slots(("a", 0), ("b", 1), ("c", 2), ("d", 3))
        # d is the record being moved to 3; nothing else holds 3
        assert plan_order_shift(snapshot, 3, exclude_id="d") == []

        writes = plan_order_shift(snapshot, 1, exclude_id="d")
        assert [w.id for w in writes] == ["c", "b"]
        assert all(w.id != "d" for w in writes)

    def test_records_above_a_gap_still_shift(self):
        snapshot = slots(("a", 1), ("b", 5))
        writes = plan_order_shift(snapshot, 1)
        assert {w.id: w.new_order for w in writes} == {"a": 2, "b": 6}

    def test_sequential_application_never_collides(self):
        snapshot = slots(*[(str(i), i) for i in range(10)])
        writes = plan_order_shift(snapshot, 0)
        for step in apply(snapshot, writes):
            assert len(set(step.values())) == len(step)

    def test_relative_order_preserved(self):
        snapshot = slots(("a", 2), ("b", 3), ("c", 4), ("z", 0))
        final = apply(snapshot, plan_order_shift(snapshot, 2))[-1]
        assert sorted(["a", "b", "c"], key=final.get) == ["a", "b", "c"]
        assert final["z"] == 0
        assert 2 not in final.values()


class TestResolveOrderConflict:
    @pytest.mark.asyncio
    async def test_free_order_makes_no_writes(self, seeded_store):
        applied = await resolve_order_conflict(seeded_store, 4)
        assert applied == []
        assert 'update' not in seeded_store.calls
        # only the equality lookup runs
        assert seeded_store.calls.count('select_slots') == 1

    @pytest.mark.asyncio
    async def test_shifts_records_at_and_above_target(self, seeded_store):
        before = seeded_store.orders()
        applied = await resolve_order_conflict(seeded_store, 1)

        assert len(applied) == 3
        after = seeded_store.orders()
        for cid, order in before.items():
            assert after[cid] == (order + 1 if order >= 1 else order)
        assert 1 not in after.values()
        for snapshot in seeded_store.history:
            assert len(set(snapshot.values())) == len(snapshot)

    @pytest.mark.asyncio
    async def test_failure_mid_shift_is_not_rolled_back(self, seeded_store):
        seeded_store.fail_on = 'update'
        seeded_store.fail_after = 1

        with pytest.raises(StoreFailureError):
            await resolve_order_conflict(seeded_store, 1)

        # record at 3 moved to 4, the rest stayed
        assert sorted(seeded_store.orders().values()) == [0, 1, 2, 4]
