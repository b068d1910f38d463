# backend/tests/services/balance/test_snapshot_builder.py
"""
Tests for the snapshot builder.

Tests:
- One value per hierarchy asset, in hierarchy order
- Total equals the sum of effective values
- Change from previous, including the zero-previous case
- Effective values for assets outside the hierarchy are ignored
"""

from decimal import Decimal

from app.services.balance import Period, SnapshotBuilder, resolve
from app.services.balance.snapshot import percent_change, total_of
from tests.conftest import make_asset_info, make_record


MARCH = Period(3, 2026)
FEBRUARY = Period(2, 2026)


def _build(hierarchy, history, period=MARCH):
    asset_ids = [a.id for a in hierarchy]
    return SnapshotBuilder().build(
        hierarchy=hierarchy,
        period=period,
        effective=resolve(asset_ids, history, period),
        previous_effective=resolve(asset_ids, history, period.previous()),
        currency="ILS",
    )


class TestSnapshotBuilder:

    def test_values_follow_hierarchy_order(self):
        hierarchy = [make_asset_info("B"), make_asset_info("A"), make_asset_info("C")]

        snapshot = _build(hierarchy, [make_record("A", 3, 2026, "1")])

        assert [ev.asset_id for ev in snapshot.values] == ["B", "A", "C"]

    def test_total_is_sum_of_effective_values(self):
        hierarchy = [make_asset_info("A"), make_asset_info("B"), make_asset_info("C")]
        history = [
            make_record("A", 3, 2026, "1000.50"),
            make_record("B", 1, 2026, "250"),  # inherited
            make_record("C", 4, 2026, "999"),  # future, ignored
        ]

        snapshot = _build(hierarchy, history)

        assert snapshot.total_balance == Decimal("1250.50")
        assert snapshot.total_balance == sum(ev.amount for ev in snapshot.values)
        assert snapshot.currency == "ILS"
        assert snapshot.period == MARCH

    def test_change_from_previous(self):
        hierarchy = [make_asset_info("A")]
        history = [
            make_record("A", 2, 2026, "1000"),
            make_record("A", 3, 2026, "1100"),
        ]

        change = _build(hierarchy, history).change_from_previous

        assert change.absolute == Decimal("100")
        assert change.percentage == Decimal("10")

    def test_previous_total_uses_inherited_values(self):
        """February has no record but inherits January, so the change is computed against it."""
        hierarchy = [make_asset_info("A")]
        history = [
            make_record("A", 1, 2026, "1000"),
            make_record("A", 3, 2026, "1500"),
        ]

        change = _build(hierarchy, history).change_from_previous

        assert change.absolute == Decimal("500")
        assert change.percentage == Decimal("50")

    def test_zero_previous_total_gives_zero_percent(self):
        hierarchy = [make_asset_info("A")]

        change = _build(hierarchy, [make_record("A", 3, 2026, "1500")]).change_from_previous

        assert change.absolute == Decimal("1500")
        assert change.percentage == Decimal("0")

    def test_empty_hierarchy(self):
        snapshot = _build([], [make_record("A", 3, 2026, "1500")])

        assert snapshot.values == []
        assert snapshot.total_balance == Decimal("0")
        assert snapshot.change_from_previous.percentage == Decimal("0")

    def test_assets_outside_hierarchy_are_ignored(self):
        hierarchy = [make_asset_info("A")]
        effective = resolve(["A", "gone"], [
            make_record("A", 3, 2026, "10"),
            make_record("gone", 3, 2026, "5000"),
        ], MARCH)

        snapshot = SnapshotBuilder().build(hierarchy, MARCH, effective, {}, "ILS")

        assert [ev.asset_id for ev in snapshot.values] == ["A"]
        assert snapshot.total_balance == Decimal("10")

    def test_asset_missing_from_effective_map_is_zero(self):
        hierarchy = [make_asset_info("A"), make_asset_info("B")]
        effective = resolve(["A"], [make_record("A", 3, 2026, "10")], MARCH)

        snapshot = SnapshotBuilder().build(hierarchy, MARCH, effective, {}, "ILS")

        b = snapshot.values[1]
        assert b.asset_id == "B"
        assert b.amount == Decimal("0")
        assert b.is_inherited is False


class TestHelpers:

    def test_percent_change(self):
        assert percent_change(Decimal("150"), Decimal("100")) == Decimal("50")
        assert percent_change(Decimal("50"), Decimal("100")) == Decimal("-50")
        assert percent_change(Decimal("50"), Decimal("0")) == Decimal("0")

    def test_total_of_ignores_unknown_assets(self):
        hierarchy = [make_asset_info("A")]
        effective = resolve(["A", "B"], [
            make_record("A", 2, 2026, "3"),
            make_record("B", 2, 2026, "4"),
        ], FEBRUARY)

        assert total_of(hierarchy, effective) == Decimal("3")
