"""
test_aggregation_engine.py — Unit tests for AggregationEngine.

Tests cover:
  - Summing the same (material, unit) across estimations
  - Same material in different units stays separate
  - First-seen output order (not alphabetical)
  - Idempotence: re-aggregating an aggregate changes nothing
  - Additivity over disjoint estimation lists
  - Inputs are never mutated
"""

import pytest

from kanaf.models.estimate_models import Estimation, MaterialResult


def _est(eid, *rows):
    return Estimation(id=eid, description=eid, results=tuple(MaterialResult(*r) for r in rows))


@pytest.fixture
def estimations_a():
    return [
        _est("a1", ("سازه F47", 8, "شاخه"), ("پیچ", 1500, "عدد"), ("پانل گچی", 5, "عدد")),
        _est("a2", ("پیچ", 500, "عدد"), ("نبشی L25", 6, "شاخه")),
    ]


@pytest.fixture
def estimations_b():
    return [
        _est("b1", ("سازه F47", 2.5, "شاخه"), ("پشم سنگ", 3, "بسته")),
        _est("b2", ("پیچ", 2, "بسته"), ("پانل گچی", 1, "عدد")),
    ]


def _totals(aggregated):
    return {(a.material, a.unit): a.quantity for a in aggregated}


class TestAggregate:

    def test_screws_from_two_estimations_merge(self, aggregation_engine):
        """'پیچ' 1500 عدد + 500 عدد → single 2000 عدد entry."""
        estimations = [_est("e1", ("پیچ", 1500, "عدد")), _est("e2", ("پیچ", 500, "عدد"))]
        result = aggregation_engine.aggregate(estimations)
        assert len(result) == 1
        assert result[0].material == "پیچ"
        assert result[0].unit == "عدد"
        assert result[0].quantity == 2000

    def test_units_keep_entries_apart(self, aggregation_engine, estimations_a, estimations_b):
        totals = _totals(aggregation_engine.aggregate(estimations_a + estimations_b))
        assert totals[("پیچ", "عدد")] == 2000
        assert totals[("پیچ", "بسته")] == 2

    def test_order_is_first_appearance(self, aggregation_engine):
        estimations = [
            _est("e1", ("تایل", 1, "عدد"), ("آویز", 2, "عدد")),
            _est("e2", ("استاد", 3, "شاخه"), ("تایل", 4, "عدد")),
        ]
        names = [a.material for a in aggregation_engine.aggregate(estimations)]
        assert names == ["تایل", "آویز", "استاد"]

    def test_empty_inputs(self, aggregation_engine):
        assert aggregation_engine.aggregate([]) == []
        assert aggregation_engine.aggregate([_est("e1")]) == []

    def test_fractional_quantities_are_not_rounded(self, aggregation_engine, estimations_a, estimations_b):
        totals = _totals(aggregation_engine.aggregate(estimations_a + estimations_b))
        assert totals[("سازه F47", "شاخه")] == pytest.approx(10.5)

    def test_inputs_not_mutated(self, aggregation_engine, estimations_a):
        before = [e.to_dict() for e in estimations_a]
        aggregation_engine.aggregate(estimations_a)
        aggregation_engine.aggregate(estimations_a)
        assert [e.to_dict() for e in estimations_a] == before

    def test_recomputed_on_every_call(self, aggregation_engine, estimations_a):
        first = aggregation_engine.aggregate(estimations_a)
        second = aggregation_engine.aggregate(estimations_a[:1])
        assert _totals(second)[("پیچ", "عدد")] == 1500
        assert _totals(first)[("پیچ", "عدد")] == 2000


class TestAggregateProperties:

    def test_idempotent(self, aggregation_engine, estimations_a, estimations_b):
        once = aggregation_engine.aggregate(estimations_a + estimations_b)
        twice = aggregation_engine.aggregate([aggregation_engine.as_estimation(once)])
        assert [a.key for a in twice] == [a.key for a in once]
        assert _totals(twice) == pytest.approx(_totals(once))

    def test_additive_over_disjoint_lists(self, aggregation_engine, estimations_a, estimations_b):
        combined = _totals(aggregation_engine.aggregate(estimations_a + estimations_b))
        part_a = _totals(aggregation_engine.aggregate(estimations_a))
        part_b = _totals(aggregation_engine.aggregate(estimations_b))

        assert set(combined) == set(part_a) | set(part_b)
        for key, quantity in combined.items():
            assert quantity == pytest.approx(part_a.get(key, 0) + part_b.get(key, 0))

    def test_calculator_output_aggregates(self, aggregation_engine, grid_engine, flat_engine):
        grid = _est("g", *[(r.material, r.quantity, r.unit) for r in grid_engine.calculate(8, 4)])
        flat = _est("f", *[(r.material, r.quantity, r.unit) for r in flat_engine.calculate(4, 3)])
        totals = _totals(aggregation_engine.aggregate([grid, flat, grid]))
        grid_fasteners = {r.material: r.quantity for r in grid_engine.calculate(8, 4)}["میخ و چاشنی"]
        # same name, different unit: grid counts pieces, flat counts packs
        assert totals[("میخ و چاشنی", "عدد")] == 2 * grid_fasteners
        assert totals[("میخ و چاشنی", "بسته")] == 1


def test_module_level_aggregate(estimations_a):
    from kanaf.services.aggregation_engine import aggregate
    assert _totals(aggregate(estimations_a))[("پیچ", "عدد")] == 2000
