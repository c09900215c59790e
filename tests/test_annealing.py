"""Tests for the annealing alternate of ratio mode."""
import random
from datetime import timedelta

import pytest

from conftest import START, make_people

from roster.engine.annealing import AnnealingStrategy, capacity_cost, home_blocks, person_cost, propose_move
from roster.engine.context import build_context
from roster.engine.generate import generate_roster
from roster.models.config import AnnealingParams, RosterConfig
from roster.models.constraints import SchedulingConstraint
from roster.models.rotation import RotationConfig


def annealing_config(seed=7, iterations=500):
    return RosterConfig(ratio_strategy="annealing", annealing={"iterations": iterations, "random_seed": seed})


class TestCost:
    """Cost terms of one person's schedule."""

    def test_fatigue(self):
        params = AnnealingParams()
        # Five base days on a 3/1 rotation: days 4 and 5 overrun
        cost = person_cost([True] * 5, RotationConfig(3, 1), frozenset(), params)
        equity = (0 - 5 / 4) ** 2 * params.equity_weight
        assert cost == pytest.approx(2 * params.fatigue_weight + equity)

    def test_constraint(self):
        params = AnnealingParams()
        cost = person_cost([True], RotationConfig(1, 1), frozenset({0}), params)
        assert cost == pytest.approx(params.constraint_weight + 0.25 * params.equity_weight)

    def test_fragmentation(self):
        params = AnnealingParams()
        cost = person_cost([False, True, False, False], RotationConfig(2, 2), frozenset(), params)
        assert cost == pytest.approx(params.fragmentation_weight + params.equity_weight)

    def test_perfect_cycle_is_free(self):
        params = AnnealingParams()
        assert person_cost([True, True, True, False] * 2, RotationConfig(3, 1), frozenset(), params) == 0

    def test_capacity_cost(self):
        params = AnnealingParams()
        assert capacity_cost(5, 3, params) == 4 * params.capacity_weight
        assert capacity_cost(3, 3, params) == 0


class TestMoves:
    def test_home_blocks(self):
        assert home_blocks([True, False, False, True, False]) == [(1, 2), (4, 4)]
        assert home_blocks([True, True]) == []
        assert home_blocks([]) == []

    def test_moves_stay_adjacent(self):
        rng = random.Random(1)
        for _ in range(200):
            start, end = propose_move((4, 6), rng)
            assert abs(start - 4) <= 1 and abs(end - 6) <= 1
            assert end >= start

    def test_single_day_block_never_inverts(self):
        rng = random.Random(2)
        for _ in range(200):
            start, end = propose_move((3, 3), rng)
            assert end >= start


class TestAnnealingStrategy:
    def test_reproducible_with_seed(self):
        people = make_people(6)
        first = generate_roster(START, START + timedelta(days=27), people, config=annealing_config())
        second = generate_roster(START, START + timedelta(days=27), people, config=annealing_config())
        assert first.to_dict() == second.to_dict()

    def test_constraints_never_broken(self):
        people = make_people(6)
        constraints = [
            SchedulingConstraint(person_id=f"p{i}", start=START + timedelta(days=2 * i),
                                 end=START + timedelta(days=2 * i + 3))
            for i in range(6)
        ]
        result = generate_roster(START, START + timedelta(days=27), people, constraints=constraints,
                                 config=annealing_config(seed=11, iterations=2000))
        assert result.unfulfilled_constraints == []
        assert result.stats.constraint_stats.percentage == 100

    def test_zero_iterations_keeps_seed(self):
        people = make_people(3)
        rotations = {p.id: RotationConfig(3, 1) for p in people}
        ctx = build_context(START, 12, people, {"p0": {0}}, rotations, config=annealing_config(iterations=0))
        outcome = AnnealingStrategy().generate(ctx)
        assert outcome.grid["p0"][0] is False
        for p in people:
            assert len(outcome.grid[p.id]) == 12

    def test_empty_roster(self):
        ctx = build_context(START, 7, [], {}, {}, config=annealing_config())
        assert AnnealingStrategy().generate(ctx).grid == {}
