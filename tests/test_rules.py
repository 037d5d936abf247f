"""Unit tests for the update rule engine."""

import random

import numpy as np
import pytest

from forest_fire.cell import CellState, Coordinate
from forest_fire.grid import Grid, GridIndexError
from forest_fire.rules import FullScanRules, UpdateRules

# no spawning, no lightning within a test's horizon
QUIET = dict(tree_spawn_rate=0, lightning_spawn_rate=10_000)


def cells_in(grid, state):
    return {
        Coordinate(x, y)
        for y in range(grid.height)
        for x in range(grid.width)
        if grid.cell_at(x, y) == state
    }


def plant(grid, coords):
    for x, y in coords:
        grid.set_cell(x, y, CellState.Tree)


def ring_at(cx, cy, radius):
    """Coordinates at Chebyshev distance ``radius`` from (cx, cy)."""
    return {
        Coordinate(cx + dx, cy + dy)
        for dx in range(-radius, radius + 1)
        for dy in range(-radius, radius + 1)
        if max(abs(dx), abs(dy)) == radius
    }


class TestRulesCreation:
    """Test cases for constructing the rules."""

    def test_initial_state(self):
        rules = UpdateRules(tree_spawn_rate=10, lightning_spawn_rate=150)
        assert rules.frontier == []
        assert rules.lightning_clock == 0
        assert rules.tick_count == 0

    @pytest.mark.parametrize("spawn, lightning", [(-1, 5), (5, 0)])
    def test_invalid_rates(self, spawn, lightning):
        with pytest.raises(ValueError):
            UpdateRules(tree_spawn_rate=spawn, lightning_spawn_rate=lightning)


class TestFireSpread:
    """Test cases for spread and extinguish."""

    def test_fire_without_fuel_dies(self, rng):
        """A lone fire burns out without spreading."""
        grid = Grid(10, 10)
        rules = UpdateRules(**QUIET)
        grid.set_cell(5, 5, CellState.Tree)
        assert rules.ignite(grid, 5, 5)

        rules.tick(grid, rng)

        assert grid.cell_at(5, 5) == CellState.Empty
        assert grid.counts()[CellState.Empty] == 100
        assert rules.frontier == []

    def test_fire_spreads_to_all_eight_neighbours(self, rng):
        grid = Grid(10, 10)
        rules = UpdateRules(**QUIET)
        neighbours = ring_at(5, 5, 1)
        far = ring_at(5, 5, 2)
        plant(grid, neighbours | far | {(5, 5)})
        rules.ignite(grid, 5, 5)

        report = rules.tick(grid, rng)

        assert grid.cell_at(5, 5) == CellState.Empty
        assert cells_in(grid, CellState.Fire) == neighbours
        assert cells_in(grid, CellState.Tree) == far
        assert report.ignited == 8
        assert report.extinguished == 1
        assert set(rules.frontier) == neighbours

    def test_one_ring_per_tick(self, rng):
        """A single ignition on a full 5x5 interior must not flood-fill."""
        grid = Grid(7, 7)
        rules = UpdateRules(**QUIET)
        grid.random_seed(1.0, rng)
        rules.ignite(grid, 3, 3)

        rules.tick(grid, rng)
        assert cells_in(grid, CellState.Fire) == ring_at(3, 3, 1)
        assert cells_in(grid, CellState.Tree) == ring_at(3, 3, 2)
        assert grid.cell_at(3, 3) == CellState.Empty

        rules.tick(grid, rng)
        assert cells_in(grid, CellState.Fire) == ring_at(3, 3, 2)
        assert cells_in(grid, CellState.Tree) == set()

        rules.tick(grid, rng)
        assert grid.counts()[CellState.Empty] == 49

    def test_shared_neighbour_ignited_once(self, rng):
        grid = Grid(10, 10)
        rules = UpdateRules(**QUIET)
        plant(grid, [(4, 5), (6, 5), (5, 5)])
        rules.ignite(grid, 4, 5)
        rules.ignite(grid, 6, 5)

        report = rules.tick(grid, rng)

        assert rules.frontier == [Coordinate(5, 5)]
        assert report.ignited == 1

    def test_burning_cell_is_empty_one_tick_later(self, rng):
        """Unit lifetime regardless of neighbours."""
        grid = Grid(12, 12)
        rules = UpdateRules(**QUIET)
        grid.random_seed(1.0, rng)
        rules.ignite(grid, 2, 2)
        for _ in range(10):
            burning = cells_in(grid, CellState.Fire)
            rules.tick(grid, rng)
            for x, y in burning:
                assert grid.cell_at(x, y) == CellState.Empty

    def test_frontier_matches_burning_cells(self, rng):
        grid = Grid(20, 15)
        rules = UpdateRules(tree_spawn_rate=20, lightning_spawn_rate=3)
        grid.random_seed(0.6, rng)
        for _ in range(100):
            rules.tick(grid, rng)
            assert set(rules.frontier) == cells_in(grid, CellState.Fire)
            assert len(rules.frontier) == len(set(rules.frontier))

    def test_ignite_non_tree_is_noop(self):
        grid = Grid(5, 5)
        rules = UpdateRules(**QUIET)
        assert not rules.ignite(grid, 2, 2)
        grid.set_cell(2, 2, CellState.Tree)
        assert rules.ignite(grid, 2, 2)
        assert not rules.ignite(grid, 2, 2)
        assert rules.frontier == [Coordinate(2, 2)]

    def test_ignite_outside_grid_fails(self):
        with pytest.raises(GridIndexError):
            UpdateRules(**QUIET).ignite(Grid(5, 5), 5, 5)

    def test_frontier_on_boundary_is_fatal(self, rng):
        """A corrupted frontier aborts the tick instead of being clamped."""
        grid = Grid(5, 5)
        rules = UpdateRules(**QUIET)
        rules.frontier.append(Coordinate(0, 2))
        with pytest.raises(GridIndexError):
            rules.tick(grid, rng)


class TestTreeSpawn:
    """Test cases for tree spawning."""

    def test_spawn_on_empty_cells(self, scripted_rng):
        grid = Grid(10, 10)
        rules = UpdateRules(tree_spawn_rate=2, lightning_spawn_rate=10_000)
        # two (x, y) interior picks
        report = rules.tick(grid, scripted_rng([3, 4, 7, 8]))
        assert cells_in(grid, CellState.Tree) == {(3, 4), (7, 8)}
        assert report.spawned == 2

    def test_occupied_target_dropped_without_retry(self, scripted_rng):
        grid = Grid(10, 10)
        grid.set_cell(3, 4, CellState.Tree)
        rules = UpdateRules(tree_spawn_rate=2, lightning_spawn_rate=10_000)
        source = scripted_rng([3, 4, 3, 4])
        report = rules.tick(grid, source)
        assert report.spawned == 0
        assert source.exhausted
        assert grid.counts()[CellState.Tree] == 1

    def test_spawn_never_touches_boundary(self, rng):
        grid = Grid(6, 6)
        rules = UpdateRules(tree_spawn_rate=50, lightning_spawn_rate=10_000)
        for _ in range(20):
            rules.tick(grid, rng)
        snap = grid.snapshot()
        assert not snap[0, :].any() and not snap[-1, :].any()
        assert not snap[:, 0].any() and not snap[:, -1].any()


class TestLightning:
    """Test cases for lightning strikes."""

    def test_lightning_ignites_the_picked_tree(self, scripted_rng):
        grid = Grid(10, 10)
        grid.set_cell(4, 6, CellState.Tree)
        rules = UpdateRules(tree_spawn_rate=0, lightning_spawn_rate=1)

        report = rules.tick(grid, scripted_rng([4, 6]))

        assert report.lightning == Coordinate(4, 6)
        assert grid.cell_at(4, 6) == CellState.Fire
        assert rules.frontier == [Coordinate(4, 6)]
        assert rules.lightning_clock == 0

    def test_struck_tree_burns_for_one_tick(self, scripted_rng):
        grid = Grid(10, 10)
        plant(grid, [(4, 6), (5, 6)])
        rules = UpdateRules(tree_spawn_rate=0, lightning_spawn_rate=1)

        rules.tick(grid, scripted_rng([4, 6]))
        # the neighbour only catches on the following tick
        assert grid.cell_at(5, 6) == CellState.Tree

        rules.tick(grid, scripted_rng([0, 0]))
        assert grid.cell_at(4, 6) == CellState.Empty
        assert grid.cell_at(5, 6) == CellState.Fire

    def test_miss_keeps_clock_running(self, scripted_rng):
        """Striking bare ground is retried on the next tick."""
        grid = Grid(10, 10)
        grid.set_cell(4, 6, CellState.Tree)
        rules = UpdateRules(tree_spawn_rate=0, lightning_spawn_rate=3)
        source = scripted_rng([0, 0, 2, 2, 4, 6])

        for _ in range(2):
            assert rules.tick(grid, source).lightning is None
        assert source._picks == [0, 0, 2, 2, 4, 6]

        assert rules.tick(grid, source).lightning is None  # (0, 0) boundary
        assert rules.lightning_clock == 3
        assert rules.tick(grid, source).lightning is None  # (2, 2) bare
        assert rules.lightning_clock == 4
        assert rules.tick(grid, source).lightning == Coordinate(4, 6)
        assert rules.lightning_clock == 0

    def test_lightning_interval(self, scripted_rng):
        grid = Grid(10, 10)
        plant(grid, [(2, 2), (7, 7)])
        rules = UpdateRules(tree_spawn_rate=0, lightning_spawn_rate=4)
        source = scripted_rng([2, 2, 7, 7])
        strikes = [rules.tick(grid, source).lightning for _ in range(8)]
        assert strikes == [None, None, None, (2, 2), None, None, None, (7, 7)]


class TestStateTransitions:
    """Per-tick transitions follow Empty -> Tree -> Fire -> Empty."""

    # Empty -> Fire happens when a tree spawns and catches in the same tick
    OBSERVABLE = {
        (CellState.Empty, CellState.Tree),
        (CellState.Tree, CellState.Fire),
        (CellState.Fire, CellState.Empty),
        (CellState.Empty, CellState.Fire),
    }

    def test_transitions(self):
        rng = random.Random(99)
        grid = Grid(30, 20)
        rules = UpdateRules(tree_spawn_rate=40, lightning_spawn_rate=5)
        grid.random_seed(0.5, rng)
        for _ in range(200):
            before = grid.snapshot()
            rules.tick(grid, rng)
            after = grid.snapshot()
            changed = before != after
            pairs = set(zip(before[changed].tolist(), after[changed].tolist()))
            assert {(CellState(a), CellState(b)) for a, b in pairs} <= self.OBSERVABLE
            # nothing burns for two ticks in a row
            assert not ((before == CellState.Fire) & (after == CellState.Fire)).any()

    def test_without_spawning_empty_cells_stay_empty(self):
        rng = random.Random(5)
        grid = Grid(20, 20)
        rules = UpdateRules(tree_spawn_rate=0, lightning_spawn_rate=2)
        grid.random_seed(0.7, rng)
        for _ in range(50):
            before = grid.snapshot()
            rules.tick(grid, rng)
            assert (grid.snapshot()[before == CellState.Empty] == CellState.Empty).all()


class TestFullScanOracle:
    """The frontier rules and the full-scan reference must agree."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_same_evolution(self, seed):
        frontier_grid, scan_grid = Grid(40, 25), Grid(40, 25)
        frontier_rng, scan_rng = random.Random(seed), random.Random(seed)
        frontier_grid.random_seed(0.55, frontier_rng)
        scan_grid.random_seed(0.55, scan_rng)

        frontier_rules = UpdateRules(tree_spawn_rate=25, lightning_spawn_rate=7)
        scan_rules = FullScanRules(tree_spawn_rate=25, lightning_spawn_rate=7)

        for _ in range(300):
            a = frontier_rules.tick(frontier_grid, frontier_rng)
            b = scan_rules.tick(scan_grid, scan_rng)
            assert np.array_equal(frontier_grid.snapshot(), scan_grid.snapshot())
            assert set(frontier_rules.frontier) == set(scan_rules.frontier)
            assert a == b

    def test_full_scan_one_ring_per_tick(self, rng):
        grid = Grid(7, 7)
        rules = FullScanRules(**QUIET)
        grid.random_seed(1.0, rng)
        rules.ignite(grid, 3, 3)
        rules.tick(grid, rng)
        assert cells_in(grid, CellState.Fire) == ring_at(3, 3, 1)
