import random

import numpy as np
import pytest

from config import SimConfig
from evolution.population import PopulationController
from sim.scheduler import PassScheduler


@pytest.fixture
def scheduler(cfg, sensor, projectiles, make_energy):
    controller = PopulationController(cfg, rng=random.Random(5), np_rng=np.random.default_rng(5))
    energy = make_energy({}, max_energy=1.0)
    return PassScheduler(cfg, controller, sensor, projectiles, energy)


def test_bootstrap_pass_runs_on_its_period(cfg, scheduler):
    cells = []
    steps = int(round(cfg.bootstrap_period / 0.5))
    for _ in range(steps - 1):
        assert scheduler.tick(cells, 0.5).bootstrapped == 0
    report = scheduler.tick(cells, 0.5)
    assert report.bootstrapped == cfg.max_population
    assert len(cells) == cfg.max_population


def test_reproduction_pass_uses_energy_snapshot(cfg, scheduler):
    cells = []
    scheduler.bootstrap_pass(cells)
    del cells[2:]
    scheduler.energy.values = {c.id: 1.0 for c in cells}

    report = scheduler.tick(cells, cfg.reproduction_period)
    assert report.born == 2
    assert len(cells) == cfg.max_population
    assert all(c.birth_ts == pytest.approx(cfg.reproduction_period) for c in cells[2:])

    for _ in range(5):
        scheduler.tick(cells, cfg.reproduction_period)
        assert len(cells) <= cfg.max_population


def test_tick_updates_due_cells(cfg, scheduler):
    cells = []
    scheduler.bootstrap_pass(cells)
    for c in cells:
        c.phase_offset = 0.0
    report = scheduler.tick(cells, 0.01)
    assert report.updated == len(cells)
    assert all(len(c.fitness_scores) == 1 for c in cells)


def test_worker_pool_is_closed(cfg, sensor, projectiles, make_energy):
    cfg = cfg.replace(update_workers=2)
    controller = PopulationController(cfg, rng=random.Random(1))
    with PassScheduler(cfg, controller, sensor, projectiles, make_energy()) as sched:
        cells = []
        sched.bootstrap_pass(cells)
        sched.tick(cells, 0.6)
        assert sched._executor is not None
    assert sched._executor is None


@pytest.mark.parametrize("overrides", [
    dict(max_population=0),
    dict(reproduction_period=0.0),
    dict(hidden_layers=-1),
    dict(init_mutation_strength=1.0, reproduction_mutation_strength=1.0),
    dict(fitness_history_len=0),
    dict(not_a_knob=1),
])
def test_config_rejects_bad_values(overrides):
    with pytest.raises(ValueError):
        SimConfig().replace(**overrides)
