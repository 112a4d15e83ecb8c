import random

import numpy as np
import pytest

from cell.cell import Cell, CellBody
from config import SimConfig
from neural.network import NetArch, Network


class FakeSensor:
    def __init__(self, reading=(1.0, 0.0, 0.5, 1.0)):
        self.reading = list(reading)
        self.calls = 0

    def sense(self, x, y, angle):
        self.calls += 1
        return list(self.reading)


class FakeEnergy:
    def __init__(self, values=None, max_energy=1.0):
        self.values = dict(values or {})
        self.max_energy = max_energy

    def energy_of(self, cell_id):
        return self.values.get(cell_id)


class FakeProjectiles:
    def __init__(self):
        self.spawned = []

    def spawn(self, owner_id, x, y, angle):
        self.spawned.append((owner_id, x, y, angle))


@pytest.fixture
def cfg():
    return SimConfig(max_population=4, world_w=200.0, world_h=100.0)


@pytest.fixture
def np_rng():
    return np.random.default_rng(1234)


@pytest.fixture
def arch(cfg):
    return NetArch.from_config(cfg)


@pytest.fixture
def make_cell(arch, np_rng):
    ids = iter(range(1, 10_000))

    def _make(phase_offset=0.0, **kw):
        net = Network(arch, rng=np_rng)
        return Cell(id=next(ids), body=CellBody(x=10.0, y=20.0), network=net, phase_offset=phase_offset, **kw)

    return _make


@pytest.fixture
def seeded():
    return random.Random(42)


@pytest.fixture
def sensor():
    return FakeSensor()


@pytest.fixture
def projectiles():
    return FakeProjectiles()


@pytest.fixture
def make_energy():
    return FakeEnergy
