import math
import random

import pytest

import config
from world.energy import EnergyMap
from world.food import FoodField, FoodPellet
from world.physics import separate_cells, step_body
from world.projectiles import ProjectileField
from world.world import World


def _field(*pellets):
    food = FoodField(400, 300, rng=random.Random(0), sense_range=100.0)
    food.pellets = [FoodPellet(x=x, y=y, radius=3.0, energy=e) for x, y, e in pellets]
    return food


def test_sense_food_ahead_and_to_the_side():
    food = _field((60.0, 50.0, 1.0))
    ahead = food.sense(50.0, 50.0, 0.0)
    assert ahead[0] == pytest.approx(1.0)
    assert ahead[1] == pytest.approx(0.0, abs=1e-9)
    assert ahead[2] == pytest.approx(0.9)
    assert ahead[3] == 1.0

    side = food.sense(50.0, 50.0, -math.pi / 2)
    assert side[1] == pytest.approx(1.0)


def test_sense_nothing_out_of_range():
    assert _field((300.0, 50.0, 1.0)).sense(0.0, 50.0, 0.0) == [0.0, 0.0, 0.0, 0.0]
    assert _field().sense(0.0, 0.0, 0.0) == [0.0, 0.0, 0.0, 0.0]


def test_eat_near_removes_pellets():
    food = _field((10.0, 10.0, 2.0), (100.0, 100.0, 5.0))
    assert food.eat_near(12.0, 10.0, reach=5.0) == 2.0
    assert len(food.pellets) == 1


def test_food_replenishes():
    food = FoodField(400, 300, rng=random.Random(1))
    for _ in range(100):
        food.update(0.5)
    assert 0 < len(food.pellets)
    assert all(10 <= p.x <= 390 and 10 <= p.y <= 290 for p in food.pellets)


def test_pellets_age_out_and_spawning_stops_at_target():
    food = _field((10.0, 10.0, 1.0))
    food.pellets[0].lifespan = 1.0
    food.target_pellets = 0
    food.update(0.6)
    assert len(food.pellets) == 1
    food.update(0.6)
    assert food.pellets == []
    food.update(10.0)
    assert food.pellets == []


def test_sense_uses_nearest_pellet():
    food = _field((80.0, 50.0, 1.0), (50.0, 60.0, 1.0))
    ahead, side, closeness, visible = food.sense(50.0, 50.0, 0.0)
    assert side == pytest.approx(1.0)
    assert closeness == pytest.approx(0.9)


def test_energy_tracking(make_cell):
    energy = EnergyMap(start_energy=2.0, cap=5.0)
    a, b = make_cell(), make_cell()
    assert energy.energy_of(a.id) is None

    assert energy.track_new([a, b]) == 2
    assert energy.track_new([a]) == 0
    energy.add(a.id, 10.0)
    energy.add(b.id, -10.0)
    assert energy.publish() == 5.0
    assert energy.max_energy == 5.0
    assert energy.starved() == [b.id]

    energy.forget([b.id])
    assert energy.energy_of(b.id) is None


def test_physics_moves_along_force(make_cell):
    cell = make_cell()
    cell.body.force_x = 50.0
    step_body(cell.body, 0.1, 400, 300)
    assert cell.body.x > 10.0
    assert cell.body.y == pytest.approx(20.0)


def test_physics_wraps(make_cell):
    cell = make_cell()
    cell.body.x = 399.0
    cell.body.vx = 100.0
    step_body(cell.body, 0.1, 400, 300)
    assert 0.0 <= cell.body.x < 400.0


def test_separation_pushes_apart(make_cell):
    a, b = make_cell(), make_cell()
    b.body.x = a.body.x + 2.0
    separate_cells([a, b])
    assert b.body.x - a.body.x > 2.0


def test_projectiles_hit_others_not_owner(make_cell):
    shooter, target = make_cell(), make_cell()
    target.body.x = shooter.body.x + 5.0
    field = ProjectileField(speed=10.0)
    field.spawn(shooter.id, shooter.body.x, shooter.body.y, 0.0)
    field.update(0.1)
    assert field.collect_hits([shooter, target]) == [(shooter.id, target.id)]
    assert field.projectiles == []


def test_projectiles_expire():
    field = ProjectileField()
    field.spawn(1, 0.0, 0.0, 0.0)
    field.update(config.BULLET_LIFESPAN + 0.01)
    assert field.projectiles == []
    assert field.fired == 1


def test_world_update_culls_starved_cells(make_cell):
    world = World.create(400, 300, rng=random.Random(2))
    world.food.target_pellets = 0
    cells = [make_cell(), make_cell()]
    world.update(cells, 0.01)
    world.energy.values[cells[0].id] = 0.0

    dead_id = cells[0].id
    assert world.update(cells, 0.01) == [dead_id]
    assert [c.id for c in cells] != [dead_id]
    assert len(cells) == 1
    assert world.deaths == 1
    assert world.energy.energy_of(dead_id) is None
    assert world.energy.max_energy > 0
