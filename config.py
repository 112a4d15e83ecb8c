"""
Simulation tuning knobs.

Module-level constants are the defaults. The neuroevolution passes never read
them directly: they receive a SimConfig built from them, so tests and
alternative runs can thread their own values through.
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace as _replace
from typing import Optional

# Population controls
MAX_POPULATION = 150

# Network topology
NUM_INPUT_NODES = 4   # food_ahead, food_side, food_closeness, food_visible
NUM_OUTPUT_NODES = 4  # thrust, turn, fire, reserved
NUM_HIDDEN_NODES = 8
NUM_HIDDEN_LAYERS = 1

# Mutation
INIT_MUTATION_STRENGTH = 5.0          # wide spread for fresh random brains
REPRODUCTION_MUTATION_STRENGTH = 1.0  # small step away from a fit parent
MUTATION_SCALE = 0.1                  # noise std-dev per unit of strength

# Scheduling (seconds)
UPDATE_INTERVAL = 0.1
PHASE_CYCLE = 1.0
REPRODUCTION_PERIOD = 0.5
BOOTSTRAP_PERIOD = 5.0
UPDATE_WORKERS = 1

# Actions
MOVE_FORCE = 60.0
TURN_TORQUE = 3.0
FIRE_THRESHOLD = 0.5
FIRE_INTERVAL = 0.3

# Fitness
FITNESS_TURN_WEIGHT = 0.5
FITNESS_FIRE_COST = 0.25
FITNESS_RESERVED_COST = 0.05
FITNESS_HISTORY_LEN: Optional[int] = None  # None = unbounded

# Environment
SCREEN_W, SCREEN_H = 980, 720
SIM_SPEED = 2  # simulation sub-steps per rendered frame

# Cell body
CELL_RADIUS = 7.0
LINEAR_DAMPING = 2.0
ANGULAR_DAMPING = 2.0
MAX_SPEED = 240.0
MAX_ANGULAR_SPEED = 6.0

# Energy + life
START_ENERGY = 6.0
MAX_ENERGY = 40.0
ENERGY_DRAIN_PER_SEC = 0.25
THRUST_COST_SCALE = 0.004
MAX_AGE_SECONDS = 90.0
EAT_REACH = 12.0

# Sensing
SENSE_RANGE = 220.0

# Projectiles
BULLET_SPEED = 320.0
BULLET_LIFESPAN = 0.8
BULLET_RADIUS = 2.5
BULLET_DAMAGE = 1.5

# Food field
FOOD_TARGET_PELLETS = 420
FOOD_SPAWN_RATE = 2.1
FOOD_RADIUS_RANGE = (2.4, 6.0)
FOOD_LIFESPAN_RANGE = (18.0, 200.0)


@dataclass(frozen=True)
class SimConfig:
    """Knobs consumed by the network, scheduler and population passes."""

    max_population: int = MAX_POPULATION
    world_w: float = SCREEN_W
    world_h: float = SCREEN_H

    num_inputs: int = NUM_INPUT_NODES
    num_outputs: int = NUM_OUTPUT_NODES
    num_hidden: int = NUM_HIDDEN_NODES
    hidden_layers: int = NUM_HIDDEN_LAYERS

    init_mutation_strength: float = INIT_MUTATION_STRENGTH
    reproduction_mutation_strength: float = REPRODUCTION_MUTATION_STRENGTH
    mutation_scale: float = MUTATION_SCALE

    update_interval: float = UPDATE_INTERVAL
    phase_cycle: float = PHASE_CYCLE
    reproduction_period: float = REPRODUCTION_PERIOD
    bootstrap_period: float = BOOTSTRAP_PERIOD
    update_workers: int = UPDATE_WORKERS

    move_force: float = MOVE_FORCE
    turn_torque: float = TURN_TORQUE
    fire_threshold: float = FIRE_THRESHOLD
    fire_interval: float = FIRE_INTERVAL

    fitness_turn_weight: float = FITNESS_TURN_WEIGHT
    fitness_fire_cost: float = FITNESS_FIRE_COST
    fitness_reserved_cost: float = FITNESS_RESERVED_COST
    fitness_history_len: Optional[int] = FITNESS_HISTORY_LEN

    def validate(self) -> "SimConfig":
        positive = (
            "max_population", "world_w", "world_h",
            "num_inputs", "num_outputs", "num_hidden",
            "phase_cycle", "reproduction_period", "bootstrap_period",
            "update_workers",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.hidden_layers < 0:
            raise ValueError(f"hidden_layers must be >= 0, got {self.hidden_layers}")
        if self.mutation_scale <= 0:
            raise ValueError(f"mutation_scale must be positive, got {self.mutation_scale!r}")
        if self.update_interval < 0 or self.fire_interval < 0:
            raise ValueError("update_interval and fire_interval must be >= 0")
        if self.init_mutation_strength <= self.reproduction_mutation_strength:
            raise ValueError(
                "init_mutation_strength must exceed reproduction_mutation_strength "
                f"({self.init_mutation_strength} <= {self.reproduction_mutation_strength})"
            )
        if self.fitness_history_len is not None and self.fitness_history_len <= 0:
            raise ValueError("fitness_history_len must be positive or None")
        return self

    def replace(self, **overrides) -> "SimConfig":
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return _replace(self, **overrides).validate()
