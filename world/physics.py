"""
cell_evo module: world/physics.py

Top-down 2D point-mass physics for cell bodies:
- external force / torque integrate into velocity
- exponential damping, speed clamp
- arcade world wrap
- soft separation between overlapping cells
"""

from __future__ import annotations
import math
from typing import Sequence, TYPE_CHECKING

import config

if TYPE_CHECKING:
    from cell.cell import Cell, CellBody


def integrate(body: "CellBody", dt: float) -> None:
    body.vx += body.force_x * dt
    body.vy += body.force_y * dt
    body.ang_v += body.torque * dt

    body.x += body.vx * dt
    body.y += body.vy * dt
    body.angle = (body.angle + body.ang_v * dt) % (2 * math.pi)


def apply_damping(body: "CellBody", dt: float) -> None:
    body.vx *= math.exp(-config.LINEAR_DAMPING * dt)
    body.vy *= math.exp(-config.LINEAR_DAMPING * dt)
    body.ang_v *= math.exp(-config.ANGULAR_DAMPING * dt)


def clamp_speed(body: "CellBody", max_speed: float = config.MAX_SPEED, max_ang: float = config.MAX_ANGULAR_SPEED) -> None:
    v2 = body.vx * body.vx + body.vy * body.vy
    if v2 > max_speed * max_speed:
        s = max_speed / math.sqrt(v2)
        body.vx *= s
        body.vy *= s
    body.ang_v = max(-max_ang, min(max_ang, body.ang_v))


def wrap_world(body: "CellBody", w: float, h: float) -> None:
    body.x %= w
    body.y %= h


def step_body(body: "CellBody", dt: float, w: float, h: float) -> None:
    integrate(body, dt)
    apply_damping(body, dt)
    clamp_speed(body)
    wrap_world(body, w, h)


def separate_cells(cells: Sequence["Cell"], strength: float = 0.35) -> None:
    """Soft positional push between cells whose bodies overlap."""
    for i in range(len(cells)):
        a = cells[i].body
        for j in range(i + 1, len(cells)):
            b = cells[j].body
            radius = a.radius + b.radius
            dx = b.x - a.x
            dy = b.y - a.y
            d2 = dx * dx + dy * dy
            if d2 <= 1e-6 or d2 > radius * radius:
                continue

            d = math.sqrt(d2)
            push = (radius - d) / radius * strength
            nx = dx / d
            ny = dy / d
            a.x -= nx * push
            a.y -= ny * push
            b.x += nx * push
            b.y += ny * push
