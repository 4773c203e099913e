"""
Mobility model for the slice admission simulator.

Devices follow a lazy random walk: each axis moves one step back, stays, or
moves one step forward per tick. Positions are not clamped to any area.
"""

import logging

from .user_equipment import Position, UserEquipment

logger = logging.getLogger(__name__)


class RandomWalkModel:
    """Lazy, unbounded per-axis random walk"""

    def __init__(self, rng, time_step: float = 1.0):
        self.rng = rng
        self.time_step = time_step

    def displacement(self, speed: float) -> Position:
        """Draw one step per axis from {-1, 0, 1}."""
        step_x = int(self.rng.integers(-1, 2))
        step_y = int(self.rng.integers(-1, 2))
        return Position(speed * self.time_step * step_x, speed * self.time_step * step_y)

    def step(self, ue: UserEquipment) -> Position:
        """Advance ``ue`` by one tick and return its new position."""
        ue.position = ue.position + self.displacement(ue.speed)
        logger.debug(f"UE {ue.ue_id} moved to ({ue.position.x:.1f}, {ue.position.y:.1f})")
        return ue.position
