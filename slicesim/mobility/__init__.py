"""
Mobility module for slice admission simulations.

This module implements user equipment state and the random walk mobility model.
"""

from .user_equipment import UserEquipment, Position, Connection
from .mobility_models import RandomWalkModel

__all__ = ['UserEquipment', 'Position', 'Connection', 'RandomWalkModel']
