"""Core configuration components."""

from .config import SimulationConfig, StationConfig, SliceConfig

__all__ = ['SimulationConfig', 'StationConfig', 'SliceConfig']
