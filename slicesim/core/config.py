"""
Configuration classes for the simulation framework
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass
class StationConfig:
    """Base station parameters"""
    position: Tuple[float, float]
    frequency: float  # Hz
    tx_power: float  # dBm
    height: float = 25.0  # meters
    antenna_gain: float = 10.0  # dB


@dataclass
class SliceConfig:
    """Network slice parameters"""
    slice_type: str  # "eMBB", "URLLC" or "mMTC"
    priority: float
    capacity: float  # MHz


def default_stations() -> List[StationConfig]:
    return [
        StationConfig(position=(0.0, 0.0), frequency=600e6, tx_power=40.0),
        StationConfig(position=(1000.0, 1000.0), frequency=28e9, tx_power=30.0),
        StationConfig(position=(0.0, 1000.0), frequency=600e6, tx_power=40.0),
        StationConfig(position=(1000.0, 0.0), frequency=28e9, tx_power=30.0),
    ]


def default_slices() -> List[SliceConfig]:
    return [
        SliceConfig(slice_type="eMBB", priority=0.7, capacity=100.0),
        SliceConfig(slice_type="URLLC", priority=0.9, capacity=50.0),
        SliceConfig(slice_type="mMTC", priority=0.3, capacity=200.0),
    ]


def default_class_weights() -> Dict[str, float]:
    return {"eMBB": 70.0, "URLLC": 20.0, "mMTC": 10.0}


@dataclass
class SimulationConfig:
    """Configuration parameters for the simulation"""
    ticks: int = 10
    time_step: float = 1.0  # seconds of movement per tick
    random_seed: Optional[int] = None
    log_level: str = "INFO"
    output_file: Optional[str] = None
    enable_visualization: bool = False

    # Virtual pacing
    attempt_interval: float = 0.1  # seconds per connection attempt
    tick_interval: float = 0.0  # seconds added at each tick boundary

    # Network configuration
    stations: List[StationConfig] = field(default_factory=default_stations)
    slices: List[SliceConfig] = field(default_factory=default_slices)

    # UE configuration
    num_ues: int = 50
    class_weights: Dict[str, float] = field(default_factory=default_class_weights)
    area_size: float = 1000.0  # meters
    bandwidth_range: Tuple[int, int] = (5, 25)  # MHz, upper bound exclusive
    speed_range: Tuple[int, int] = (1, 6)  # m/s, upper bound exclusive

    # Admission configuration
    max_connection_attempts: int = 5
    backoff_base: float = 0.1  # seconds per failed attempt
    disconnect_probability: float = 0.1
