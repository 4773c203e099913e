"""
User Equipment (UE) state for the slice admission simulator.

A UE has a position, a required traffic class and bandwidth, and at most one
active connection holding a station and an allocated slice.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..network.base_station import BaseStation
    from ..network.network_slice import NetworkSlice, SliceType


@dataclass
class Position:
    """2D position with coordinates."""
    x: float
    y: float

    def distance_to(self, other: 'Position') -> float:
        """Calculate distance to another position."""
        return math.sqrt((self.x - other.x)**2 + (self.y - other.y)**2)

    def __add__(self, other: 'Position') -> 'Position':
        return Position(self.x + other.x, self.y + other.y)


@dataclass
class Connection:
    """Connection state recorded at admission time."""
    station: 'BaseStation'
    network_slice: 'NetworkSlice'
    sinr: float
    rsrp: float
    allocated_bandwidth: float


class UserEquipment:
    """Mobile device attaching to the network."""

    def __init__(self, ue_id: int, position: Position, speed: float,
                 required_slice: 'SliceType', required_bandwidth: float,
                 height: float = 1.5):
        self.ue_id = ue_id
        self.position = position
        self.speed = speed  # m/s
        self.required_slice = required_slice
        self.required_bandwidth = required_bandwidth
        self.height = height
        self.connection_attempts = 0
        self.connection: Optional[Connection] = None

    @property
    def connected(self) -> bool:
        return self.connection is not None

    @property
    def serving_station(self) -> Optional['BaseStation']:
        return self.connection.station if self.connection else None

    @property
    def allocated_slice(self) -> Optional['NetworkSlice']:
        return self.connection.network_slice if self.connection else None

    @property
    def allocated_bandwidth(self) -> Optional[float]:
        return self.connection.allocated_bandwidth if self.connection else None

    @property
    def current_sinr(self) -> Optional[float]:
        return self.connection.sinr if self.connection else None

    def establish(self, connection: Connection):
        """Enter the connected state."""
        if connection.station is None or connection.network_slice is None:
            raise ValueError(f"UE {self.ue_id}: connection needs a station and a slice")
        if connection.allocated_bandwidth <= 0:
            raise ValueError(f"UE {self.ue_id}: allocated bandwidth must be positive, "
                             f"got {connection.allocated_bandwidth}")
        self.connection = connection
        self.connection_attempts = 0

    def clear_connection(self) -> Optional[Connection]:
        """Leave the connected state, returning the previous connection."""
        previous = self.connection
        self.connection = None
        return previous

    def get_statistics(self) -> dict:
        """Get UE state snapshot."""
        return {
            'ue_id': self.ue_id,
            'position': (self.position.x, self.position.y),
            'speed': self.speed,
            'required_slice': self.required_slice.value,
            'required_bandwidth': self.required_bandwidth,
            'connected': self.connected,
            'serving_station': self.serving_station.station_id if self.connected else None,
            'allocated_slice': self.allocated_slice.slice_id if self.connected else None,
            'allocated_bandwidth': self.allocated_bandwidth,
            'sinr': self.current_sinr,
            'connection_attempts': self.connection_attempts
        }
