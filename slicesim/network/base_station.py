"""
Base station (gNB) definition for the slice admission simulator.
"""

import logging
from typing import List, Tuple

from ..mobility.user_equipment import Position

logger = logging.getLogger(__name__)

DEFAULT_STATION_HEIGHT = 25.0  # meters
DEFAULT_ANTENNA_GAIN = 10.0  # dB


class BaseStation:
    """
    Fixed 5G base station.

    Radio parameters are fixed at construction. Served slices are recorded
    by id; the pools themselves live in the SliceRegistry.
    """

    def __init__(self, station_id: int, position: Tuple[float, float], frequency: float,
                 tx_power: float, height: float = DEFAULT_STATION_HEIGHT,
                 antenna_gain: float = DEFAULT_ANTENNA_GAIN):
        self._station_id = station_id
        self._position = Position(*position)
        self._frequency = frequency  # Hz
        self._tx_power = tx_power  # dBm
        self._height = height
        self._antenna_gain = antenna_gain
        self._slice_ids: List[int] = []

    @property
    def station_id(self) -> int:
        return self._station_id

    @property
    def position(self) -> Position:
        return Position(self._position.x, self._position.y)

    @property
    def frequency(self) -> float:
        return self._frequency

    @property
    def tx_power(self) -> float:
        return self._tx_power

    @property
    def height(self) -> float:
        return self._height

    @property
    def antenna_gain(self) -> float:
        return self._antenna_gain

    @property
    def slice_ids(self) -> Tuple[int, ...]:
        return tuple(self._slice_ids)

    def add_slice(self, slice_id: int):
        """Register a served slice by id."""
        if slice_id not in self._slice_ids:
            self._slice_ids.append(slice_id)
            logger.debug(f"Station {self._station_id} serves slice {slice_id}")

    def serves(self, slice_id: int) -> bool:
        return slice_id in self._slice_ids

    def __repr__(self) -> str:
        return (f"BaseStation(id={self._station_id}, position=({self._position.x}, {self._position.y}), "
                f"frequency={self._frequency / 1e9:.2f}GHz, tx_power={self._tx_power}dBm)")
