"""
Population bootstrap for the slice admission simulator.

Builds the fixed set of base stations and slices from the configuration and
places a random device population in the simulation area.
"""

import logging
from typing import List, Tuple

import numpy as np

from ..core.config import SimulationConfig
from ..mobility.user_equipment import Position, UserEquipment
from ..network.base_station import BaseStation
from ..network.network_slice import NetworkSlice, SliceRegistry, SliceType

logger = logging.getLogger(__name__)


class PopulationBuilder:
    """Creates stations, slices and UEs from a SimulationConfig."""

    def __init__(self, config: SimulationConfig, rng: np.random.Generator):
        self.config = config
        self.rng = rng

    def create_base_stations(self) -> List[BaseStation]:
        stations = []
        for i, station_config in enumerate(self.config.stations, start=1):
            stations.append(BaseStation(
                station_id=i,
                position=tuple(station_config.position),
                frequency=station_config.frequency,
                tx_power=station_config.tx_power,
                height=station_config.height,
                antenna_gain=station_config.antenna_gain
            ))
        logger.info(f"Created {len(stations)} base stations")
        return stations

    def create_network_slices(self, stations: List[BaseStation]) -> SliceRegistry:
        """Create slices and let every station serve every slice."""
        registry = SliceRegistry()
        for i, slice_config in enumerate(self.config.slices, start=1):
            registry.add(NetworkSlice(
                slice_id=i,
                slice_type=SliceType(slice_config.slice_type),
                priority=slice_config.priority,
                capacity=slice_config.capacity
            ))

        for station in stations:
            for network_slice in registry:
                station.add_slice(network_slice.slice_id)

        logger.info(f"Created {len(registry)} network slices")
        return registry

    def _class_distribution(self) -> Tuple[List[SliceType], np.ndarray]:
        types = [SliceType(name) for name in self.config.class_weights]
        weights = np.array(list(self.config.class_weights.values()), dtype=float)
        if weights.sum() <= 0:
            raise ValueError("Class weights must sum to a positive value")
        return types, weights / weights.sum()

    def create_user_equipment(self) -> List[UserEquipment]:
        types, probabilities = self._class_distribution()
        bw_low, bw_high = self.config.bandwidth_range
        speed_low, speed_high = self.config.speed_range

        ues = []
        for i in range(1, self.config.num_ues + 1):
            x, y = self.rng.uniform(0, self.config.area_size, size=2)
            slice_type = types[int(self.rng.choice(len(types), p=probabilities))]
            bandwidth = float(self.rng.integers(bw_low, bw_high))
            speed = float(self.rng.integers(speed_low, speed_high))
            ues.append(UserEquipment(
                ue_id=i,
                position=Position(float(x), float(y)),
                speed=speed,
                required_slice=slice_type,
                required_bandwidth=bandwidth
            ))

        logger.info(f"Created {len(ues)} user equipment instances")
        return ues

    def build(self) -> Tuple[List[BaseStation], SliceRegistry, List[UserEquipment]]:
        stations = self.create_base_stations()
        slices = self.create_network_slices(stations)
        ues = self.create_user_equipment()
        return stations, slices, ues
