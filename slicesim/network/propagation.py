"""
Propagation model for the slice admission simulator.

This module implements the two-slope urban macro path loss model, log-normal
shadowing and the SINR/RSRP estimate used to score station-device pairs.
"""

import math
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

SPEED_OF_LIGHT = 3e8  # m/s
BOLTZMANN_CONSTANT = 1.380649e-23  # J/K
TEMPERATURE = 290.0  # Kelvin
NOISE_BANDWIDTH = 10e6  # Hz (10 MHz)
NOISE_FIGURE = 5.0  # dB
SHADOWING_STD = 8.0  # dB
DEFAULT_INTERFERENCE = -90.0  # dBm
DEFAULT_UE_HEIGHT = 1.5  # meters


@dataclass
class SignalMetrics:
    """Signal quality estimate for one station-device pair."""
    sinr: float  # dB
    rsrp: float  # dBm
    rssi: float  # dBm


class InterferenceModel(ABC):
    """Interference estimate seen by a device served by a given station."""

    @abstractmethod
    def estimate(self, station, position) -> float:
        """Return interference power in dBm."""
        pass


class ConstantInterference(InterferenceModel):
    """Fixed interference floor, independent of position."""

    def __init__(self, level_dbm: float = DEFAULT_INTERFERENCE):
        self.level_dbm = level_dbm

    def estimate(self, station, position) -> float:
        return self.level_dbm


class PropagationModel:
    """
    Urban macro propagation model with shadowing.

    The shadowing draw comes from the injected random generator, which is
    shared by every evaluation made through this model. Pass a seeded
    ``numpy.random.Generator`` for reproducible runs.
    """

    def __init__(self, rng, interference_model: Optional[InterferenceModel] = None,
                 shadowing_std: float = SHADOWING_STD):
        self.rng = rng
        self.interference_model = interference_model or ConstantInterference()
        self.shadowing_std = shadowing_std

    @staticmethod
    def breakpoint_distance(station_height: float, ue_height: float, frequency: float) -> float:
        """Line-of-sight breakpoint distance in meters."""
        return 4 * (station_height - 1) * (ue_height - 1) * frequency / SPEED_OF_LIGHT

    @classmethod
    def path_loss(cls, distance: float, station_height: float, ue_height: float,
                  frequency: float) -> float:
        """
        Two-slope urban macro path loss.

        Args:
            distance: 2D distance in meters (must be positive)
            station_height: Station antenna height in meters
            ue_height: Device height in meters
            frequency: Carrier frequency in Hz

        Returns:
            Path loss in dB
        """
        d_bp = cls.breakpoint_distance(station_height, ue_height, frequency)
        frequency_term = 20 * math.log10(frequency / 1e9)

        # The branches are not matched at d_bp.
        if distance < d_bp:
            return 28.0 + 22 * math.log10(distance) + frequency_term
        return (28.0 + 40 * math.log10(distance) + frequency_term
                - 9 * math.log10(d_bp ** 2 + distance ** 2))

    @staticmethod
    def noise_power() -> float:
        """Thermal noise floor plus receiver noise figure, in dBm."""
        noise_linear = BOLTZMANN_CONSTANT * TEMPERATURE * NOISE_BANDWIDTH
        return 10 * math.log10(noise_linear / 0.001) + NOISE_FIGURE

    def shadowing(self) -> float:
        """Draw one zero-mean shadowing sample in dB."""
        return float(self.rng.normal(0.0, self.shadowing_std))

    def signal_metrics(self, station, position, ue_height: float = DEFAULT_UE_HEIGHT) -> SignalMetrics:
        """
        Estimate SINR, RSRP and RSSI for a device at ``position``.

        Args:
            station: Serving candidate (BaseStation)
            position: Device position (anything with ``x`` and ``y``)
            ue_height: Device height in meters

        Returns:
            SignalMetrics for the pair
        """
        distance = math.hypot(station.position.x - position.x, station.position.y - position.y)
        noise = self.noise_power()
        interference = self.interference_model.estimate(station, position)

        if distance == 0:
            rsrp = station.tx_power
            sinr = station.tx_power - noise
        else:
            path_loss = self.path_loss(distance, station.height, ue_height, station.frequency)
            rsrp = station.tx_power - path_loss + station.antenna_gain - self.shadowing()
            sinr = rsrp - 10 * math.log10(10 ** (interference / 10) + 10 ** (noise / 10))

        rssi = 10 * math.log10(10 ** (rsrp / 10) + 10 ** (interference / 10) + 10 ** (noise / 10))

        logger.debug(f"Station {station.station_id} -> ({position.x:.1f}, {position.y:.1f}): "
                     f"d={distance:.1f}m SINR={sinr:.2f}dB RSRP={rsrp:.2f}dBm")
        return SignalMetrics(sinr=sinr, rsrp=rsrp, rssi=rssi)
