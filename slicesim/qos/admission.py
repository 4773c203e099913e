"""
Admission control for network slices.

The controller scores every station/slice pairing for a device, keeps those
that meet the device's class thresholds and slice headroom, ranks them and
allocates bandwidth on the best one. Failed attempts are reported as
outcomes, not exceptions; the device simply retries on a later tick.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..mobility.user_equipment import Connection, UserEquipment
from ..network.base_station import BaseStation
from ..network.network_slice import NetworkSlice, SliceRegistry
from ..network.propagation import PropagationModel
from .slice_requirements import SliceRequirementsMapping

logger = logging.getLogger(__name__)

HEADROOM_FACTOR = 0.5  # slice must show at least this share of the request

SINR_WEIGHT = 0.7
RSRP_WEIGHT = 0.2
BANDWIDTH_WEIGHT = 0.1


@dataclass
class ConnectionCandidate:
    """Best (station, slice) pairing found during one evaluation pass."""
    station: Optional[BaseStation] = None
    network_slice: Optional[NetworkSlice] = None
    sinr: float = float('-inf')
    rsrp: float = float('-inf')
    available_bandwidth: float = 0.0

    @property
    def is_viable(self) -> bool:
        return self.station is not None and self.network_slice is not None

    @property
    def score(self) -> float:
        """Weighted ranking score; terms stay in their native units."""
        return (SINR_WEIGHT * self.sinr + RSRP_WEIGHT * self.rsrp
                + BANDWIDTH_WEIGHT * self.available_bandwidth)


class AdmissionOutcome(Enum):
    """Result of one connection attempt"""
    CONNECTED = "connected"
    NO_VIABLE_STATION = "no_viable_station"
    NO_CAPACITY = "no_capacity"
    ALLOCATION_FAILED = "allocation_failed"


@dataclass
class AdmissionResult:
    """Outcome of a connection attempt with the candidate it was based on."""
    outcome: AdmissionOutcome
    candidate: ConnectionCandidate
    allocated: float = 0.0
    attempt: int = 0

    @property
    def success(self) -> bool:
        return self.outcome == AdmissionOutcome.CONNECTED


def rank_candidates(candidates: List[ConnectionCandidate]) -> List[ConnectionCandidate]:
    """Sort candidates by score, best first. Ties keep their input order."""
    return sorted(candidates, key=lambda c: c.score, reverse=True)


class AdmissionController:
    """
    Station and slice selection for devices requesting a connection.

    Slices are shared network-wide: any slice of the device's class served by
    at least one station is paired with every station that passes the signal
    thresholds.
    """

    def __init__(self, stations: Sequence[BaseStation], slices: SliceRegistry,
                 propagation: PropagationModel,
                 requirements=SliceRequirementsMapping):
        self.stations = list(stations)
        self.slices = slices
        self.propagation = propagation
        self.requirements = requirements

        self.stats = {
            'attempts': 0,
            'connected': 0,
            'no_viable_station': 0,
            'no_capacity': 0,
            'allocation_failed': 0,
            'disconnected': 0
        }

    def _served_slice_ids(self) -> set:
        served = set()
        for station in self.stations:
            served.update(station.slice_ids)
        return served

    def evaluate(self, ue: UserEquipment) -> Tuple[ConnectionCandidate, int]:
        """
        Find the best connection candidate for a device.

        Args:
            ue: Device requesting a connection

        Returns:
            (best candidate, number of stations meeting the signal thresholds).
            The candidate is not viable when nothing qualified.
        """
        candidates: List[ConnectionCandidate] = []
        stations_in_range = 0
        class_slices = self.slices.of_type(ue.required_slice, self._served_slice_ids())

        for station in self.stations:
            metrics = self.propagation.signal_metrics(station, ue.position, ue.height)

            if not self.requirements.meets_thresholds(ue.required_slice, metrics.sinr, metrics.rsrp):
                continue
            stations_in_range += 1

            for network_slice in class_slices:
                available = network_slice.check_available()
                if available >= ue.required_bandwidth * HEADROOM_FACTOR:
                    candidates.append(ConnectionCandidate(
                        station=station,
                        network_slice=network_slice,
                        sinr=metrics.sinr,
                        rsrp=metrics.rsrp,
                        available_bandwidth=available
                    ))

        if not candidates:
            return ConnectionCandidate(), stations_in_range

        return rank_candidates(candidates)[0], stations_in_range

    def connect(self, ue: UserEquipment) -> AdmissionResult:
        """
        Run one connection attempt for an unconnected device.

        The attempt counter is incremented on entry and reset only when the
        device is admitted.
        """
        ue.connection_attempts += 1
        self.stats['attempts'] += 1
        attempt = ue.connection_attempts

        best, stations_in_range = self.evaluate(ue)

        if not best.is_viable:
            if stations_in_range == 0:
                outcome = AdmissionOutcome.NO_VIABLE_STATION
                logger.info(f"UE {ue.ue_id} found no viable stations (Attempt {attempt})")
            else:
                outcome = AdmissionOutcome.NO_CAPACITY
                logger.info(f"UE {ue.ue_id} could not connect: no {ue.required_slice.value} slice "
                            f"with capacity for {ue.required_bandwidth} MHz (Attempt {attempt})")
            self.stats[outcome.value] += 1
            return AdmissionResult(outcome, best, attempt=attempt)

        allocated = best.network_slice.allocate(ue.required_bandwidth)
        if allocated <= 0:
            logger.warning(f"UE {ue.ue_id} failed to allocate resources on "
                           f"{best.network_slice.type_name} slice (Best Candidate: "
                           f"SINR {best.sinr:.2f} dB, RSRP {best.rsrp:.2f} dBm, "
                           f"BW {best.available_bandwidth:.2f} MHz)")
            self.stats['allocation_failed'] += 1
            return AdmissionResult(AdmissionOutcome.ALLOCATION_FAILED, best, attempt=attempt)

        ue.establish(Connection(
            station=best.station,
            network_slice=best.network_slice,
            sinr=best.sinr,
            rsrp=best.rsrp,
            allocated_bandwidth=allocated
        ))
        self.stats['connected'] += 1

        logger.info(f"UE {ue.ue_id} connected to gNB {best.station.station_id} on "
                    f"{best.network_slice.type_name} slice - Allocated BW: "
                    f"{allocated:.2f}/{ue.required_bandwidth} MHz, SINR: {best.sinr:.2f} dB, "
                    f"RSRP: {best.rsrp:.2f} dBm")
        return AdmissionResult(AdmissionOutcome.CONNECTED, best, allocated=allocated, attempt=attempt)

    def disconnect(self, ue: UserEquipment) -> float:
        """
        Release a device's bandwidth and clear its connection.

        Returns:
            Released bandwidth (0.0 if the device was not connected)
        """
        connection = ue.clear_connection()
        if connection is None:
            return 0.0

        connection.network_slice.release(connection.allocated_bandwidth)
        self.stats['disconnected'] += 1
        logger.info(f"UE {ue.ue_id} disconnected from gNB {connection.station.station_id}")
        return connection.allocated_bandwidth
