"""
Tests for the status and event log stream.
"""

import unittest
import sys
import os

import numpy as np

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from slicesim.core.config import SimulationConfig
from slicesim.mobility.mobility_models import RandomWalkModel
from slicesim.mobility.user_equipment import Position, UserEquipment
from slicesim.network.base_station import BaseStation
from slicesim.network.network_slice import NetworkSlice, SliceRegistry, SliceType
from slicesim.network.propagation import PropagationModel
from slicesim.qos.admission import AdmissionController
from slicesim.simulation.engine import SimulationEngine, TickSummary
from slicesim.simulation.reporting import StatusReporter

REPORTING_LOGGER = 'slicesim.simulation.reporting'
ADMISSION_LOGGER = 'slicesim.qos.admission'


class AlwaysKeep:
    """Engine generator stub that never drops a connection."""

    def random(self):
        return 0.99


def messages(captured):
    return [record.getMessage() for record in captured.records]


class TestStatusReporter(unittest.TestCase):
    """Test per-tick status lines"""

    def test_tick_header(self):
        with self.assertLogs(REPORTING_LOGGER, level='INFO') as captured:
            StatusReporter().tick_started(3)
        self.assertEqual(messages(captured), ["=== Simulation Step 3 ==="])

    def test_status_lists_only_populated_classes(self):
        summary = TickSummary(tick=1, time=0.0, connected=2, total_ues=4,
                              per_class={'eMBB': 2, 'URLLC': 0, 'mMTC': 0})
        with self.assertLogs(REPORTING_LOGGER, level='INFO') as captured:
            StatusReporter().report(summary)

        self.assertEqual(messages(captured), [
            "Network Status: 2/4 UEs connected (50.0%)",
            "Slice Distribution:",
            "  eMBB: 2 UEs",
        ])

    def test_no_devices(self):
        summary = TickSummary(tick=1, time=0.0, connected=0, total_ues=0,
                              per_class={'eMBB': 0, 'URLLC': 0, 'mMTC': 0})
        with self.assertLogs(REPORTING_LOGGER, level='INFO') as captured:
            StatusReporter().report(summary)
        self.assertEqual(messages(captured), [
            "Network Status: 0/0 UEs connected (0.0%)",
            "Slice Distribution:",
        ])

    def test_engine_tick_stream(self):
        station = BaseStation(1, (0.0, 0.0), frequency=600e6, tx_power=40.0)
        station.add_slice(1)
        ues = [UserEquipment(i, Position(0.0, 0.0), speed=1.0,
                             required_slice=SliceType.EMBB, required_bandwidth=5.0)
               for i in range(1, 6)]
        engine = SimulationEngine(
            SimulationConfig(random_seed=1),
            stations=[station],
            slices=SliceRegistry([NetworkSlice(1, SliceType.EMBB, 0.7, 100.0)]),
            ues=ues,
            propagation=PropagationModel(np.random.default_rng(0), shadowing_std=0.0),
            mobility=RandomWalkModel(np.random.default_rng(0), time_step=0.0),
            rng=AlwaysKeep()
        )

        with self.assertLogs(REPORTING_LOGGER, level='INFO') as captured:
            engine.run_tick()

        self.assertEqual(messages(captured), [
            "=== Simulation Step 1 ===",
            "Network Status: 5/5 UEs connected (100.0%)",
            "Slice Distribution:",
            "  eMBB: 5 UEs",
        ])


class TestAdmissionEvents(unittest.TestCase):
    """Test connection, failure and disconnection event lines"""

    def setUp(self):
        self.station = BaseStation(1, (0.0, 0.0), frequency=28e9, tx_power=30.0)
        self.station.add_slice(1)
        self.slice = NetworkSlice(1, SliceType.EMBB, 0.7, 100.0)
        self.controller = AdmissionController(
            [self.station], SliceRegistry([self.slice]),
            PropagationModel(np.random.default_rng(0), shadowing_std=0.0))

    def test_connection_and_disconnection_lines(self):
        ue = UserEquipment(7, Position(0.0, 0.0), speed=1.0,
                           required_slice=SliceType.EMBB, required_bandwidth=10.0)

        with self.assertLogs(ADMISSION_LOGGER, level='INFO') as captured:
            self.controller.connect(ue)
            self.controller.disconnect(ue)

        connected, disconnected = messages(captured)
        self.assertTrue(connected.startswith(
            "UE 7 connected to gNB 1 on eMBB slice - Allocated BW: 10.00/10.0 MHz, SINR: "))
        self.assertIn("RSRP: 30.00 dBm", connected)
        self.assertEqual(disconnected, "UE 7 disconnected from gNB 1")

    def test_no_viable_station_line_counts_attempts(self):
        ue = UserEquipment(8, Position(1000.0, 0.0), speed=1.0,
                           required_slice=SliceType.URLLC, required_bandwidth=5.0)

        with self.assertLogs(ADMISSION_LOGGER, level='INFO') as captured:
            self.controller.connect(ue)
            self.controller.connect(ue)

        self.assertEqual(messages(captured), [
            "UE 8 found no viable stations (Attempt 1)",
            "UE 8 found no viable stations (Attempt 2)",
        ])


if __name__ == '__main__':
    unittest.main()
