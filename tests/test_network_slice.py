"""
Tests for network slice resource pools and base stations.
"""

import unittest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from slicesim.network.network_slice import NetworkSlice, SliceRegistry, SliceType
from slicesim.network.base_station import BaseStation


class TestNetworkSlice(unittest.TestCase):
    """Test cases for slice allocate/release/check_available"""

    def setUp(self):
        self.slice = NetworkSlice(1, SliceType.EMBB, priority=0.7, capacity=100.0)

    def test_initial_state(self):
        self.assertEqual(self.slice.remaining_bandwidth, 100.0)
        self.assertAlmostEqual(self.slice.check_available(), 70.0)
        self.assertEqual(self.slice.type_name, "eMBB")
        self.assertEqual(self.slice.utilization(), 0.0)

    def test_sub_threshold_request_is_ignored(self):
        """Requests below 0.1 allocate nothing and leave the pool unchanged"""
        for requested in (0.0, 0.05, 0.0999):
            self.assertEqual(self.slice.allocate(requested), 0)
        self.assertEqual(self.slice.remaining_bandwidth, 100.0)

    def test_allocation_within_headroom(self):
        allocated = self.slice.allocate(10.0)
        self.assertEqual(allocated, 10.0)
        self.assertEqual(self.slice.remaining_bandwidth, 90.0)
        self.assertAlmostEqual(self.slice.check_available(), 63.0)

    def test_allocation_at_threshold(self):
        self.assertEqual(self.slice.allocate(0.1), 0.1)
        self.assertAlmostEqual(self.slice.remaining_bandwidth, 99.9)

    def test_allocation_is_capped_by_weighted_headroom(self):
        """Requests above remaining * priority get exactly the headroom"""
        allocated = self.slice.allocate(80.0)
        self.assertAlmostEqual(allocated, 70.0)
        self.assertAlmostEqual(self.slice.remaining_bandwidth, 30.0)

        # Headroom shrinks geometrically, never below zero
        allocated = self.slice.allocate(80.0)
        self.assertAlmostEqual(allocated, 21.0)
        self.assertAlmostEqual(self.slice.remaining_bandwidth, 9.0)
        self.assertGreaterEqual(self.slice.remaining_bandwidth, 0.0)

    def test_release_restores_headroom(self):
        before = self.slice.check_available()
        allocated = self.slice.allocate(12.5)
        self.slice.release(allocated)
        self.assertEqual(self.slice.check_available(), before)
        self.assertEqual(self.slice.remaining_bandwidth, 100.0)

    def test_release_then_allocate_is_monotonic(self):
        """After release(x), allocate(y <= x) gets at least what it got before"""
        self.slice.allocate(70.0)
        baseline = NetworkSlice(2, SliceType.EMBB, 0.7, 100.0)
        baseline.allocate(70.0)
        expected_before_release = baseline.allocate(20.0)

        self.slice.release(20.0)
        self.assertGreaterEqual(self.slice.allocate(20.0), expected_before_release)

    def test_release_is_trusted(self):
        """The pool keeps no per-holder ledger, so over-release is accepted"""
        self.slice.release(5.0)
        self.assertEqual(self.slice.remaining_bandwidth, 105.0)

    def test_utilization(self):
        self.slice.allocate(25.0)
        self.assertAlmostEqual(self.slice.utilization(), 0.25)
        empty = NetworkSlice(3, SliceType.MMTC, 0.3, 0.0)
        self.assertEqual(empty.utilization(), 0.0)
        self.assertEqual(empty.allocate(5.0), 0.0)

    def test_invalid_parameters(self):
        with self.assertRaises(ValueError):
            NetworkSlice(1, SliceType.EMBB, priority=0.0, capacity=100.0)
        with self.assertRaises(ValueError):
            NetworkSlice(1, SliceType.EMBB, priority=1.5, capacity=100.0)
        with self.assertRaises(ValueError):
            NetworkSlice(1, SliceType.EMBB, priority=0.5, capacity=-1.0)

    def test_identity_is_read_only(self):
        with self.assertRaises(AttributeError):
            self.slice.slice_id = 5
        with self.assertRaises(AttributeError):
            self.slice.slice_type = SliceType.URLLC

    def test_remaining_bandwidth_is_read_only(self):
        """The pool changes only through allocate and release"""
        with self.assertRaises(AttributeError):
            self.slice.remaining_bandwidth = 0.0
        self.assertEqual(self.slice.remaining_bandwidth, 100.0)


class TestSliceRegistry(unittest.TestCase):
    """Test cases for SliceRegistry"""

    def setUp(self):
        self.registry = SliceRegistry([
            NetworkSlice(1, SliceType.EMBB, 0.7, 100.0),
            NetworkSlice(2, SliceType.URLLC, 0.9, 50.0),
            NetworkSlice(3, SliceType.EMBB, 0.5, 40.0),
        ])

    def test_lookup(self):
        self.assertEqual(len(self.registry), 3)
        self.assertIn(2, self.registry)
        self.assertEqual(self.registry.get(2).slice_type, SliceType.URLLC)
        with self.assertRaises(KeyError):
            self.registry.get(99)

    def test_duplicate_id_rejected(self):
        with self.assertRaises(ValueError):
            self.registry.add(NetworkSlice(1, SliceType.MMTC, 0.3, 10.0))

    def test_of_type(self):
        embb = self.registry.of_type(SliceType.EMBB)
        self.assertEqual([s.slice_id for s in embb], [1, 3])
        self.assertEqual([s.slice_id for s in self.registry.of_type(SliceType.EMBB, ids=[3])], [3])
        self.assertEqual(self.registry.of_type(SliceType.MMTC), [])


class TestBaseStation(unittest.TestCase):
    """Test cases for BaseStation"""

    def test_defaults_and_slice_ids(self):
        station = BaseStation(1, (10.0, 20.0), frequency=600e6, tx_power=40.0)
        self.assertEqual(station.height, 25.0)
        self.assertEqual(station.antenna_gain, 10.0)
        self.assertEqual(station.position.x, 10.0)
        self.assertEqual(station.slice_ids, ())

        station.add_slice(1)
        station.add_slice(2)
        station.add_slice(1)
        self.assertEqual(station.slice_ids, (1, 2))
        self.assertTrue(station.serves(2))
        self.assertFalse(station.serves(3))

    def test_position_cannot_be_mutated(self):
        station = BaseStation(1, (0.0, 0.0), frequency=600e6, tx_power=40.0)
        station.position.x = 500.0
        self.assertEqual(station.position.x, 0.0)


if __name__ == '__main__':
    unittest.main()
