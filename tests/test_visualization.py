"""
Tests for result plots and the command line runner.
"""

import unittest
import sys
import os
import tempfile

import matplotlib
matplotlib.use('Agg')

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import run_simulation
from slicesim.core.config import SimulationConfig
from slicesim.simulation.engine import SimulationEngine
from slicesim.utils.visualization import NetworkVisualizer


class TestNetworkVisualizer(unittest.TestCase):
    """Smoke tests for the plot report"""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_report_writes_all_plots(self):
        results = SimulationEngine(SimulationConfig(random_seed=9, num_ues=12)).run(ticks=3)
        NetworkVisualizer().create_comprehensive_report(results, self.tmpdir.name)

        for name in ('connection_timeline.png', 'class_distribution.png',
                     'slice_utilization.png', 'network_topology.png'):
            self.assertTrue(os.path.exists(os.path.join(self.tmpdir.name, name)), name)

    def test_empty_results_skip_plots(self):
        results = SimulationEngine(SimulationConfig(random_seed=9, num_ues=2)).run(ticks=0)
        NetworkVisualizer().create_comprehensive_report(results, self.tmpdir.name)
        self.assertEqual(os.listdir(self.tmpdir.name), [])


class TestRunSimulation(unittest.TestCase):
    """Test the command line entry point"""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_create_scenario(self):
        path = os.path.join(self.tmpdir.name, 'baseline.yaml')
        with self.assertRaises(SystemExit) as ctx:
            run_simulation.main(['--create-scenario', 'baseline', '--config-output', path])
        self.assertEqual(ctx.exception.code, 0)
        self.assertTrue(os.path.exists(path))

    def test_run_scenario_with_overrides(self):
        with self.assertRaises(SystemExit) as ctx:
            run_simulation.main(['--scenario', 'baseline', '--ticks', '2', '--seed', '1',
                                 '--output', 'run.csv', '--results-dir', self.tmpdir.name,
                                 '--no-visualization'])
        self.assertEqual(ctx.exception.code, 0)
        self.assertTrue(os.path.exists(os.path.join(self.tmpdir.name, 'run.csv')))

    def test_missing_config_exits_non_zero(self):
        with self.assertRaises(SystemExit) as ctx:
            run_simulation.main(['--config', os.path.join(self.tmpdir.name, 'nope.json'),
                                 '--results-dir', self.tmpdir.name])
        self.assertEqual(ctx.exception.code, 1)


if __name__ == '__main__':
    unittest.main()
