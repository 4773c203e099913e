#!/usr/bin/env python3
"""
Main simulation runner for the 5G Network Slice Admission Simulator.

This script runs slice admission simulations with configurable scenarios and
writes results and visualizations.

Usage:
    python run_simulation.py --config scenarios/baseline.json
    python run_simulation.py --scenario dense_urban --output results/dense.csv
    python run_simulation.py --help
"""

import argparse
import logging
import os
import sys
import traceback
from pathlib import Path

from slicesim.simulation.engine import SimulationEngine
from slicesim.simulation.metrics import MetricsCollector
from slicesim.utils.config import ConfigManager

SCENARIOS = ConfigManager.get_available_scenarios()


def parse_arguments(argv=None):
    """Parse runner options."""
    parser = argparse.ArgumentParser(
        description='5G Network Slice Admission Simulator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --config scenarios/baseline.json
  %(prog)s --scenario baseline --ticks 20
  %(prog)s --scenario dense_urban --output results/dense.csv
  %(prog)s --create-scenario mmwave_hotspot --config-output scenarios/mmwave.yaml
        """
    )

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument('--config', '-c', type=str,
                       help='Configuration file path (JSON or YAML)')
    group.add_argument('--scenario', '-s', type=str, choices=SCENARIOS,
                       help='Use predefined scenario')
    group.add_argument('--create-scenario', type=str, choices=SCENARIOS,
                       help='Create a new scenario configuration file')

    parser.add_argument('--ticks', '-t', type=int,
                        help='Number of simulation ticks (overrides config)')
    parser.add_argument('--seed', type=int,
                        help='Random seed (overrides config)')
    parser.add_argument('--output', '-o', type=str,
                        help='Output file for results, .json or .csv (overrides config)')
    parser.add_argument('--results-dir', type=str, default='results',
                        help='Directory for results and visualizations')
    parser.add_argument('--config-output', type=str,
                        help='Output path for created scenario (used with --create-scenario)')
    parser.add_argument('--no-visualization', action='store_true',
                        help='Disable visualization generation')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable debug logging')

    return parser.parse_args(argv)


def setup_logging(level: str, verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )


def apply_overrides(config, args):
    """Apply command line overrides to a loaded config."""
    if args.ticks is not None:
        config.ticks = args.ticks
    if args.seed is not None:
        config.random_seed = args.seed
    if args.output:
        config.output_file = args.output
    if args.no_visualization:
        config.enable_visualization = False
    return config


def load_scenario(scenario: str):
    """Build a SimulationConfig from a predefined scenario."""
    config_data = ConfigManager.get_scenario_configs()[scenario]
    ConfigManager.validate_config(config_data)
    return ConfigManager.create_simulation_config(config_data)


def run_simulation_with_config(config, args) -> bool:
    """Run one admission simulation and report, export and plot its results."""
    setup_logging(config.log_level, args.verbose)

    print("\n" + "=" * 60)
    print("5G NETWORK SLICE ADMISSION SIMULATOR")
    print("=" * 60)

    if args.verbose:
        print("Configuration:")
        print(f"  Ticks: {config.ticks}")
        print(f"  Stations: {len(config.stations)}")
        print(f"  Slices: {', '.join(s.slice_type for s in config.slices)}")
        print(f"  UEs: {config.num_ues}")
        print(f"  Random seed: {config.random_seed}")
        print()

    try:
        engine = SimulationEngine(config)
        results = engine.run()

        print("\n" + "-" * 50)
        print(f"SIMULATION COMPLETED AFTER {results.summary_statistics.get('ticks', 0)} TICKS")
        print("-" * 50)

        stats = results.summary_statistics
        if stats:
            print(f"Final connected UEs: {stats['final_connected_ues']}/{stats['total_ues']}")
            print(f"Average connection rate: {stats['average_connection_rate'] * 100:.1f}%")
            for outcome, count in stats['outcome_totals'].items():
                print(f"  {outcome}: {count}")
        for slice_type, class_stats in results.class_statistics.items():
            print(f"{slice_type}: {class_stats['average_connected']:.1f} UEs connected on average")

        print(f"Virtual time: {results.virtual_time:.2f} s")
        print(f"Execution time: {results.execution_time:.2f} seconds")

        if config.output_file:
            output_path = os.path.join(args.results_dir, os.path.basename(config.output_file))
            MetricsCollector().export_results(results, output_path)
            print(f"Results saved to: {output_path}")

        if config.enable_visualization and not args.no_visualization:
            print("\nGenerating visualizations...")
            try:
                from slicesim.utils.visualization import NetworkVisualizer
                NetworkVisualizer().create_comprehensive_report(results, args.results_dir)
                print(f"Visualizations created in: {args.results_dir}")
            except Exception as e:
                print(f"Warning: Error generating visualizations: {e}")
                if args.verbose:
                    traceback.print_exc()

        print("\n" + "=" * 60)
        return True

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return False
    except Exception as e:
        print(f"Error running simulation: {e}")
        if args.verbose:
            traceback.print_exc()
        return False


def create_scenario_config(scenario: str, args) -> bool:
    """Write a predefined scenario file for later editing."""
    output_file = args.config_output or f"scenarios/{scenario}.json"
    Path(output_file).parent.mkdir(parents=True, exist_ok=True)

    try:
        ConfigManager.create_default_config(output_file, scenario)
        print(f"Configuration created: {output_file}")
        print("Edit it, then run:")
        print(f"  python run_simulation.py --config {output_file}")
        return True
    except Exception as e:
        print(f"Error creating configuration: {e}")
        return False


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)

    if args.create_scenario:
        success = create_scenario_config(args.create_scenario, args)
    else:
        Path(args.results_dir).mkdir(parents=True, exist_ok=True)
        try:
            if args.config:
                print(f"Loading configuration from: {args.config}")
                config = ConfigManager.load_config(args.config)
            else:
                print(f"Using predefined scenario: {args.scenario}")
                config = load_scenario(args.scenario)
        except Exception as e:
            print(f"Error loading configuration: {e}")
            sys.exit(1)

        success = run_simulation_with_config(apply_overrides(config, args), args)

    sys.exit(0 if success else 1)


if __name__ == '__main__':
    main()
