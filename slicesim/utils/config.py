"""
Configuration management for slice admission simulations.

Loads slice admission scenarios from JSON or YAML, validates them against a
jsonschema schema and converts them into SimulationConfig objects.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import jsonschema
import yaml

from ..core.config import SimulationConfig, SliceConfig, StationConfig

logger = logging.getLogger(__name__)

_POSITION = {
    "type": "array",
    "items": {"type": "number"},
    "minItems": 2,
    "maxItems": 2
}

_RANGE = {
    "type": "array",
    "items": {"type": "integer", "minimum": 0},
    "minItems": 2,
    "maxItems": 2
}

SLICE_TYPES = ["eMBB", "URLLC", "mMTC"]


class ConfigManager:
    """Scenario files, schema validation and predefined scenarios."""

    # Scenario file schema
    CONFIG_SCHEMA = {
        "type": "object",
        "properties": {
            "simulation": {
                "type": "object",
                "properties": {
                    "ticks": {"type": "integer", "minimum": 0},
                    "time_step": {"type": "number", "exclusiveMinimum": 0},
                    "random_seed": {"type": ["integer", "null"], "minimum": 0},
                    "log_level": {"type": "string", "enum": ["DEBUG", "INFO", "WARNING", "ERROR"]},
                    "output_file": {"type": ["string", "null"]},
                    "enable_visualization": {"type": "boolean"},
                    "attempt_interval": {"type": "number", "minimum": 0},
                    "tick_interval": {"type": "number", "minimum": 0}
                },
                "required": ["ticks"],
                "additionalProperties": False
            },
            "network": {
                "type": "object",
                "properties": {
                    "stations": {
                        "type": "array",
                        "minItems": 1,
                        "items": {
                            "type": "object",
                            "properties": {
                                "position": _POSITION,
                                "frequency": {"type": "number", "exclusiveMinimum": 0},
                                "tx_power": {"type": "number"},
                                "height": {"type": "number", "exclusiveMinimum": 1},
                                "antenna_gain": {"type": "number"}
                            },
                            "required": ["position", "frequency", "tx_power"],
                            "additionalProperties": False
                        }
                    }
                },
                "required": ["stations"],
                "additionalProperties": False
            },
            "slices": {
                "type": "array",
                "minItems": 1,
                "items": {
                    "type": "object",
                    "properties": {
                        "type": {"type": "string", "enum": SLICE_TYPES},
                        "priority": {"type": "number", "exclusiveMinimum": 0, "maximum": 1},
                        "capacity": {"type": "number", "minimum": 0}
                    },
                    "required": ["type", "priority", "capacity"],
                    "additionalProperties": False
                }
            },
            "ues": {
                "type": "object",
                "properties": {
                    "num_ues": {"type": "integer", "minimum": 0},
                    "class_weights": {
                        "type": "object",
                        "propertyNames": {"enum": SLICE_TYPES},
                        "additionalProperties": {"type": "number", "minimum": 0}
                    },
                    "area_size": {"type": "number", "exclusiveMinimum": 0},
                    "bandwidth_range": _RANGE,
                    "speed_range": _RANGE
                },
                "required": ["num_ues"],
                "additionalProperties": False
            },
            "admission": {
                "type": "object",
                "properties": {
                    "max_connection_attempts": {"type": "integer", "minimum": 1},
                    "backoff_base": {"type": "number", "minimum": 0},
                    "disconnect_probability": {"type": "number", "minimum": 0, "maximum": 1}
                },
                "additionalProperties": False
            }
        },
        "required": ["simulation", "network", "slices", "ues"]
    }

    @classmethod
    def load_config(cls, config_file: str) -> SimulationConfig:
        """
        Load configuration from file.

        Args:
            config_file: Path to configuration file (JSON or YAML)

        Returns:
            SimulationConfig built from the file

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If the file format is unsupported
            jsonschema.ValidationError: If config is invalid
        """
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        logger.info(f"Loading configuration from {config_file}")

        with open(config_path, 'r') as f:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                config_data = yaml.safe_load(f)
            elif config_path.suffix.lower() == '.json':
                config_data = json.load(f)
            else:
                raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

        cls.validate_config(config_data)
        return cls.create_simulation_config(config_data)

    @classmethod
    def validate_config(cls, config_data: Dict[str, Any]):
        """
        Validate scenario data against CONFIG_SCHEMA and check UE ranges.

        Raises:
            jsonschema.ValidationError: If config is invalid
        """
        try:
            jsonschema.validate(config_data, cls.CONFIG_SCHEMA)
        except jsonschema.ValidationError as e:
            logger.error(f"Configuration validation error: {e.message}")
            raise

        ues_config = config_data.get('ues', {})
        for key in ('bandwidth_range', 'speed_range'):
            low, high = ues_config.get(key, (0, 1))
            if low >= high:
                raise ValueError(f"ues.{key} must be [low, high) with low < high, got {[low, high]}")

    @classmethod
    def create_simulation_config(cls, config_data: Dict[str, Any]) -> SimulationConfig:
        """Convert validated scenario data, filling gaps from SimulationConfig defaults."""
        defaults = SimulationConfig()
        sim_config = config_data.get('simulation', {})
        network_config = config_data.get('network', {})
        ues_config = config_data.get('ues', {})
        admission_config = config_data.get('admission', {})

        stations = [
            StationConfig(
                position=tuple(station['position']),
                frequency=station['frequency'],
                tx_power=station['tx_power'],
                height=station.get('height', 25.0),
                antenna_gain=station.get('antenna_gain', 10.0)
            )
            for station in network_config.get('stations', [])
        ] or defaults.stations

        slices = [
            SliceConfig(slice_type=s['type'], priority=s['priority'], capacity=s['capacity'])
            for s in config_data.get('slices', [])
        ] or defaults.slices

        return SimulationConfig(
            # Simulation parameters
            ticks=sim_config.get('ticks', defaults.ticks),
            time_step=sim_config.get('time_step', defaults.time_step),
            random_seed=sim_config.get('random_seed'),
            log_level=sim_config.get('log_level', defaults.log_level),
            output_file=sim_config.get('output_file'),
            enable_visualization=sim_config.get('enable_visualization', False),
            attempt_interval=sim_config.get('attempt_interval', defaults.attempt_interval),
            tick_interval=sim_config.get('tick_interval', defaults.tick_interval),

            # Network parameters
            stations=stations,
            slices=slices,

            # UE parameters
            num_ues=ues_config.get('num_ues', defaults.num_ues),
            class_weights=ues_config.get('class_weights', defaults.class_weights),
            area_size=ues_config.get('area_size', defaults.area_size),
            bandwidth_range=tuple(ues_config.get('bandwidth_range', defaults.bandwidth_range)),
            speed_range=tuple(ues_config.get('speed_range', defaults.speed_range)),

            # Admission parameters
            max_connection_attempts=admission_config.get('max_connection_attempts',
                                                         defaults.max_connection_attempts),
            backoff_base=admission_config.get('backoff_base', defaults.backoff_base),
            disconnect_probability=admission_config.get('disconnect_probability',
                                                        defaults.disconnect_probability)
        )

    @classmethod
    def create_default_config(cls, config_file: str, scenario: str = "baseline"):
        """
        Write a predefined scenario to disk (YAML for .yaml/.yml, else JSON).

        Args:
            config_file: Output configuration file path
            scenario: Scenario name (see get_available_scenarios)
        """
        scenarios = cls.get_scenario_configs()
        if scenario not in scenarios:
            raise ValueError(f"Unknown scenario: {scenario}")
        config = scenarios[scenario]

        config_path = Path(config_file)
        with open(config_path, 'w') as f:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                yaml.dump(config, f, default_flow_style=False, indent=2)
            else:
                json.dump(config, f, indent=2)
        logger.info(f"Created {scenario} scenario configuration: {config_file}")

    @classmethod
    def get_scenario_configs(cls) -> Dict[str, Dict[str, Any]]:
        """Predefined scenarios keyed by name"""
        baseline_slices = [
            {"type": "eMBB", "priority": 0.7, "capacity": 100.0},
            {"type": "URLLC", "priority": 0.9, "capacity": 50.0},
            {"type": "mMTC", "priority": 0.3, "capacity": 200.0}
        ]

        return {
            "baseline": {
                "simulation": {
                    "ticks": 10,
                    "time_step": 1.0,
                    "random_seed": 42,
                    "log_level": "INFO",
                    "output_file": "results/baseline_results.json",
                    "enable_visualization": False
                },
                "network": {
                    "stations": [
                        {"position": [0, 0], "frequency": 600e6, "tx_power": 40.0},
                        {"position": [1000, 1000], "frequency": 28e9, "tx_power": 30.0},
                        {"position": [0, 1000], "frequency": 600e6, "tx_power": 40.0},
                        {"position": [1000, 0], "frequency": 28e9, "tx_power": 30.0}
                    ]
                },
                "slices": baseline_slices,
                "ues": {
                    "num_ues": 50,
                    "class_weights": {"eMBB": 70, "URLLC": 20, "mMTC": 10},
                    "area_size": 1000.0,
                    "bandwidth_range": [5, 25],
                    "speed_range": [1, 6]
                },
                "admission": {
                    "max_connection_attempts": 5,
                    "backoff_base": 0.1,
                    "disconnect_probability": 0.1
                }
            },
            "dense_urban": {
                "simulation": {
                    "ticks": 30,
                    "time_step": 1.0,
                    "random_seed": 123,
                    "log_level": "INFO",
                    "output_file": "results/dense_urban_results.csv",
                    "enable_visualization": True
                },
                "network": {
                    "stations": [
                        {"position": [x, y], "frequency": 3.5e9, "tx_power": 43.0}
                        for x in (0, 500, 1000) for y in (0, 500, 1000)
                    ]
                },
                "slices": [
                    {"type": "eMBB", "priority": 0.7, "capacity": 400.0},
                    {"type": "URLLC", "priority": 0.9, "capacity": 100.0},
                    {"type": "mMTC", "priority": 0.3, "capacity": 200.0}
                ],
                "ues": {
                    "num_ues": 200,
                    "class_weights": {"eMBB": 60, "URLLC": 25, "mMTC": 15},
                    "area_size": 1000.0
                }
            },
            "mmwave_hotspot": {
                "simulation": {
                    "ticks": 20,
                    "time_step": 1.0,
                    "random_seed": 7,
                    "log_level": "INFO",
                    "enable_visualization": False
                },
                "network": {
                    "stations": [
                        {"position": [0, 0], "frequency": 28e9, "tx_power": 30.0, "height": 10.0},
                        {"position": [200, 0], "frequency": 28e9, "tx_power": 30.0, "height": 10.0},
                        {"position": [100, 170], "frequency": 28e9, "tx_power": 30.0, "height": 10.0}
                    ]
                },
                "slices": baseline_slices,
                "ues": {
                    "num_ues": 40,
                    "area_size": 200.0,
                    "speed_range": [1, 3]
                },
                "admission": {
                    "disconnect_probability": 0.05
                }
            }
        }

    @classmethod
    def get_available_scenarios(cls) -> list:
        """Names of the predefined scenarios."""
        return list(cls.get_scenario_configs().keys())
