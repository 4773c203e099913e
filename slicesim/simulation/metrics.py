"""
Metrics collection and analysis for slice admission simulations.

This module records one measurement per tick and turns them into a pandas
DataFrame, summary statistics and exported result files.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd


@dataclass
class SimulationResults:
    """Container for simulation results."""
    metrics_data: pd.DataFrame
    summary_statistics: Dict[str, Any]
    class_statistics: Dict[str, Dict[str, Any]]
    slice_statistics: Dict[int, Dict[str, Any]]
    admission_statistics: Dict[str, Any]
    station_positions: Dict[int, tuple] = field(default_factory=dict)
    ue_positions: List[tuple] = field(default_factory=list)
    execution_time: float = 0.0
    virtual_time: float = 0.0
    config: Optional[Any] = None


class MetricsCollector:
    """Collects and analyzes per-tick simulation metrics."""

    def __init__(self):
        self.measurements: List[Dict] = []
        self.admission_statistics: Dict[str, Any] = {}

    def record(self, summary):
        """Add one tick summary."""
        self.add_measurement({
            'tick': summary.tick,
            'timestamp': summary.time,
            'connected_ues': summary.connected,
            'total_ues': summary.total_ues,
            'connection_rate': summary.connection_rate,
            'pacing_delay': summary.pacing_delay,
            'per_class': dict(summary.per_class),
            'outcomes': dict(summary.outcomes),
            'slice_utilization': dict(summary.slice_utilization),
            'station_load': dict(summary.station_load)
        })

    def add_measurement(self, measurement: Dict):
        """Add a raw measurement point."""
        self.measurements.append(measurement.copy())

    def _create_dataframe(self) -> pd.DataFrame:
        """Create a pandas DataFrame from measurements, one row per tick."""
        rows = []
        for measurement in self.measurements:
            row = {
                'tick': measurement['tick'],
                'timestamp': measurement['timestamp'],
                'connected_ues': measurement['connected_ues'],
                'total_ues': measurement['total_ues'],
                'connection_rate': measurement['connection_rate'],
                'pacing_delay': measurement.get('pacing_delay', 0.0)
            }
            for slice_type, count in measurement.get('per_class', {}).items():
                row[f'connected_{slice_type}'] = count
            for outcome, count in measurement.get('outcomes', {}).items():
                row[f'outcome_{outcome}'] = count
            for slice_id, utilization in measurement.get('slice_utilization', {}).items():
                row[f'slice_{slice_id}_utilization'] = utilization
            for station_id, load in measurement.get('station_load', {}).items():
                row[f'station_{station_id}_ues'] = load
            rows.append(row)

        return pd.DataFrame(rows).fillna(0)

    def generate_results(self) -> SimulationResults:
        """Generate simulation results."""
        if not self.measurements:
            return SimulationResults(
                metrics_data=pd.DataFrame(),
                summary_statistics={},
                class_statistics={},
                slice_statistics={},
                admission_statistics=dict(self.admission_statistics)
            )

        df = self._create_dataframe()
        return SimulationResults(
            metrics_data=df,
            summary_statistics=self._calculate_summary_statistics(df),
            class_statistics=self._calculate_class_statistics(df),
            slice_statistics=self._calculate_slice_statistics(df),
            admission_statistics=dict(self.admission_statistics)
        )

    def _calculate_summary_statistics(self, df: pd.DataFrame) -> Dict[str, Any]:
        outcome_columns = [c for c in df.columns if c.startswith('outcome_')]
        return {
            'ticks': int(df['tick'].max()),
            'simulation_duration': float(df['timestamp'].max() + df['pacing_delay'].iloc[-1]),
            'total_ues': int(df['total_ues'].iloc[-1]),
            'final_connected_ues': int(df['connected_ues'].iloc[-1]),
            'average_connection_rate': float(df['connection_rate'].mean()),
            'min_connection_rate': float(df['connection_rate'].min()),
            'max_connection_rate': float(df['connection_rate'].max()),
            'outcome_totals': {c[len('outcome_'):]: int(df[c].sum()) for c in outcome_columns}
        }

    def _calculate_class_statistics(self, df: pd.DataFrame) -> Dict[str, Dict[str, Any]]:
        class_stats = {}
        for column in [c for c in df.columns if c.startswith('connected_') and c != 'connected_ues']:
            slice_type = column[len('connected_'):]
            class_stats[slice_type] = {
                'average_connected': float(df[column].mean()),
                'peak_connected': int(df[column].max()),
                'final_connected': int(df[column].iloc[-1])
            }
        return class_stats

    def _calculate_slice_statistics(self, df: pd.DataFrame) -> Dict[int, Dict[str, Any]]:
        slice_stats = {}
        for column in [c for c in df.columns if c.startswith('slice_') and c.endswith('_utilization')]:
            slice_id = int(column[len('slice_'):-len('_utilization')])
            values = df[column].values
            slice_stats[slice_id] = {
                'average_utilization': float(np.mean(values)),
                'peak_utilization': float(np.max(values)),
                'final_utilization': float(values[-1])
            }
        return slice_stats

    def export_results(self, results: SimulationResults, output_file: str):
        """Export results to file."""
        if output_file.endswith('.json'):
            self._export_json(results, output_file)
        elif output_file.endswith('.csv'):
            self._export_csv(results, output_file)
        else:
            raise ValueError(f"Unsupported file format: {output_file}")

    def _export_json(self, results: SimulationResults, filename: str):
        """Export results to JSON."""
        export_data = {
            'summary_statistics': results.summary_statistics,
            'class_statistics': results.class_statistics,
            'slice_statistics': results.slice_statistics,
            'admission_statistics': results.admission_statistics,
            'time_series': results.metrics_data.to_dict(orient='records'),
            'execution_time': results.execution_time,
            'virtual_time': results.virtual_time
        }

        with open(filename, 'w') as f:
            json.dump(export_data, f, indent=2, default=str)

    def _export_csv(self, results: SimulationResults, filename: str):
        """Export results to CSV."""
        results.metrics_data.to_csv(filename, index=False)
