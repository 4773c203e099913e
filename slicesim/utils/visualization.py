"""
Visualization utilities for slice admission simulations.

This module plots connection timelines, per-class distributions, slice
utilization and the final network topology from SimulationResults.
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from ..simulation.metrics import SimulationResults

logger = logging.getLogger(__name__)

CLASS_COLORS = {"eMBB": "tab:blue", "URLLC": "tab:red", "mMTC": "tab:green"}


class NetworkVisualizer:
    """Plots for slice admission simulation results."""

    def __init__(self, style: str = 'seaborn-v0_8'):
        try:
            plt.style.use(style)
        except OSError:
            # Fallback to default if seaborn style not available
            plt.style.use('default')

    def create_comprehensive_report(self, results: SimulationResults, output_dir: str = "./results/"):
        """Create all plots in ``output_dir``."""
        Path(output_dir).mkdir(parents=True, exist_ok=True)
        if results.metrics_data.empty:
            logger.warning("No measurements recorded, skipping visualization")
            return

        self.plot_connection_timeline(results, output_dir)
        self.plot_class_distribution(results, output_dir)
        self.plot_slice_utilization(results, output_dir)
        self.plot_network_topology(results, output_dir)

        logger.info(f"Visualization report created in {output_dir}")

    def plot_connection_timeline(self, results: SimulationResults, output_dir: str):
        """Connected UEs per tick, total and per class."""
        df = results.metrics_data
        class_columns = [c for c in df.columns if c.startswith('connected_') and c != 'connected_ues']

        fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 8), sharex=True)

        ax1.plot(df['tick'], df['connection_rate'] * 100, linewidth=2, marker='o')
        ax1.set_title('Connected UEs Over Time', fontsize=14, fontweight='bold')
        ax1.set_ylabel('Connected (%)')
        ax1.set_ylim(0, 100)
        ax1.grid(True, alpha=0.3)

        long_df = df.melt(id_vars='tick', value_vars=class_columns,
                          var_name='slice_type', value_name='connected')
        long_df['slice_type'] = long_df['slice_type'].str[len('connected_'):]
        sns.lineplot(data=long_df, x='tick', y='connected', hue='slice_type',
                     palette=CLASS_COLORS, marker='o', ax=ax2)
        ax2.set_title('Connected UEs per Slice Class', fontsize=14, fontweight='bold')
        ax2.set_xlabel('Tick')
        ax2.set_ylabel('UEs')
        ax2.grid(True, alpha=0.3)

        plt.tight_layout()
        plt.savefig(f"{output_dir}/connection_timeline.png", dpi=150, bbox_inches='tight')
        plt.close()

    def plot_class_distribution(self, results: SimulationResults, output_dir: str):
        """Average and peak connected UEs per class."""
        if not results.class_statistics:
            return

        stats_df = pd.DataFrame([
            {'slice_type': slice_type, 'metric': metric, 'value': stats[key]}
            for slice_type, stats in results.class_statistics.items()
            for metric, key in (('Average', 'average_connected'), ('Peak', 'peak_connected'))
        ])

        fig, ax = plt.subplots(figsize=(8, 5))
        sns.barplot(data=stats_df, x='slice_type', y='value', hue='metric', ax=ax)
        ax.set_title('Connected UEs by Slice Class', fontsize=14, fontweight='bold')
        ax.set_xlabel('Slice Class')
        ax.set_ylabel('UEs')
        ax.grid(True, alpha=0.3, axis='y')

        plt.tight_layout()
        plt.savefig(f"{output_dir}/class_distribution.png", dpi=150, bbox_inches='tight')
        plt.close()

    def plot_slice_utilization(self, results: SimulationResults, output_dir: str):
        """Allocated share of each slice per tick."""
        df = results.metrics_data
        columns = [c for c in df.columns if c.startswith('slice_') and c.endswith('_utilization')]
        if not columns:
            return

        fig, ax = plt.subplots(figsize=(10, 6))
        for column in columns:
            slice_id = column[len('slice_'):-len('_utilization')]
            ax.plot(df['tick'], df[column] * 100, linewidth=2, label=f'Slice {slice_id}')
        ax.set_title('Slice Utilization Over Time', fontsize=14, fontweight='bold')
        ax.set_xlabel('Tick')
        ax.set_ylabel('Utilization (%)')
        ax.legend()
        ax.grid(True, alpha=0.3)

        plt.tight_layout()
        plt.savefig(f"{output_dir}/slice_utilization.png", dpi=150, bbox_inches='tight')
        plt.close()

    def plot_network_topology(self, results: SimulationResults, output_dir: str):
        """Stations and final UE positions, colored by class, hollow when unconnected."""
        fig, ax = plt.subplots(figsize=(10, 10))

        if results.station_positions:
            positions = np.array(list(results.station_positions.values()))
            ax.scatter(positions[:, 0], positions[:, 1], c='black', s=200, marker='^',
                       label='gNBs', edgecolors='black')
            for station_id, (x, y) in results.station_positions.items():
                ax.annotate(f'gNB {station_id}', (x, y), xytext=(5, 5), textcoords='offset points')

        for slice_type, color in CLASS_COLORS.items():
            for connected, marker_face in ((True, color), (False, 'none')):
                points = [(x, y) for x, y, ue_class, ue_connected in results.ue_positions
                          if ue_class == slice_type and ue_connected == connected]
                if not points:
                    continue
                points = np.array(points)
                label = f'{slice_type} ({"connected" if connected else "unconnected"})'
                ax.scatter(points[:, 0], points[:, 1], s=50, alpha=0.7, facecolors=marker_face,
                           edgecolors=color, label=label)

        ax.set_title('Network Topology', fontsize=14, fontweight='bold')
        ax.set_xlabel('X Position (m)')
        ax.set_ylabel('Y Position (m)')
        ax.legend()
        ax.grid(True, alpha=0.3)
        ax.axis('equal')

        plt.tight_layout()
        plt.savefig(f"{output_dir}/network_topology.png", dpi=150, bbox_inches='tight')
        plt.close()
