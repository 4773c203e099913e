"""
Simulation module for slice admission simulations.

This module provides the main simulation engine and metrics collection.
"""

from .engine import SimulationEngine, BackoffPolicy, TickSummary
from .metrics import MetricsCollector, SimulationResults
from .population import PopulationBuilder

__all__ = ['SimulationEngine', 'BackoffPolicy', 'TickSummary', 'MetricsCollector',
           'SimulationResults', 'PopulationBuilder']
