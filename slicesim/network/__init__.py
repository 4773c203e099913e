"""
Network module for slice admission simulations.

This module implements base stations, network slices and the propagation model.
"""

from .network_slice import NetworkSlice, SliceRegistry, SliceType
from .base_station import BaseStation
from .propagation import PropagationModel, SignalMetrics, InterferenceModel, ConstantInterference

__all__ = ['NetworkSlice', 'SliceRegistry', 'SliceType', 'BaseStation',
           'PropagationModel', 'SignalMetrics', 'InterferenceModel', 'ConstantInterference']
