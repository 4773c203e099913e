"""
5G Network Slice Admission Simulation Framework

This package simulates devices attaching to a set of base stations subject
to signal-quality thresholds and per-slice bandwidth budgets.
"""

__version__ = "1.0.0"
