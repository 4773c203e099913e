"""
Admission control module for slice admission simulations.

This module implements per-class admission thresholds and station/slice
selection for connecting devices.
"""

from .slice_requirements import SliceRequirements, SliceRequirementsMapping
from .admission import AdmissionController, AdmissionOutcome, AdmissionResult, ConnectionCandidate

__all__ = ['SliceRequirements', 'SliceRequirementsMapping', 'AdmissionController',
           'AdmissionOutcome', 'AdmissionResult', 'ConnectionCandidate']
