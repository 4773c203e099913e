"""
Per-class admission thresholds.

This module maps each slice traffic class to the minimum signal quality a
device of that class needs before it may be admitted.
"""

from typing import Dict, NamedTuple

from ..network.network_slice import SliceType


class SliceRequirements(NamedTuple):
    """Admission thresholds for one traffic class."""
    min_sinr: float  # dB
    min_rsrp: float  # dBm
    bandwidth_priority: float
    description: str


class SliceRequirementsMapping:
    """Traffic class to admission threshold mapping."""

    _REQUIREMENTS: Dict[SliceType, SliceRequirements] = {
        SliceType.EMBB: SliceRequirements(5.0, -110.0, 0.7, "Enhanced Mobile Broadband"),
        SliceType.URLLC: SliceRequirements(10.0, -105.0, 0.9, "Ultra-Reliable Low-Latency Communication"),
        SliceType.MMTC: SliceRequirements(0.0, -120.0, 0.3, "Massive Machine-Type Communication"),
    }

    @classmethod
    def get_requirements(cls, slice_type: SliceType) -> SliceRequirements:
        """Get admission thresholds for a traffic class."""
        if slice_type not in cls._REQUIREMENTS:
            raise ValueError(f"Unknown slice type: {slice_type}")
        return cls._REQUIREMENTS[slice_type]

    @classmethod
    def get_supported_types(cls) -> list:
        return list(cls._REQUIREMENTS.keys())

    @classmethod
    def meets_thresholds(cls, slice_type: SliceType, sinr: float, rsrp: float) -> bool:
        """Check measured signal quality against the class thresholds."""
        requirements = cls.get_requirements(slice_type)
        return sinr >= requirements.min_sinr and rsrp >= requirements.min_rsrp
