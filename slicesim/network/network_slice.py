"""
Network slice resource pools.

Each slice is a network-wide bandwidth budget for one traffic class. Stations
refer to slices by id through a SliceRegistry, so the same pool is shared by
every station that serves it.
"""

import logging
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)

MIN_ALLOCATION = 0.1  # requests below this are treated as noise


class SliceType(Enum):
    """Traffic classes served by network slices."""
    EMBB = "eMBB"
    URLLC = "URLLC"
    MMTC = "mMTC"


class NetworkSlice:
    """
    Priority-weighted bandwidth pool for one traffic class.

    Only ``priority * remaining_bandwidth`` is visible to admission checks
    and to a single allocation.
    """

    def __init__(self, slice_id: int, slice_type: SliceType, priority: float, capacity: float):
        if not 0 < priority <= 1:
            raise ValueError(f"Slice priority must be in (0, 1], got {priority}")
        if capacity < 0:
            raise ValueError(f"Slice capacity must be non-negative, got {capacity}")

        self._slice_id = slice_id
        self._slice_type = slice_type
        self.priority = priority
        self.capacity = capacity
        self._remaining_bandwidth = capacity

    @property
    def slice_id(self) -> int:
        return self._slice_id

    @property
    def slice_type(self) -> SliceType:
        return self._slice_type

    @property
    def remaining_bandwidth(self) -> float:
        """Unallocated bandwidth; changes only through allocate and release."""
        return self._remaining_bandwidth

    @property
    def type_name(self) -> str:
        return self._slice_type.value

    def allocate(self, requested: float) -> float:
        """
        Allocate bandwidth from the pool.

        Args:
            requested: Requested bandwidth

        Returns:
            Allocated amount (0 for sub-threshold requests), capped at the
            priority-weighted headroom
        """
        if requested < MIN_ALLOCATION:
            return 0.0

        allocated = min(requested, self._remaining_bandwidth * self.priority)
        self._remaining_bandwidth -= allocated
        logger.debug(f"Slice {self._slice_id} ({self.type_name}) allocated {allocated:.2f}, "
                     f"remaining {self._remaining_bandwidth:.2f}")
        return allocated

    def check_available(self) -> float:
        """Priority-weighted headroom."""
        return self._remaining_bandwidth * self.priority

    def release(self, amount: float):
        """Return bandwidth to the pool. The caller must release what it was allocated."""
        self._remaining_bandwidth += amount
        logger.debug(f"Slice {self._slice_id} ({self.type_name}) released {amount:.2f}, "
                     f"remaining {self._remaining_bandwidth:.2f}")

    def utilization(self) -> float:
        """Fraction of nominal capacity currently allocated."""
        if self.capacity == 0:
            return 0.0
        return 1.0 - self._remaining_bandwidth / self.capacity

    def __repr__(self) -> str:
        return (f"NetworkSlice(id={self._slice_id}, type={self.type_name}, priority={self.priority}, "
                f"remaining={self._remaining_bandwidth}/{self.capacity})")


class SliceRegistry:
    """Slices keyed by id."""

    def __init__(self, slices: Optional[Iterable[NetworkSlice]] = None):
        self._slices: Dict[int, NetworkSlice] = {}
        for network_slice in slices or []:
            self.add(network_slice)

    def add(self, network_slice: NetworkSlice):
        if network_slice.slice_id in self._slices:
            raise ValueError(f"Duplicate slice id: {network_slice.slice_id}")
        self._slices[network_slice.slice_id] = network_slice

    def get(self, slice_id: int) -> NetworkSlice:
        if slice_id not in self._slices:
            raise KeyError(f"Unknown slice id: {slice_id}")
        return self._slices[slice_id]

    def of_type(self, slice_type: SliceType, ids: Optional[Iterable[int]] = None) -> List[NetworkSlice]:
        """Slices of ``slice_type`` in registration order, optionally limited to ``ids``."""
        allowed = set(ids) if ids is not None else None
        return [s for s in self._slices.values()
                if s.slice_type == slice_type and (allowed is None or s.slice_id in allowed)]

    def __iter__(self) -> Iterator[NetworkSlice]:
        return iter(self._slices.values())

    def __len__(self) -> int:
        return len(self._slices)

    def __contains__(self, slice_id: int) -> bool:
        return slice_id in self._slices
