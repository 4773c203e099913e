"""
Human-readable status stream for simulation ticks.
"""

import logging

logger = logging.getLogger(__name__)


class StatusReporter:
    """Formats per-tick summaries into log lines."""

    def __init__(self, log: logging.Logger = None):
        self.log = log or logger

    def tick_started(self, tick: int):
        self.log.info(f"=== Simulation Step {tick} ===")

    def report(self, summary):
        """Log connected count, percentage and per-class distribution."""
        self.log.info(f"Network Status: {summary.connected}/{summary.total_ues} UEs connected "
                      f"({summary.connection_rate * 100:.1f}%)")
        self.log.info("Slice Distribution:")
        for slice_type, count in summary.per_class.items():
            if count > 0:
                self.log.info(f"  {slice_type}: {count} UEs")
