from typing import Dict, Any
from collections import defaultdict
from datetime import datetime
import logging


class MetricsCollector:
    # Per-run counters for the adapter pipeline

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.reset()

    def reset(self) -> None:
        self.startTime = datetime.utcnow()

        self.events_read = 0
        self.events_normalized = 0
        self.events_sent = 0
        self.events_rejected = 0
        self.send_failures = 0

        self.rejections_by_field = defaultdict(int)

    def recordEventRead(self) -> None:
        self.events_read += 1

    def recordEventNormalized(self) -> None:
        self.events_normalized += 1

    def recordEventSent(self) -> None:
        self.events_sent += 1

    def recordEventRejected(self, field: str) -> None:
        self.events_rejected += 1
        self.rejections_by_field[field or 'unknown'] += 1

    def recordSendFailure(self) -> None:
        self.send_failures += 1

    def getMetrics(self) -> Dict[str, Any]:
        runtimeSeconds = (datetime.utcnow() - self.startTime).total_seconds()

        return {
            'runtimeSeconds': runtimeSeconds,
            'events': {
                'read': self.events_read,
                'normalized': self.events_normalized,
                'sent': self.events_sent,
                'rejected': self.events_rejected,
            },
            'rejections_by_field': dict(self.rejections_by_field),
            'send_failures': self.send_failures,
        }

    def logMetrics(self) -> None:
        metrics = self.getMetrics()

        self.logger.info("=== Adapter Run Metrics ===")
        self.logger.info(f"Runtime: {metrics['runtimeSeconds']:.2f} seconds")
        self.logger.info(f"Events read: {metrics['events']['read']}")
        self.logger.info(f"Events normalized: {metrics['events']['normalized']}")
        self.logger.info(f"Events sent: {metrics['events']['sent']}")

        if metrics['events']['rejected']:
            self.logger.warning(
                f"Events rejected: {metrics['events']['rejected']} {metrics['rejections_by_field']}"
            )
        if metrics['send_failures']:
            self.logger.warning(f"Send failures: {metrics['send_failures']}")
