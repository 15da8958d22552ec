"""Counters tracking outbound AWS API calls made by a service controller."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field

from ackruntime.errors import http_status_code


class CounterVec:
    """A monotonically increasing counter partitioned by a fixed set of labels."""

    def __init__(self, name: str, help: str, label_names: list[str]) -> None:
        self.name = name
        self.help = help
        self.label_names = tuple(label_names)
        self._counts: dict[tuple[str, ...], int] = {}
        self._lock = threading.Lock()

    def _key(self, labels: Mapping[str, str]) -> tuple[str, ...]:
        if set(labels) != set(self.label_names):
            raise ValueError(
                f"inconsistent label names for {self.name}: "
                f"expected {sorted(self.label_names)}, got {sorted(labels)}"
            )
        return tuple(str(labels[name]) for name in self.label_names)

    def inc(self, labels: Mapping[str, str]) -> None:
        """Increment the counter for the given label values by one."""
        key = self._key(labels)
        with self._lock:
            self._counts[key] = self._counts.get(key, 0) + 1

    def value(self, labels: Mapping[str, str]) -> int:
        """Return the current count for the given label values."""
        key = self._key(labels)
        with self._lock:
            return self._counts.get(key, 0)

    def samples(self) -> dict[tuple[str, ...], int]:
        """Return a snapshot of all counts, keyed by label values in label order."""
        with self._lock:
            return dict(self._counts)


OUTBOUND_API_REQUESTS_TOTAL = CounterVec(
    "ack_outbound_api_requests_total",
    "Total number of outbound AWS API requests made by the controller.",
    ["service", "op_type", "op_id"],
)
OUTBOUND_API_REQUESTS_ERROR_TOTAL = CounterVec(
    "ack_outbound_api_requests_error_total",
    "Total number of outbound AWS API requests made by the controller that "
    "resulted in a 4XX or 5XX HTTP status code.",
    ["service", "op_id", "status_code"],
)


@dataclass
class Metrics:
    """Metric collectors for one AWS service controller."""

    service_id: str
    api_requests_total: CounterVec = field(default=OUTBOUND_API_REQUESTS_TOTAL)
    api_requests_error_total: CounterVec = field(default=OUTBOUND_API_REQUESTS_ERROR_TOTAL)

    def record_api_call(
        self, op_type: str, op_id: str, err: BaseException | None = None
    ) -> None:
        """Count an outbound API call, and its failure if ``err`` is given."""
        self.api_requests_total.inc(
            {"service": self.service_id, "op_type": op_type, "op_id": op_id}
        )
        if err is not None:
            self.api_requests_error_total.inc(
                {
                    "service": self.service_id,
                    "op_id": op_id,
                    "status_code": str(http_status_code(err)),
                }
            )

    def collectors(self) -> list[CounterVec]:
        """Return the underlying counters, for registration with an exporter."""
        return [self.api_requests_total, self.api_requests_error_total]