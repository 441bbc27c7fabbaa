"""Logging and metrics capabilities handed to a reconciliation pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import Logger, getLogger
from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsSink(Protocol):
    """Receives named numeric observations (durations, counts)."""

    def observe(self, name: str, value: float) -> None: ...


@dataclass(slots=True)
class LoggingMetricsSink:
    """Metrics sink that writes every observation to a logger."""

    logger: Logger = field(default_factory=lambda: getLogger("catalogsync.metrics"))

    def observe(self, name: str, value: float) -> None:
        self.logger.debug("metric %s=%s", name, value)


@dataclass(slots=True)
class ReconciliationContext:
    logger: Logger = field(default_factory=lambda: getLogger("catalogsync.reconcile"))
    metrics: MetricsSink = field(default_factory=LoggingMetricsSink)

    def observe(self, name: str, value: float) -> None:
        self.metrics.observe(name, value)
