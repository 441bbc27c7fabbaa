"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ProcessingStage(StrEnum):
    """How far downstream processing of a package has progressed.

    Reconciliation only ever assigns ``RECONCILIATION``; later stages belong to the
    ingestion and analysis jobs.
    """

    RECONCILIATION = "reconciliation"
    INGESTION = "ingestion"
    ANALYSIS = "analysis"
