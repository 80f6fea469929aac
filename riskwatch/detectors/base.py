"""Abstract detector — one unit of input in, at most one Finding out."""

from __future__ import annotations

import abc

from riskwatch.core.types import Finding, ThreatCategory, Unit


class Detector(abc.ABC):
    """Base class for detectors registered in a DetectorBank.

    Subclasses must be pure with respect to the unit: they never read the
    output of another detector.
    """

    def __init__(self, detector_id: str, category: ThreatCategory) -> None:
        self._detector_id = detector_id
        self._category = category

    @property
    def detector_id(self) -> str:
        return self._detector_id

    @property
    def category(self) -> ThreatCategory:
        return self._category

    @abc.abstractmethod
    def supports(self, unit: Unit) -> bool:
        """Whether this detector knows how to classify *unit*."""

    @abc.abstractmethod
    async def classify(self, unit: Unit) -> Finding | None:
        """Return a Finding, or None when nothing was detected."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._detector_id!r})"
