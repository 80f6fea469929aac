"""Domain types for the risk pipeline — units of input, findings, verdicts, alerts."""

from __future__ import annotations

import time
import uuid
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


# ── Severity & categories ───────────────────────────────────────


class Severity(StrEnum):
    """Finding severity — use ``severity_rank`` for ordering."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


_SEVERITY_RANK: dict[Severity, int] = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}


def severity_rank(severity: Severity) -> int:
    """Ordinal rank so that LOW < MEDIUM < HIGH < CRITICAL."""
    return _SEVERITY_RANK[severity]


class ThreatCategory(StrEnum):
    """Closed set of categories a detector may report."""

    FRAUD = "FRAUD"
    HARASSMENT = "HARASSMENT"
    BURNOUT = "BURNOUT"
    INFO_LEAKAGE = "INFORMATION_LEAKAGE"
    DISSATISFACTION = "DISSATISFACTION"
    ATTENDANCE_ANOMALY = "ATTENDANCE_ANOMALY"
    LEAVE_ANOMALY = "LEAVE_ANOMALY"
    PERFORMANCE_ANOMALY = "PERFORMANCE_ANOMALY"
    CUSTOM_RULE = "CUSTOM_RULE"


class FindingKind(StrEnum):
    """Whether a finding came from a threat detector or an anomaly rule."""

    THREAT = "THREAT"
    ANOMALY = "ANOMALY"


class ChannelKind(StrEnum):
    """Source channel of a communication."""

    EMAIL = "EMAIL"
    CHAT_DIRECT = "CHAT_DIRECT"
    CHAT_GROUP = "CHAT_GROUP"
    CHAT_CHANNEL = "CHAT_CHANNEL"


# ── Units of input ──────────────────────────────────────────────


class Communication(BaseModel):
    """An email or chat message, already deduplicated by ingestion."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    source_id: str = ""
    content: str
    locale: str | None = None
    channel_kind: ChannelKind = ChannelKind.EMAIL
    participants: tuple[str, ...] = ()
    context: dict[str, Any] = Field(default_factory=dict)


class MetricWindow(BaseModel):
    """Time window covered by a metric snapshot (epoch seconds)."""

    model_config = ConfigDict(frozen=True)

    start: float
    end: float


class MetricSnapshot(BaseModel):
    """Per-entity operational metrics (attendance, leave, performance)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    entity_id: str
    metrics: dict[str, float | int | str | bool] = Field(default_factory=dict)
    window: MetricWindow | None = None


Unit = Communication | MetricSnapshot


# ── Findings & verdicts ─────────────────────────────────────────


class Finding(BaseModel):
    """One detector's verdict on one unit of input for one category."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    unit_id: str = ""
    detector_id: str = ""
    category: ThreatCategory
    kind: FindingKind = FindingKind.THREAT
    severity: Severity
    confidence: float = Field(ge=0.0, le=1.0)
    title: str = ""
    description: str = ""
    evidence: tuple[str, ...] = ()
    affected_entity_ids: frozenset[str] = frozenset()
    locale: str = "en"
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: float = Field(default_factory=time.time)


class RiskTier(StrEnum):
    """Operational risk tier derived from accumulated risk points."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ComplianceGrade(StrEnum):
    """Letter grade used for compliance reporting."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class AggregationPolicy(StrEnum):
    """Named scoring formula used to turn findings into a score."""

    WEIGHTED_DEDUCTION = "weighted_deduction"
    NORMALIZED_AVERAGE = "normalized_average"


class RiskVerdict(BaseModel):
    """Aggregated score and tiers for one finding set — always recomputable."""

    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0.0, le=100.0)
    tier: RiskTier
    grade: ComplianceGrade
    policy: AggregationPolicy
    risk_points: float = 0.0
    contributing_findings: tuple[str, ...] = ()
    computed_at: float = 0.0


# ── Recommendations ─────────────────────────────────────────────


class RecommendationType(StrEnum):
    """Kind of remediation a recommendation proposes."""

    POLICY_UPDATE = "POLICY_UPDATE"
    TRAINING = "TRAINING"
    INVESTIGATION = "INVESTIGATION"
    SYSTEM_CONFIG = "SYSTEM_CONFIG"
    COMMUNICATION_GUIDELINE = "COMMUNICATION_GUIDELINE"


class Priority(StrEnum):
    """Recommendation priority."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


PRIORITY_RANK: dict[Priority, int] = {
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
    Priority.URGENT: 4,
}


class RecommendationStatus(StrEnum):
    """Workflow state of a recommendation."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class Recommendation(BaseModel):
    """Localized, prioritized action plan for one finding."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    finding_id: str
    category: ThreatCategory
    type: RecommendationType
    title: str
    description: str
    steps: list[str] = Field(default_factory=list)
    priority: Priority
    locale: str = "en"
    status: RecommendationStatus = RecommendationStatus.PENDING
    drafted: bool = False
    created_at: float = Field(default_factory=time.time)


# ── Notifications ───────────────────────────────────────────────


class Channel(StrEnum):
    """Notification delivery channel."""

    EMAIL = "EMAIL"
    PUSH = "PUSH"
    SMS = "SMS"
    IN_APP = "IN_APP"


class AlertKind(StrEnum):
    """Why a notification was raised."""

    THREAT_DETECTED = "THREAT_DETECTED"
    SEVERITY_CHANGE = "SEVERITY_CHANGE"
    RECOMMENDATION_AVAILABLE = "RECOMMENDATION_AVAILABLE"


class NotificationStatus(StrEnum):
    """Read state of a notification."""

    UNREAD = "UNREAD"
    READ = "READ"


class NotificationPolicy(BaseModel):
    """Per-recipient channel enablement and severity threshold."""

    recipient_id: str
    channels: dict[Channel, bool] = Field(default_factory=dict)
    minimum_severity: Severity = Severity.LOW

    def enabled_channels(self) -> list[Channel]:
        """Enabled channels in the canonical Channel order."""
        return [ch for ch in Channel if self.channels.get(ch, False)]


class Notification(BaseModel):
    """One delivered (or attempted) alert for one recipient on one channel."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    recipient_id: str
    finding_id: str
    channel: Channel
    kind: AlertKind = AlertKind.THREAT_DETECTED
    title: str
    message: str
    status: NotificationStatus = NotificationStatus.UNREAD
    delivered: bool = False
    created_at: float = Field(default_factory=time.time)
    read_at: float | None = None


# ── Pass results ────────────────────────────────────────────────


class PassWarning(BaseModel):
    """A recovered, component-level failure surfaced alongside results."""

    component: str
    source: str = ""
    message: str = ""
