"""Canonical, localized recommendation templates keyed by action type."""

from __future__ import annotations

from dataclasses import dataclass

from riskwatch.core.types import Priority, RecommendationType, ThreatCategory


@dataclass(frozen=True)
class RecommendationTemplate:
    """Static text for one action type in one locale."""

    title: str
    description: str
    steps: tuple[str, ...]
    default_priority: Priority = Priority.MEDIUM


TemplateTable = dict[str, dict[RecommendationType, RecommendationTemplate]]

# ── Category → action type ──────────────────────────────────────

CATEGORY_ACTIONS: dict[ThreatCategory, RecommendationType] = {
    ThreatCategory.FRAUD: RecommendationType.INVESTIGATION,
    ThreatCategory.HARASSMENT: RecommendationType.COMMUNICATION_GUIDELINE,
    ThreatCategory.BURNOUT: RecommendationType.POLICY_UPDATE,
    ThreatCategory.INFO_LEAKAGE: RecommendationType.SYSTEM_CONFIG,
    ThreatCategory.DISSATISFACTION: RecommendationType.TRAINING,
    ThreatCategory.ATTENDANCE_ANOMALY: RecommendationType.POLICY_UPDATE,
    ThreatCategory.LEAVE_ANOMALY: RecommendationType.INVESTIGATION,
    ThreatCategory.PERFORMANCE_ANOMALY: RecommendationType.TRAINING,
    ThreatCategory.CUSTOM_RULE: RecommendationType.INVESTIGATION,
}

# ── Localized text ──────────────────────────────────────────────

_EN: dict[RecommendationType, RecommendationTemplate] = {
    RecommendationType.POLICY_UPDATE: RecommendationTemplate(
        title="Policy Update Required",
        description="Update company policies to address the identified threat",
        steps=(
            "Review current policies related to the threat type",
            "Identify gaps or weaknesses in existing policies",
            "Draft updated policy language",
            "Review with legal and compliance teams",
            "Communicate changes to all employees",
            "Schedule training on updated policies",
        ),
    ),
    RecommendationType.TRAINING: RecommendationTemplate(
        title="Employee Training Required",
        description="Conduct training sessions to educate employees about the threat",
        steps=(
            "Develop training materials specific to the threat",
            "Identify employees who need training",
            "Schedule training sessions",
            "Conduct interactive training workshops",
            "Assess understanding through quizzes or scenarios",
            "Provide ongoing support and resources",
        ),
    ),
    RecommendationType.INVESTIGATION: RecommendationTemplate(
        title="Investigation Required",
        description="Conduct a thorough investigation into the incident",
        steps=(
            "Secure all relevant evidence and communications",
            "Identify all involved parties",
            "Conduct interviews with relevant individuals",
            "Document findings and timeline",
            "Determine root cause and contributing factors",
            "Develop action plan to prevent recurrence",
        ),
        default_priority=Priority.HIGH,
    ),
    RecommendationType.SYSTEM_CONFIG: RecommendationTemplate(
        title="System Configuration Update",
        description="Update system configurations to prevent similar threats",
        steps=(
            "Review current system settings and permissions",
            "Identify configuration vulnerabilities",
            "Implement necessary security controls",
            "Test configuration changes",
            "Monitor system for unusual activity",
            "Document configuration changes for audit purposes",
        ),
        default_priority=Priority.HIGH,
    ),
    RecommendationType.COMMUNICATION_GUIDELINE: RecommendationTemplate(
        title="Communication Guidelines Update",
        description="Update communication guidelines to promote positive interactions",
        steps=(
            "Review current communication policies",
            "Develop clear guidelines for appropriate communication",
            "Create examples of acceptable and unacceptable communication",
            "Train managers on enforcing guidelines",
            "Implement monitoring and reporting mechanisms",
            "Regularly review and update guidelines",
        ),
    ),
}

_ES: dict[RecommendationType, RecommendationTemplate] = {
    RecommendationType.POLICY_UPDATE: RecommendationTemplate(
        title="Actualización de Política Requerida",
        description=(
            "Actualice las políticas de la empresa para abordar la amenaza identificada"
        ),
        steps=(
            "Revisar políticas actuales relacionadas con el tipo de amenaza",
            "Identificar brechas o debilidades en las políticas existentes",
            "Redactar lenguaje de política actualizado",
            "Revisar con equipos legales y de cumplimiento",
            "Comunicar cambios a todos los empleados",
            "Programar capacitación sobre políticas actualizadas",
        ),
    ),
    RecommendationType.TRAINING: RecommendationTemplate(
        title="Capacitación de Empleados Requerida",
        description=(
            "Realizar sesiones de capacitación para educar a los empleados sobre la amenaza"
        ),
        steps=(
            "Desarrollar materiales de capacitación específicos para la amenaza",
            "Identificar empleados que necesitan capacitación",
            "Programar sesiones de capacitación",
            "Realizar talleres de capacitación interactivos",
            "Evaluar comprensión mediante cuestionarios o escenarios",
            "Proporcionar apoyo y recursos continuos",
        ),
    ),
}

_FR: dict[RecommendationType, RecommendationTemplate] = {
    RecommendationType.POLICY_UPDATE: RecommendationTemplate(
        title="Mise à Jour de la Politique Requise",
        description=(
            "Mettre à jour les politiques de l'entreprise pour traiter la menace identifiée"
        ),
        steps=(
            "Examiner les politiques actuelles liées au type de menace",
            "Identifier les lacunes ou faiblesses dans les politiques existantes",
            "Rédiger le langage de politique mis à jour",
            "Revoir avec les équipes juridiques et de conformité",
            "Communiquer les changements à tous les employés",
            "Planifier la formation sur les politiques mises à jour",
        ),
    ),
}

DEFAULT_TEMPLATES: TemplateTable = {
    "en": _EN,
    "es": _ES,
    "fr": _FR,
}
