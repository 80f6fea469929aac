"""RecommendationGenerator — one localized, prioritized action plan per finding."""

from __future__ import annotations

import structlog

from riskwatch.classifier.exceptions import ClassifierError
from riskwatch.core.types import (
    Finding,
    PassWarning,
    Priority,
    Recommendation,
    RecommendationType,
    Severity,
    ThreatCategory,
)
from riskwatch.recommend.drafter import RecommendationDrafter
from riskwatch.recommend.exceptions import UnknownCategoryError
from riskwatch.recommend.templates import (
    CATEGORY_ACTIONS,
    DEFAULT_TEMPLATES,
    RecommendationTemplate,
    TemplateTable,
)

logger = structlog.stdlib.get_logger()

SEVERITY_PRIORITY: dict[Severity, Priority] = {
    Severity.CRITICAL: Priority.URGENT,
    Severity.HIGH: Priority.HIGH,
    Severity.MEDIUM: Priority.MEDIUM,
    Severity.LOW: Priority.LOW,
}


class RecommendationGenerator:
    """Selects a template by finding category and localizes it.

    The category → action and action → default-locale template tables are
    checked for completeness at construction, so a missing template raises
    ``UnknownCategoryError`` when the generator is built rather than when a
    finding arrives.

    Usage::

        generator = RecommendationGenerator(default_locale="en")
        rec = await generator.generate(finding)
    """

    def __init__(
        self,
        templates: TemplateTable | None = None,
        category_actions: dict[ThreatCategory, RecommendationType] | None = None,
        default_locale: str = "en",
        drafter: RecommendationDrafter | None = None,
    ) -> None:
        self._templates = templates if templates is not None else DEFAULT_TEMPLATES
        self._actions = (
            category_actions if category_actions is not None else CATEGORY_ACTIONS
        )
        self._default_locale = default_locale
        self._drafter = drafter
        self._validate()

    @property
    def default_locale(self) -> str:
        return self._default_locale

    def _validate(self) -> None:
        missing = [c.value for c in ThreatCategory if c not in self._actions]
        if missing:
            raise UnknownCategoryError(
                f"No recommendation action for categories: {', '.join(missing)}"
            )
        defaults = self._templates.get(self._default_locale)
        if defaults is None:
            raise UnknownCategoryError(
                f"No templates for default locale {self._default_locale!r}"
            )
        absent = sorted(
            {a.value for a in self._actions.values() if a not in defaults}
        )
        if absent:
            raise UnknownCategoryError(
                f"Default locale {self._default_locale!r} lacks templates for:"
                f" {', '.join(absent)}"
            )

    def action_for(self, category: ThreatCategory) -> RecommendationType:
        """Action type a category maps to."""
        try:
            return self._actions[category]
        except KeyError as exc:
            raise UnknownCategoryError(f"No template for category {category!r}") from exc

    def resolve_template(
        self,
        category: ThreatCategory,
        locale: str | None = None,
    ) -> tuple[RecommendationTemplate, str]:
        """Template for (category, locale), falling back to the default locale.

        Returns the template and the locale it was actually taken from.
        """
        action = self.action_for(category)
        requested = locale or self._default_locale
        localized = self._templates.get(requested, {}).get(action)
        if localized is not None:
            return localized, requested
        logger.debug(
            "recommendation_locale_fallback",
            category=category.value,
            requested=requested,
            fallback=self._default_locale,
        )
        return self._templates[self._default_locale][action], self._default_locale

    async def generate(
        self,
        finding: Finding,
        locale: str | None = None,
        warnings: list[PassWarning] | None = None,
    ) -> Recommendation:
        """Build a PENDING recommendation for *finding*.

        Drafter failures fall back to the static template text and are
        appended to *warnings* when given.
        """
        template, resolved_locale = self.resolve_template(
            finding.category, locale or finding.locale
        )
        description = template.description
        steps = list(template.steps)
        drafted = False

        if self._drafter is not None:
            try:
                draft = await self._drafter.draft(finding, template, resolved_locale)
                description = draft.description
                steps = list(draft.steps)
                drafted = True
            except ClassifierError as exc:
                logger.warning(
                    "recommendation_draft_failed",
                    finding_id=finding.id,
                    error=str(exc),
                )
                if warnings is not None:
                    warnings.append(PassWarning(
                        component="recommendation_generator",
                        source=finding.id,
                        message=f"{type(exc).__name__}: {exc}",
                    ))

        return Recommendation(
            finding_id=finding.id,
            category=finding.category,
            type=self.action_for(finding.category),
            title=template.title,
            description=description,
            steps=steps,
            priority=SEVERITY_PRIORITY.get(finding.severity, template.default_priority),
            locale=resolved_locale,
            drafted=drafted,
        )
