"""riskwatch — communication and metric risk detection, scoring and alerting."""

from riskwatch.pipeline import AnalysisPipeline, PassResult

__all__ = [
    "AnalysisPipeline",
    "PassResult",
]
