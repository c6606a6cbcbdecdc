"""Core translation engine: models, ports and components."""

from teamcity_bdd.core.escaping import escape, unescape
from teamcity_bdd.core.models import (
    ExceptionRaised,
    FeatureNamed,
    LifecycleEvent,
    MatchedStep,
    OutlineTable,
    OutlineTableStarted,
    ScenarioNamed,
    Severity,
    StepExecuted,
    TableRow,
    TableRowExecuted,
    TranslatorConfig,
)
from teamcity_bdd.core.ports import BoundaryListener, LifecycleListener, WritableStream
from teamcity_bdd.core.translator import TeamCityTranslator

__all__ = [
    "BoundaryListener",
    "ExceptionRaised",
    "FeatureNamed",
    "LifecycleEvent",
    "LifecycleListener",
    "MatchedStep",
    "OutlineTable",
    "OutlineTableStarted",
    "ScenarioNamed",
    "Severity",
    "StepExecuted",
    "TableRow",
    "TableRowExecuted",
    "TeamCityTranslator",
    "TranslatorConfig",
    "WritableStream",
    "escape",
    "unescape",
]
