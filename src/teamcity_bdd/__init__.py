"""TeamCity service message reporting for BDD test runs."""

from teamcity_bdd.adapters.callbacks import CallbackAdapter
from teamcity_bdd.adapters.logging import TeamCityLogHandler
from teamcity_bdd.core.models import TranslatorConfig
from teamcity_bdd.core.translator import TeamCityTranslator

__all__ = [
    "CallbackAdapter",
    "TeamCityLogHandler",
    "TeamCityTranslator",
    "TranslatorConfig",
]
