"""Adapters connecting host test engines and logging to the translator."""

from teamcity_bdd.adapters.callbacks import CallbackAdapter
from teamcity_bdd.adapters.logging import TeamCityLogHandler

__all__ = [
    "CallbackAdapter",
    "TeamCityLogHandler",
]
