"""Driving the translator from a callback-based engine.

Run it directly to print the service messages of a small feature with a
passing scenario, a failing scenario and an expanded outline:

    python examples/callback_engine.py
"""

import logging
import sys

from teamcity_bdd import CallbackAdapter, TeamCityLogHandler, TeamCityTranslator, TranslatorConfig
from teamcity_bdd.core.models import MatchedStep, OutlineTable, TableRow

logger = logging.getLogger("checkout")


def run_checkout_feature(callbacks: CallbackAdapter) -> None:
    """Report one feature the way an engine would while running it."""
    callbacks.feature_name("Checkout")

    callbacks.scenario_name("Scenario", "pays by card", "checkout.feature:3")
    callbacks.step_executed("Given", MatchedStep("a cart with 2 items", "checkout.feature:4"), "passed")
    logger.info("charging card")
    callbacks.step_executed("When", MatchedStep("the user pays", "checkout.feature:5"), "passed")

    callbacks.scenario_name("Scenario", "card is declined", "checkout.feature:7")
    step = callbacks.step_executed(
        "When", MatchedStep("the user pays", "checkout.feature:8"), "failed"
    )
    try:
        raise RuntimeError("card declined")
    except RuntimeError as exc:
        callbacks.exception(exc, "failed", step=step)

    callbacks.scenario_name("Scenario Outline", "applies discount", "checkout.feature:10")
    callbacks.before_outline_table(OutlineTable(headings=("total", "discount")))
    for row in ("| 100 | 10 |", "| 50 | 0 |"):
        callbacks.scenario_name("Scenario Outline", row, "checkout.feature:15")
        callbacks.after_table_row(TableRow(row, "checkout.feature:15"))


def main() -> None:
    translator = TeamCityTranslator(sys.stdout, TranslatorConfig(expand_outlines=True))
    handler = TeamCityLogHandler(translator)
    logging.basicConfig(level=logging.INFO, handlers=[handler])
    try:
        run_checkout_feature(CallbackAdapter(translator))
    finally:
        logging.getLogger().removeHandler(handler)
        translator.close()


if __name__ == "__main__":
    main()
