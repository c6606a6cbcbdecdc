"""pytest entry point for TeamCity service messages.

The reporter is enabled with --teamcity, or automatically when the run
happens inside a TeamCity build (TEAMCITY_VERSION is set).
"""

import os

import pytest

from teamcity_bdd.adapters.pytest_bdd import PytestBddReporter, TerminalStream
from teamcity_bdd.core.models import TranslatorConfig
from teamcity_bdd.core.translator import TeamCityTranslator

TEAMCITY_ENV_VAR = "TEAMCITY_VERSION"
REPORTER_NAME = "teamcity-bdd-reporter"

reporter_key = pytest.StashKey[PytestBddReporter]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("teamcity", "TeamCity service messages")
    group.addoption(
        "--teamcity",
        action="store_true",
        dest="teamcity",
        default=False,
        help=f"report pytest-bdd scenarios as TeamCity service messages "
        f"(implied when {TEAMCITY_ENV_VAR} is set)",
    )
    group.addoption(
        "--teamcity-expand-outlines",
        action="store_true",
        dest="teamcity_expand_outlines",
        default=None,
        help="report outline rows as part of their scenario instead of as tests",
    )
    group.addoption(
        "--teamcity-capture-log",
        action="store_true",
        dest="teamcity_capture_log",
        default=None,
        help="include log records in the output of the running scenario",
    )
    parser.addini(
        "teamcity_expand_outlines",
        type="bool",
        default=False,
        help="report outline rows as part of their scenario instead of as tests",
    )
    parser.addini(
        "teamcity_capture_log",
        type="bool",
        default=False,
        help="include log records in the output of the running scenario",
    )


def _flag(config: pytest.Config, name: str) -> bool:
    """Read a boolean option, letting the command line override the ini file."""
    value = config.getoption(name)
    if value is None:
        return bool(config.getini(name))
    return bool(value)


def is_enabled(config: pytest.Config) -> bool:
    """Return True if the reporter should run for this session."""
    return bool(config.getoption("teamcity")) or bool(os.environ.get(TEAMCITY_ENV_VAR))


@pytest.hookimpl(trylast=True)
def pytest_configure(config: pytest.Config) -> None:
    if not is_enabled(config):
        return
    expand_outlines = _flag(config, "teamcity_expand_outlines")
    stream = TerminalStream(
        config.pluginmanager.getplugin("capturemanager"),
        config.pluginmanager.getplugin("terminalreporter"),
    )
    translator = TeamCityTranslator(
        stream, TranslatorConfig(expand_outlines=expand_outlines)
    )
    reporter = PytestBddReporter(
        translator,
        expand_outlines=expand_outlines,
        capture_log=_flag(config, "teamcity_capture_log"),
    )
    config.stash[reporter_key] = reporter
    config.pluginmanager.register(reporter, REPORTER_NAME)


def pytest_unconfigure(config: pytest.Config) -> None:
    reporter = config.stash.get(reporter_key, None)
    if reporter is None:
        return
    del config.stash[reporter_key]
    reporter.close()
    config.pluginmanager.unregister(reporter)
