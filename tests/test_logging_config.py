"""Tests for logging setup."""

import logging

import pytest

from component_checker.logging_config import resolve_level, setup_logging


def test_verbose_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COMPONENT_CHECKER_LOG_LEVEL", "ERROR")

    assert resolve_level(verbose=True) == logging.DEBUG


def test_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COMPONENT_CHECKER_LOG_LEVEL", " info ")

    assert resolve_level() == logging.INFO


@pytest.mark.parametrize("value", ["", "chatty"])
def test_unknown_level_falls_back_to_warning(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("COMPONENT_CHECKER_LOG_LEVEL", value)

    assert resolve_level() == logging.WARNING


def test_quiet_loggers_capped_at_warning() -> None:
    setup_logging(level=logging.DEBUG, quiet=["component_checker.tests.noisy"])

    assert logging.getLogger("component_checker.tests.noisy").level == logging.WARNING
