"""Tests for logging setup."""

from __future__ import annotations

import logging

import pytest
import pytest_mock

from outfit_engine.monitoring.logging import LOG_FORMAT, configure_logging


def test_configure_logging_uses_settings_level(
    monkeypatch: pytest.MonkeyPatch,
    mocker: pytest_mock.MockerFixture,
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    basic_config = mocker.patch("outfit_engine.monitoring.logging.logging.basicConfig")

    configure_logging()

    basic_config.assert_called_once_with(level=logging.WARNING, format=LOG_FORMAT)


def test_explicit_level_wins_and_unknown_falls_back(mocker: pytest_mock.MockerFixture) -> None:
    basic_config = mocker.patch("outfit_engine.monitoring.logging.logging.basicConfig")

    configure_logging("debug")
    configure_logging("chatty")

    assert [call.kwargs["level"] for call in basic_config.call_args_list] == [logging.DEBUG, logging.INFO]
