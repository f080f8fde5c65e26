"""Tests for the application factory."""

import importlib
import logging

import pytest

import trading_quiz.app
from trading_quiz.core.config import load_settings


def test_import_does_not_build_an_app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.delenv("JWT_SECRET", raising=False)

    module = importlib.reload(trading_quiz.app)

    assert not hasattr(module, "app")
    assert callable(module.create_app)
    with pytest.raises(RuntimeError):
        load_settings()


def test_request_log_is_quiet_at_info(client, caplog):
    caplog.set_level(logging.INFO, logger="trading_quiz.app")

    client.get("/health")

    lines = [r.getMessage() for r in caplog.records if r.name == "trading_quiz.app"]
    assert not any("/health" in line for line in lines)


def test_request_log_at_debug(client, caplog):
    caplog.set_level(logging.DEBUG, logger="trading_quiz.app")

    client.get("/health")

    lines = [r.getMessage() for r in caplog.records if r.name == "trading_quiz.app"]
    assert any(line.startswith("GET /health 200") for line in lines)
