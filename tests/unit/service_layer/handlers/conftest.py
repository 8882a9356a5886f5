"""Pytest fixtures for service layer handler unit tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from emporium.bootstrap import AppContainer

from .fakes import bootstrap_test_app

# pylint: disable=redefined-outer-name


@pytest.fixture
def app_params():
    """Default wiring parameters. Classes can override this fixture"""
    return {}


@pytest.fixture
def make_test_app(app_params) -> Callable[..., AppContainer]:
    """Factory to create an in-memory application for testing."""

    def _make():
        return bootstrap_test_app(**app_params)

    return _make
