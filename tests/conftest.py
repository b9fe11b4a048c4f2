"""
Pytest configuration and shared fixtures for procline tests.
"""

from __future__ import annotations

import pytest

import procline


@pytest.fixture
def runner():
    """Async runner with default options."""
    return procline.Runner()


@pytest.fixture
def sync_runner():
    """Started SyncRunner, stopped after the test."""
    rt = procline.SyncRunner().start()
    yield rt
    rt.stop()
