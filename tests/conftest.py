"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any import of admission.core.config so
the global settings object is built with test values.
"""

import os
from unittest.mock import Mock

import pytest

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("ADMISSION_CLIENT_IDS", "client-a,client-b")
os.environ.setdefault("ADMISSION_CAPACITY", "3")
os.environ.setdefault("ADMISSION_WINDOW_MILLIS", "60000")
os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture
def clock() -> Mock:
    """Controllable millisecond clock starting at t=0."""
    return Mock(return_value=0.0)
