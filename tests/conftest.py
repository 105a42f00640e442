"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For shared builders and mock collaborators, see tests/mocks/.
"""

import pytest

from core.config_loader import AppConfig, ScoringConfig
from tests.mocks.business_mocks import make_business


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def scoring_config():
    return ScoringConfig()


@pytest.fixture
def app_config():
    return AppConfig()


@pytest.fixture
def business_factory():
    """Build BusinessRecords with sensible defaults; override any field by keyword."""
    return make_business
