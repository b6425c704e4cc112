import pytest

from harvest.config import load_settings


@pytest.fixture
def settings():
    """Settings built from an empty environment (all defaults)."""
    return load_settings({})
