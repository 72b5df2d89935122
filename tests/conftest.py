import pytest

from affirm import RecordingReporter
from affirm.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings so environment overrides in one test do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()
