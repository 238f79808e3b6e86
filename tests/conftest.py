import sys
import os

import pytest

# Make the project root importable without installing
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from portal_e2e.models import Settings
from portal_e2e.profile import load_profile
from tests.fakes import FakePage


@pytest.fixture
def profile():
    return load_profile()


@pytest.fixture
def settings(tmp_path):
    """Settings with timings shrunk so failing polls end quickly."""
    return Settings(
        base_url="https://portal.example",
        admin_user="admin@portal.example",
        admin_pass="current-secret",
        admin_pass_new=None,
        artifacts_dir=tmp_path / "artifacts",
        signal_timeout=0.2,
        signal_poll_interval=0.01,
        poll_interval=0.01,
        field_timeout=0.05,
    )


@pytest.fixture
def page():
    return FakePage()
