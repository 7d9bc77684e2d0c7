import os
import sys
from pathlib import Path

import pytest

# Make 'src' importable without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from delve.config import GenerationSettings  # noqa: E402


@pytest.fixture
def small_settings() -> GenerationSettings:
    """Settings for a quick 40x30 level."""
    return GenerationSettings(width=40, height=30, growth_attempts=150)


@pytest.fixture(autouse=True)
def _clear_delve_env(monkeypatch):
    # Keep developer DELVE_* variables from leaking into settings tests
    for key in list(os.environ):
        if key.startswith("DELVE_"):
            monkeypatch.delenv(key, raising=False)
