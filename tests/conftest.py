import os
import random
import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    """Ensure `src/` is on sys.path so tests can import `forest_fire.*`.

    This repo uses the common `src/` layout but is not necessarily installed as a package
    in the active environment. Pygame and matplotlib are pointed at headless backends.
    """

    project_root = Path(__file__).resolve().parents[1]
    src_dir = project_root / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))

    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    os.environ.setdefault("MPLBACKEND", "Agg")


class ScriptedRandom:
    """Random source returning pre-scripted ``randrange`` picks.

    ``random()`` always returns ``value`` so density checks are deterministic.
    """

    def __init__(self, picks=(), value=0.0):
        self._picks = list(picks)
        self.value = value

    def randrange(self, *args):
        if not self._picks:
            raise AssertionError(f"unexpected randrange{args}")
        return self._picks.pop(0)

    def random(self):
        return self.value

    @property
    def exhausted(self) -> bool:
        return not self._picks


@pytest.fixture
def scripted_rng():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def sample_grid_size():
    """Provide a standard grid size for tests."""
    return (10, 10)
