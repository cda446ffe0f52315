"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


class RecordingDpg:
    """Stands in for the dearpygui module and records every draw call."""

    def __init__(self):
        self.calls = []

    def get_text_size(self, text, **kwargs):
        return None

    def __getattr__(self, name):
        def record(*args, **kwargs):
            self.calls.append((name, args, kwargs))
        return record

    def named(self, name):
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def fake_dpg(monkeypatch):
    """Route renderer drawing into a recorder instead of a live context."""
    import renderer
    fake = RecordingDpg()
    monkeypatch.setattr(renderer, "dpg", fake)
    return fake


@pytest.fixture
def canvas(fake_dpg):
    from renderer import Renderer
    return Renderer("test_canvas", 1000, 700)
