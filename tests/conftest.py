"""Shared fixtures for the particle field tests."""

from __future__ import annotations

import os

# pygame must never open a real window under test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from particlefield.canvas import RecordingCanvas
from particlefield.field import Field
from particlefield.theme import Theme


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so failures are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def canvas() -> RecordingCanvas:
    return RecordingCanvas(800, 600)


@pytest.fixture
def field(canvas: RecordingCanvas, rng: np.random.Generator) -> Field:
    """An 800x600 dark field drawing onto a recording canvas."""
    return Field(800, 600, theme=Theme.DARK, canvas=canvas, rng=rng)
