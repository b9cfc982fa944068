"""
Shared test fixtures for the text annotator test suite.

Core fixtures build pure-Python model objects (no Qt dependencies). Text is
measured with a deterministic fake so geometry assertions are exact.
"""

import os
import sys
from pathlib import Path

# Ensure app/ is on sys.path so bare imports (models, controllers, GUI)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

# Qt widget tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from controllers.annotation_controller import AnnotationController
from models.editor_config import EditorConfig
from models.text_box import TextExtent

CHAR_WIDTH_RATIO = 0.5
BOLD_RATIO = 1.2


def fake_measure(text, style):
    """Each character is half the font size wide; bold is 20% wider."""
    width = len(text) * style.size * CHAR_WIDTH_RATIO
    if style.bold:
        width *= BOLD_RATIO
    return TextExtent(width=width, height=float(style.size))


class ManualClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start=1000.0):
        self.now = start

    def advance(self, ms):
        self.now += ms
        return self.now

    def __call__(self):
        return self.now


@pytest.fixture
def measure():
    return fake_measure


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def controller(clock):
    """An AnnotationController on the default 300x480 surface."""
    return AnnotationController(fake_measure, config=EditorConfig(), clock=clock)


def add_text_box(controller, text, position=None):
    """Create a box through the add/edit flow and optionally move it.

    Returns the committed box (live instance).
    """
    controller.add_box()
    box_id = controller.editing_id
    controller.interaction.finish_editing(text)
    box = controller.model.get_box(box_id)
    if position is not None:
        controller.move_box(box_id, *position)
        controller.commit("Move box")
    return box


@pytest.fixture
def hello_box(controller):
    """A committed box reading 'Hello' at the default position."""
    return add_text_box(controller, "Hello")
