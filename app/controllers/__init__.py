"""
Controllers for the text annotator.

This package contains Qt-free controller classes that orchestrate
operations between models and views using an observer pattern.
"""

from .annotation_controller import AnnotationController
from .interaction import (InteractionState, InteractionStateMachine,
                          is_double_activate)
from .undo_manager import HistoryEntry, UndoManager

__all__ = [
    "AnnotationController",
    "InteractionState",
    "InteractionStateMachine",
    "is_double_activate",
    "HistoryEntry",
    "UndoManager",
]
