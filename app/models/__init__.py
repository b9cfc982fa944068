"""
Pure Python data models for the text annotator.

This package contains Qt-free data classes for the annotation surface.
All models use only Python standard library types (no PyQt6 dependencies).
"""

from .annotation_model import AnnotationModel
from .editor_config import EditorConfig, load_config, save_config
from .geometry import (BOX_PADDING, apply_geometry, clamp_position,
                       contains_point, derive_geometry)
from .render_plan import BoxPaint, Underline, plan_box, plan_surface
from .text_box import (ALIGNMENT_CYCLE, DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE,
                       FONT_FAMILIES, MIN_FONT_SIZE, TextBox, TextExtent,
                       TextStyle, next_alignment)

__all__ = [
    "AnnotationModel",
    "EditorConfig",
    "load_config",
    "save_config",
    "BOX_PADDING",
    "apply_geometry",
    "clamp_position",
    "contains_point",
    "derive_geometry",
    "BoxPaint",
    "Underline",
    "plan_box",
    "plan_surface",
    "ALIGNMENT_CYCLE",
    "DEFAULT_FONT_FAMILY",
    "DEFAULT_FONT_SIZE",
    "FONT_FAMILIES",
    "MIN_FONT_SIZE",
    "TextBox",
    "TextExtent",
    "TextStyle",
    "next_alignment",
]
