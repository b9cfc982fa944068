from .annotation_canvas import AnnotationCanvas
from .annotation_toolbar import AnnotationToolbar
from .keybindings import KeybindingsRegistry
from .main_window import MainWindow
from .surface_renderer import SurfaceRenderer
from .text_metrics import QtTextMetrics, default_metrics, font_for_style, measure_text

__all__ = [
    'AnnotationCanvas',
    'AnnotationToolbar',
    'KeybindingsRegistry',
    'MainWindow',
    'SurfaceRenderer',
    'QtTextMetrics',
    'default_metrics',
    'font_for_style',
    'measure_text',
]
