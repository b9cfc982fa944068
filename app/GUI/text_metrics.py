"""Qt-backed text measurement shared by layout and painting.

Fonts are composed in exactly one place (``font_for_style``) and measured
against a process-wide offscreen surface, so the box sizes the controller
stores match what ``SurfaceRenderer`` draws.
"""

import logging
import sys
from typing import NamedTuple, Optional

from models.text_box import TextExtent, TextStyle
from PyQt6.QtGui import QFont, QFontMetricsF, QGuiApplication, QImage

logger = logging.getLogger(__name__)

# Generic CSS family names mapped onto Qt style hints
_STYLE_HINTS = {
    "sans": QFont.StyleHint.SansSerif,
    "sans-serif": QFont.StyleHint.SansSerif,
    "serif": QFont.StyleHint.Serif,
    "monospace": QFont.StyleHint.Monospace,
    "cursive": QFont.StyleHint.Cursive,
    "fantasy": QFont.StyleHint.Fantasy,
}


class GlyphMetrics(NamedTuple):
    ascent: float
    descent: float


def font_for_style(style: TextStyle) -> QFont:
    """Build the QFont used for both measuring and drawing *style*."""
    font = QFont(style.family)
    font.setStyleHint(_STYLE_HINTS.get(style.family.lower(), QFont.StyleHint.SansSerif))
    font.setPixelSize(max(style.size, 1))
    font.setBold(style.bold)
    font.setItalic(style.italic)
    return font


class QtTextMetrics:
    """Measures strings with the Qt font engine.

    The measurement surface is created lazily by :meth:`ensure_ready` and
    lives for the rest of the process.
    """

    def __init__(self):
        self._surface: Optional[QImage] = None
        self._app: Optional[QGuiApplication] = None

    def ensure_ready(self) -> QImage:
        """Return the shared measurement surface, creating it on first use."""
        if self._surface is None:
            if QGuiApplication.instance() is None:
                logger.info("Creating QGuiApplication for text measurement")
                self._app = QGuiApplication(sys.argv[:1])
            self._surface = QImage(1, 1, QImage.Format.Format_ARGB32_Premultiplied)
        return self._surface

    def _metrics(self, style: TextStyle) -> QFontMetricsF:
        return QFontMetricsF(font_for_style(style), self.ensure_ready())

    def measure(self, text: str, style: TextStyle) -> TextExtent:
        """Return the advance width of *text* and the font size as height."""
        width = self._metrics(style).horizontalAdvance(text)
        return TextExtent(width=width, height=float(style.size))

    def glyph_metrics(self, style: TextStyle) -> GlyphMetrics:
        metrics = self._metrics(style)
        return GlyphMetrics(
            ascent=metrics.ascent(),
            descent=metrics.descent(),
        )

    __call__ = measure


_default_metrics: Optional[QtTextMetrics] = None


def default_metrics() -> QtTextMetrics:
    """Return the process-wide metrics provider."""
    global _default_metrics
    if _default_metrics is None:
        _default_metrics = QtTextMetrics()
    return _default_metrics


def measure_text(text: str, style: TextStyle) -> TextExtent:
    return default_metrics().measure(text, style)
