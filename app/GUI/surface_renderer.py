"""Full-redraw painter for the annotation surface.

Every paint clears the surface and draws all boxes in insertion order from
``models.render_plan``. The renderer reads boxes and never writes to them.
"""

from typing import Iterable, Optional

from models.geometry import BOX_PADDING
from models.render_plan import BoxPaint, plan_surface, text_span
from models.text_box import TextBox
from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QColor, QImage, QPainter, QPen

from .text_metrics import QtTextMetrics, default_metrics, font_for_style

SURFACE_COLOR = QColor("#ffffff")
BOX_COLOR = QColor("#ffffff")
TEXT_COLOR = QColor("#000000")
OUTLINE_COLOR = QColor("#000000")
OUTLINE_DASH = [5.0, 5.0]


class SurfaceRenderer:
    """Paints a box collection and its selection onto a QPainter."""

    def __init__(self, metrics: Optional[QtTextMetrics] = None,
                 padding: float = BOX_PADDING):
        self.metrics = metrics or default_metrics()
        self.padding = padding

    def plan(self, boxes: Iterable[TextBox], selected_id: Optional[str]) -> list[BoxPaint]:
        return plan_surface(boxes, selected_id, self.metrics.measure, self.padding)

    def paint(self, painter: QPainter, boxes: Iterable[TextBox],
              selected_id: Optional[str], width: float, height: float) -> None:
        """Clear the surface and draw every box."""
        painter.save()
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        painter.fillRect(QRectF(0, 0, width, height), SURFACE_COLOR)
        for box_paint in self.plan(boxes, selected_id):
            self._paint_box(painter, box_paint)
        painter.restore()

    def _paint_box(self, painter: QPainter, box_paint: BoxPaint) -> None:
        rect = QRectF(*box_paint.rect)
        painter.fillRect(rect, BOX_COLOR)

        if box_paint.selected:
            pen = QPen(OUTLINE_COLOR, 1)
            pen.setDashPattern(OUTLINE_DASH)
            painter.setPen(pen)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRect(rect)

        painter.setFont(font_for_style(box_paint.style))
        painter.setPen(QPen(TEXT_COLOR))
        left, _ = text_span(box_paint.anchor_x, box_paint.text_width, box_paint.align)
        painter.drawText(QPointF(left, box_paint.baseline_y), box_paint.text)

        underline = box_paint.underline
        if underline is not None:
            pen = QPen(TEXT_COLOR, underline.line_width)
            pen.setStyle(Qt.PenStyle.SolidLine)
            painter.setPen(pen)
            painter.drawLine(QPointF(underline.x1, underline.y),
                             QPointF(underline.x2, underline.y))

    def render_image(self, boxes: Iterable[TextBox], selected_id: Optional[str],
                     width: int, height: int) -> QImage:
        """Render the surface into a new image of the given size."""
        self.metrics.ensure_ready()
        image = QImage(int(width), int(height), QImage.Format.Format_ARGB32)
        image.fill(SURFACE_COLOR)
        painter = QPainter(image)
        try:
            self.paint(painter, boxes, selected_id, width, height)
        finally:
            painter.end()
        return image
