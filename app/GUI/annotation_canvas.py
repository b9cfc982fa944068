"""Fixed-size drawing surface that forwards input to the interaction state machine."""

import logging

from controllers.annotation_controller import AnnotationController
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QLineEdit, QWidget

from .surface_renderer import SurfaceRenderer
from .text_metrics import font_for_style

logger = logging.getLogger(__name__)

MIN_EDITOR_WIDTH = 96

# Qt keys the state machine understands, by name
_KEY_NAMES = {
    Qt.Key.Key_Delete: "Delete",
    Qt.Key.Key_Escape: "Escape",
}


class AnnotationCanvas(QWidget):
    """Surface widget for placing, dragging and editing text boxes.

    The widget owns no state of its own beyond the inline editor: it repaints
    from the controller on every model event and forwards pointer and key
    events to ``controller.interaction``.
    """

    def __init__(self, controller: AnnotationController, renderer=None, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.renderer = renderer or SurfaceRenderer(padding=controller.config.box_padding)

        width, height = controller.surface_size
        self.setFixedSize(int(width), int(height))
        self.setFocusPolicy(Qt.FocusPolicy.ClickFocus)
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent)

        self._grabbing = False
        self._editing_box_id = None
        self.editor = QLineEdit(self)
        self.editor.setObjectName("boxEditor")
        self.editor.hide()
        self.editor.editingFinished.connect(self.commit_editor)

        controller.add_observer(self._on_model_event)

    # -- Model events ----------------------------------------------------------

    def _on_model_event(self, event, data):
        if event == "edit_started":
            self._open_editor(data)
        elif event == "edit_finished":
            self._close_editor()
        self.update()

    def _open_editor(self, box):
        self._editing_box_id = box.id
        metrics = self.renderer.metrics.glyph_metrics(box.style)
        padding = self.controller.config.box_padding
        self.editor.setFont(font_for_style(box.style))
        self.editor.setText(box.text)
        self.editor.move(int(box.x), int(box.y))
        self.editor.resize(
            int(max(MIN_EDITOR_WIDTH, box.width)),
            int(metrics.ascent + metrics.descent + padding),
        )
        self.editor.show()
        self.editor.setFocus()
        self.editor.selectAll()

    def commit_editor(self):
        """Hand the editor's text to the state machine (on blur or Return)."""
        box_id = self._editing_box_id
        if box_id is None:
            return
        self._editing_box_id = None
        text = self.editor.text()
        self.editor.hide()
        if self.controller.editing_id == box_id:
            self.controller.interaction.finish_editing(text)

    def _close_editor(self):
        self._editing_box_id = None
        if self.editor.isVisible():
            self.editor.hide()

    # -- Painting --------------------------------------------------------------

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            self.renderer.paint(painter, self.controller.boxes,
                                self.controller.selected_id, self.width(), self.height())
        finally:
            painter.end()

    # -- Pointer and keyboard --------------------------------------------------

    def mousePressEvent(self, event):
        if event is None or event.button() != Qt.MouseButton.LeftButton:
            return
        self.commit_editor()
        pos = event.position()
        hit = self.controller.interaction.pointer_down(pos.x(), pos.y())
        if hit is not None and not self._grabbing:
            # Releases outside the surface must still end the drag
            self.grabMouse()
            self._grabbing = True
        self.setFocus()

    def mouseMoveEvent(self, event):
        if event is None:
            return
        pos = event.position()
        self.controller.interaction.pointer_move(pos.x(), pos.y())

    def mouseReleaseEvent(self, event):
        if event is None or event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        was_dragging = self.controller.interaction.dragging_id is not None
        moved = self.controller.interaction.pointer_up(pos.x(), pos.y())
        if self._grabbing:
            self.releaseMouse()
            self._grabbing = False
        if was_dragging and not moved:
            self.controller.interaction.click(pos.x(), pos.y())

    def keyPressEvent(self, event):
        key_name = _KEY_NAMES.get(event.key())
        if key_name and self.controller.interaction.key_press(key_name):
            event.accept()
            return
        super().keyPressEvent(event)
