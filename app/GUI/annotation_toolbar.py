from controllers.annotation_controller import AnnotationController
from models.text_box import FONT_FAMILIES
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (QComboBox, QHBoxLayout, QLabel, QPushButton,
                             QVBoxLayout, QWidget)

ALIGNMENT_LABELS = {
    None: "Left",
    "left": "Left",
    "center": "Center",
    "right": "Right",
}


class AnnotationToolbar(QWidget):
    """Buttons for history, deletion and styling of the selected box.

    Button states are refreshed from the controller after every model event:
    style buttons are enabled only while a box is selected and are checked
    when the selected box has the attribute.
    """

    def __init__(self, controller: AnnotationController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.init_ui()
        controller.add_observer(lambda event, data: self.refresh())
        self.refresh()

    def init_ui(self):
        """Initialize the toolbar widgets"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)

        # History row
        history_row = QHBoxLayout()
        self.undo_button = QPushButton("Undo")
        self.undo_button.clicked.connect(self.controller.undo)
        history_row.addWidget(self.undo_button)

        self.redo_button = QPushButton("Redo")
        self.redo_button.clicked.connect(self.controller.redo)
        history_row.addWidget(self.redo_button)

        self.delete_button = QPushButton("Delete")
        self.delete_button.setStyleSheet("QPushButton { color: #c62828; }")
        self.delete_button.clicked.connect(self.controller.delete_selected)
        history_row.addWidget(self.delete_button)
        layout.addLayout(history_row)

        # Style row
        style_row = QHBoxLayout()
        self.font_combo = QComboBox()
        self.font_combo.addItems(FONT_FAMILIES)
        self.font_combo.textActivated.connect(self.controller.set_font_family)
        style_row.addWidget(self.font_combo)

        self.size_down_button = QPushButton("-")
        self.size_down_button.clicked.connect(lambda: self.controller.adjust_font_size(-1))
        style_row.addWidget(self.size_down_button)

        self.size_label = QLabel("")
        self.size_label.setMinimumWidth(24)
        style_row.addWidget(self.size_label)

        self.size_up_button = QPushButton("+")
        self.size_up_button.clicked.connect(lambda: self.controller.adjust_font_size(1))
        style_row.addWidget(self.size_up_button)

        self.bold_button = self._make_toggle("B", self.controller.toggle_bold)
        bold_font = QFont()
        bold_font.setBold(True)
        self.bold_button.setFont(bold_font)
        style_row.addWidget(self.bold_button)

        self.italic_button = self._make_toggle("I", self.controller.toggle_italic)
        italic_font = QFont()
        italic_font.setItalic(True)
        self.italic_button.setFont(italic_font)
        style_row.addWidget(self.italic_button)

        self.align_button = self._make_toggle("Left", self.controller.cycle_alignment)
        style_row.addWidget(self.align_button)

        self.underline_button = self._make_toggle("U", self.controller.toggle_underline)
        underline_font = QFont()
        underline_font.setUnderline(True)
        self.underline_button.setFont(underline_font)
        style_row.addWidget(self.underline_button)
        layout.addLayout(style_row)

        self.add_button = QPushButton("Add Text")
        self.add_button.clicked.connect(self.controller.add_box)
        layout.addWidget(self.add_button)

    def _make_toggle(self, label, slot):
        button = QPushButton(label)
        button.setCheckable(True)
        # Checked state mirrors the model, not the click
        button.clicked.connect(lambda _checked: slot())
        return button

    def refresh(self):
        """Sync enabled/checked states with the selected box."""
        box = self.controller.selected_box()
        has_box = box is not None

        self.undo_button.setEnabled(self.controller.can_undo())
        self.redo_button.setEnabled(self.controller.can_redo())
        self.delete_button.setEnabled(has_box)

        for widget in (self.font_combo, self.size_down_button, self.size_up_button,
                       self.bold_button, self.italic_button, self.align_button,
                       self.underline_button):
            widget.setEnabled(has_box)

        self.size_label.setText(str(box.font_size) if has_box else "")
        self.bold_button.setChecked(has_box and box.font_bold is not None)
        self.italic_button.setChecked(has_box and box.font_italic is not None)
        self.underline_button.setChecked(has_box and box.text_underline)
        self.align_button.setChecked(has_box and box.text_alignment is not None)
        self.align_button.setText(ALIGNMENT_LABELS.get(box.text_alignment if has_box else None, "Left"))

        if has_box:
            self.font_combo.blockSignals(True)
            index = self.font_combo.findText(box.font_family)
            self.font_combo.setCurrentIndex(index)
            self.font_combo.blockSignals(False)
