"""Main window composing the annotation surface, toolbar and menus."""

import logging

from controllers.annotation_controller import AnnotationController
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QMainWindow, QVBoxLayout, QWidget

from .annotation_canvas import AnnotationCanvas
from .annotation_toolbar import AnnotationToolbar
from .keybindings import MENU_ORDER, KeybindingsRegistry
from .surface_renderer import SurfaceRenderer

logger = logging.getLogger(__name__)

MENU_TITLES = {"file": "&File", "edit": "&Edit", "format": "F&ormat"}


class MainWindow(QMainWindow):
    """Top-level window for the text annotator."""

    def __init__(self, controller: AnnotationController, renderer: SurfaceRenderer = None,
                 keybindings: KeybindingsRegistry = None):
        super().__init__()
        self.setWindowTitle("Text Annotator")
        self.controller = controller
        self.keybindings = keybindings or KeybindingsRegistry()

        central = QWidget()
        layout = QVBoxLayout(central)
        self.toolbar = AnnotationToolbar(controller)
        layout.addWidget(self.toolbar)
        self.canvas = AnnotationCanvas(controller, renderer)
        layout.addWidget(self.canvas, alignment=Qt.AlignmentFlag.AlignHCenter)
        self.setCentralWidget(central)

        self.create_menu_bar()
        controller.add_observer(self._on_model_event)
        self._update_status()

    def create_menu_bar(self):
        """Create File, Edit and Format menus with configurable shortcuts"""
        menubar = self.menuBar()
        if menubar is None:
            return
        kb = self.keybindings
        self.actions_by_name = {}

        def add(menu, action_name, label, slot, flush=True):
            action = QAction(label, self)
            action.setShortcut(kb.get(action_name))
            action.setToolTip(kb.label(action_name))
            action.triggered.connect(lambda _checked=False: self._run_action(slot, flush))
            menu.addAction(action)
            self.actions_by_name[action_name] = action
            return action

        menus = {name: menubar.addMenu(MENU_TITLES[name]) for name in MENU_ORDER}

        add(menus["file"], "file.exit", "E&xit", self.close)

        add(menus["edit"], "edit.undo", "&Undo", self.controller.undo, flush=False)
        add(menus["edit"], "edit.redo", "&Redo", self.controller.redo, flush=False)
        menus["edit"].addSeparator()
        add(menus["edit"], "edit.add_text", "&Add Text", self.controller.add_box)
        add(menus["edit"], "edit.delete", "&Delete", self.controller.delete_selected)

        add(menus["format"], "format.bold", "&Bold", self.controller.toggle_bold)
        add(menus["format"], "format.italic", "&Italic", self.controller.toggle_italic)
        add(menus["format"], "format.underline", "&Underline", self.controller.toggle_underline)
        add(menus["format"], "format.align", "Cycle &Alignment", self.controller.cycle_alignment)
        menus["format"].addSeparator()
        add(menus["format"], "format.font_bigger", "&Larger Text",
            lambda: self.controller.adjust_font_size(1))
        add(menus["format"], "format.font_smaller", "&Smaller Text",
            lambda: self.controller.adjust_font_size(-1))

        conflicts = kb.get_conflicts()
        for shortcut, actions in conflicts:
            logger.warning("Shortcut %s bound to several actions: %s", shortcut, ", ".join(actions))

    def _run_action(self, slot, flush):
        # Undo and redo discard an open edit instead of committing it
        if flush:
            self.canvas.commit_editor()
        slot()

    def _on_model_event(self, event, data):
        if event in ("history_changed", "selection_changed"):
            self._update_status()

    def _update_status(self):
        has_box = self.controller.selected_id is not None
        for name in ["edit.delete"] + self.keybindings.actions_for_menu("format"):
            self.actions_by_name[name].setEnabled(has_box)
        self.actions_by_name["edit.undo"].setEnabled(self.controller.can_undo())
        self.actions_by_name["edit.redo"].setEnabled(self.controller.can_redo())

        parts = []
        undo_desc = self.controller.get_undo_description()
        if undo_desc:
            parts.append(f"Undo: {undo_desc}")
        redo_desc = self.controller.get_redo_description()
        if redo_desc:
            parts.append(f"Redo: {redo_desc}")
        self.statusBar().showMessage("   ".join(parts))
