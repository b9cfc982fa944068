"""
AnnotationController - Orchestrates text box operations and history.

This module contains no Qt dependencies. It manages the AnnotationModel,
records snapshots in the UndoManager and notifies views of changes through
an observer pattern. Text measurement is injected as a callable so geometry
always comes from the same font engine the view paints with.
"""

import logging
from typing import Any, Callable, Optional

from models.annotation_model import AnnotationModel
from models.editor_config import EditorConfig
from models.geometry import MeasureFunc, apply_geometry, clamp_position
from models.text_box import TextBox, next_alignment

from .interaction import InteractionStateMachine
from .undo_manager import UndoManager

logger = logging.getLogger(__name__)


class AnnotationController:
    """
    Controller for text box operations.

    Manages the AnnotationModel and notifies registered observers when
    the model changes. Views register callbacks to stay in sync.

    Operations that act on the selection (delete and every style change)
    do nothing when no box is selected. Each returns a snapshot copy of the
    selected box after the change, or None.

    Observer events:
        box_added (TextBox) - A new box was created
        box_removed (str) - A box was removed (by ID)
        box_updated (TextBox) - A box's text or style changed
        box_moved (TextBox) - A box's position changed
        selection_changed (Optional[str]) - The selected box ID changed
        edit_started (TextBox) - A box was opened for text editing
        edit_finished (str) - The edit session for a box ended
        boxes_restored (None) - Undo/redo replaced the whole collection
        history_changed (None) - The undo history changed
    """

    def __init__(self, measure: MeasureFunc,
                 model: Optional[AnnotationModel] = None,
                 config: Optional[EditorConfig] = None,
                 clock: Optional[Callable[[], float]] = None):
        self.config = config or EditorConfig()
        self.model = model or AnnotationModel(
            surface_width=self.config.surface_width,
            surface_height=self.config.surface_height,
        )
        self.measure = measure
        self.selected_id: Optional[str] = None
        self.undo_manager = UndoManager(self.config.history_max_depth, self.model.boxes)
        self.interaction = InteractionStateMachine(
            self, self.config.double_activate_ms, clock
        )
        self._observers: list[Callable[[str, Any], None]] = []

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for model change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a model change."""
        for observer in self._observers:
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError) as e:
                logger.error("Error notifying observer: %s", e)

    # --- Read-only state ---

    @property
    def boxes(self) -> list[TextBox]:
        return self.model.boxes

    @property
    def surface_size(self) -> tuple[float, float]:
        return (self.model.surface_width, self.model.surface_height)

    @property
    def editing_id(self) -> Optional[str]:
        return self.interaction.editing_id

    @property
    def history_length(self) -> int:
        return len(self.undo_manager)

    @property
    def history_index(self) -> int:
        return self.undo_manager.index

    def selected_box(self) -> Optional[TextBox]:
        """Return a copy of the selected box, or None."""
        box = self.model.get_box(self.selected_id)
        return box.copy() if box is not None else None

    # --- Primitives used by the interaction state machine ---

    def select(self, box_id: Optional[str]) -> None:
        """Change the selection. Unknown IDs clear it."""
        if box_id is not None and self.model.get_box(box_id) is None:
            box_id = None
        if box_id == self.selected_id:
            return
        self.selected_id = box_id
        self._notify('selection_changed', box_id)

    def move_box(self, box_id: Optional[str], x: float, y: float) -> Optional[TextBox]:
        """Move a box, clamped to the surface. History is not touched."""
        box = self.model.get_box(box_id)
        if box is None:
            return None
        position = clamp_position(x, y, box.width, box.height,
                                  self.model.surface_width, self.model.surface_height)
        if position != (box.x, box.y):
            box.x, box.y = position
            self._notify('box_moved', box)
        return box

    def commit(self, description: str) -> None:
        """Record the live collection as one history entry."""
        self.undo_manager.commit(self.model.boxes, description)
        self._notify('history_changed', None)

    def apply_edit(self, box_id: str, text: Optional[str]) -> None:
        """
        Store the result of an edit session.

        Blank text removes the box. The removal is committed only if the box
        is part of the last committed state, so an abandoned new box leaves
        no trace in history.
        """
        box = self.model.get_box(box_id)
        if box is None:
            self._notify('edit_finished', box_id)
            return
        if text is None:
            text = box.text

        if not text.strip():
            committed = any(b.id == box_id for b in self.undo_manager.current().boxes)
            self._remove_box(box_id)
            if committed:
                self.commit("Delete box")
        else:
            box.text = text.strip()
            self._refresh_geometry(box)
            self._notify('box_updated', box)
            self.commit("Edit text")
        self._notify('edit_finished', box_id)

    def _remove_box(self, box_id: str) -> None:
        if self.model.remove_box(box_id):
            self._notify('box_removed', box_id)
        if self.selected_id == box_id:
            self.select(None)

    def _refresh_geometry(self, box: TextBox) -> None:
        apply_geometry(box, self.measure, self.config.box_padding)
        box.x, box.y = clamp_position(box.x, box.y, box.width, box.height,
                                      self.model.surface_width, self.model.surface_height)

    # --- Operations for toolbars and menus ---

    def add_box(self) -> Optional[TextBox]:
        """
        Create an empty box at the default position and open it for editing.

        The box reaches history only once its edit session ends with text.
        """
        if self.interaction.editing_id is not None:
            self.interaction.finish_editing()

        x, y = self.config.default_position
        box = TextBox(
            text="",
            x=x,
            y=y,
            width=0.0,
            height=0.0,
            font_size=self.config.default_font_size,
            font_family=self.config.default_font_family,
        )
        self.model.add_box(box)
        self._notify('box_added', box)
        self.interaction.begin_editing(box.id)
        return self.selected_box()

    def delete_selected(self) -> Optional[TextBox]:
        """Remove the selected box and commit the removal."""
        box_id = self.selected_id
        if box_id is None or self.model.get_box(box_id) is None:
            return None
        if self.interaction.editing_id == box_id:
            # Blank edit removes the box, committing only if it was in history
            self.interaction.finish_editing("")
            return None
        self._remove_box(box_id)
        self.commit("Delete box")
        return None

    def undo(self) -> Optional[TextBox]:
        """Restore the previous history entry."""
        return self._restore(self.undo_manager.undo())

    def redo(self) -> Optional[TextBox]:
        """Restore the next history entry."""
        return self._restore(self.undo_manager.redo())

    def _restore(self, boxes: Optional[tuple[TextBox, ...]]) -> Optional[TextBox]:
        if boxes is None:
            return self.selected_box()
        self.interaction.reset()
        self.model.restore(boxes)
        if self.model.get_box(self.selected_id) is None:
            self.select(None)
        self._notify('boxes_restored', None)
        self._notify('history_changed', None)
        return self.selected_box()

    def _update_selected(self, description: str,
                         change: Callable[[TextBox], bool]) -> Optional[TextBox]:
        """Apply *change* to the selected box and commit it as one entry."""
        if self.interaction.editing_id is not None:
            self.interaction.finish_editing()
        box = self.model.get_box(self.selected_id)
        if box is None:
            return None
        if not change(box):
            return box.copy()
        self._refresh_geometry(box)
        self._notify('box_updated', box)
        self.commit(description)
        return box.copy()

    def set_font_family(self, family: str) -> Optional[TextBox]:
        """Apply *family* verbatim to the selected box."""
        def change(box):
            box.font_family = family
            return True
        return self._update_selected("Change font", change)

    def adjust_font_size(self, delta: int) -> Optional[TextBox]:
        """Step the selected box's font size, never below the configured floor."""
        def change(box):
            size = max(self.config.min_font_size, box.font_size + delta)
            if size == box.font_size:
                return False
            box.font_size = size
            return True
        return self._update_selected("Change font size", change)

    def toggle_bold(self) -> Optional[TextBox]:
        def change(box):
            box.font_bold = None if box.font_bold else "bold"
            return True
        return self._update_selected("Toggle bold", change)

    def toggle_italic(self) -> Optional[TextBox]:
        def change(box):
            box.font_italic = None if box.font_italic else "italic"
            return True
        return self._update_selected("Toggle italic", change)

    def cycle_alignment(self) -> Optional[TextBox]:
        """Advance alignment through unset, left, center, right."""
        def change(box):
            box.text_alignment = next_alignment(box.text_alignment)
            return True
        return self._update_selected("Change alignment", change)

    def toggle_underline(self) -> Optional[TextBox]:
        def change(box):
            box.text_underline = not box.text_underline
            return True
        return self._update_selected("Toggle underline", change)

    def can_undo(self) -> bool:
        return self.undo_manager.can_undo()

    def can_redo(self) -> bool:
        return self.undo_manager.can_redo()

    def get_undo_description(self) -> Optional[str]:
        return self.undo_manager.get_undo_description()

    def get_redo_description(self) -> Optional[str]:
        return self.undo_manager.get_redo_description()
