"""
InteractionStateMachine - Pointer and keyboard gestures on the surface.

This module contains no Qt dependencies. Views forward raw pointer and key
events here; the state machine resolves hit testing and select / drag / edit
transitions and drives the AnnotationController, which owns all mutation and
history commits.

States:
    IDLE      - nothing selected
    SELECTED  - a box is selected, no gesture in progress
    DRAGGING  - a box follows the pointer until release
    EDITING   - a box's text is open in the view's editor
"""

import logging
import time
from enum import Enum, auto
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DOUBLE_ACTIVATE_MS = 300.0


class InteractionState(Enum):
    IDLE = auto()
    SELECTED = auto()
    DRAGGING = auto()
    EDITING = auto()


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def is_double_activate(now: float, last_click_time: Optional[float],
                       threshold_ms: float = DOUBLE_ACTIVATE_MS) -> bool:
    """Return whether a click at *now* completes a double activation."""
    if last_click_time is None:
        return False
    return 0 <= now - last_click_time < threshold_ms


class InteractionStateMachine:
    """
    Gesture state for a single surface.

    SELECTED and IDLE are derived from the controller's selection, so an
    undo that removes the selected box drops back to IDLE on its own.
    DRAGGING and EDITING are gestures tracked here.
    """

    def __init__(self, controller, threshold_ms: float = DOUBLE_ACTIVATE_MS,
                 clock: Optional[Callable[[], float]] = None):
        self.controller = controller
        self.threshold_ms = threshold_ms
        self._clock = clock or monotonic_ms

        self._gesture: Optional[InteractionState] = None
        self.active_id: Optional[str] = None
        self.grab_offset: tuple[float, float] = (0.0, 0.0)
        self._drag_origin: Optional[tuple[float, float]] = None

        self.last_click_id: Optional[str] = None
        self.last_click_time: Optional[float] = None

    @property
    def state(self) -> InteractionState:
        if self._gesture is not None:
            return self._gesture
        if self.controller.selected_id is not None:
            return InteractionState.SELECTED
        return InteractionState.IDLE

    @property
    def editing_id(self) -> Optional[str]:
        if self._gesture is InteractionState.EDITING:
            return self.active_id
        return None

    @property
    def dragging_id(self) -> Optional[str]:
        if self._gesture is InteractionState.DRAGGING:
            return self.active_id
        return None

    def _set_gesture(self, gesture: Optional[InteractionState],
                     box_id: Optional[str] = None) -> None:
        logger.debug("Interaction %s -> %s (%s)", self.state.name,
                     gesture.name if gesture else "none", box_id)
        self._gesture = gesture
        self.active_id = box_id
        if gesture is not InteractionState.DRAGGING:
            self._drag_origin = None

    # --- Pointer events ---

    def pointer_down(self, x: float, y: float) -> Optional[str]:
        """
        Start a new gesture at (x, y).

        Any open edit session is closed with the box's stored text, and an
        unfinished drag is reverted without a history entry. Returns the id
        of the box that was hit, or None (which clears the selection).
        """
        if self._gesture is InteractionState.EDITING:
            self.finish_editing()
        elif self._gesture is InteractionState.DRAGGING:
            logger.debug("Abandoning drag of %s without release", self.active_id)
            self.cancel_drag()

        box = self.controller.model.box_at(x, y)
        if box is None:
            self.controller.select(None)
            return None

        self.controller.select(box.id)
        self._set_gesture(InteractionState.DRAGGING, box.id)
        self.grab_offset = (x - box.x, y - box.y)
        self._drag_origin = box.position
        return box.id

    def pointer_move(self, x: float, y: float) -> bool:
        """Follow the pointer while dragging. Returns False when not dragging."""
        if self._gesture is not InteractionState.DRAGGING:
            return False
        dx, dy = self.grab_offset
        self.controller.move_box(self.active_id, x - dx, y - dy)
        return True

    def pointer_up(self, x: float, y: float) -> bool:
        """
        Finish a drag.

        Commits one history entry if the box ended somewhere other than
        where the gesture started. Returns whether the box moved.
        """
        if self._gesture is not InteractionState.DRAGGING:
            return False
        box = self.controller.model.get_box(self.active_id)
        moved = box is not None and box.position != self._drag_origin
        self._set_gesture(None)
        if moved:
            self.controller.commit("Move box")
        return moved

    def cancel_drag(self) -> bool:
        """Return the dragged box to its start position without committing."""
        if self._gesture is not InteractionState.DRAGGING:
            return False
        box_id, origin = self.active_id, self._drag_origin
        self._set_gesture(None)
        if origin is not None:
            self.controller.move_box(box_id, *origin)
        return True

    def click(self, x: float, y: float, now: Optional[float] = None) -> bool:
        """
        Handle a click (press and release without movement).

        A second click on the selected box within the threshold opens it for
        editing. Any other click on a box selects it and restarts the timing.
        Returns whether editing began.
        """
        if self._gesture is not None:
            return False
        if now is None:
            now = self._clock()

        box = self.controller.model.box_at(x, y)
        if box is None:
            return False

        if (box.id == self.controller.selected_id
                and box.id == self.last_click_id
                and is_double_activate(now, self.last_click_time, self.threshold_ms)):
            self.last_click_id = None
            self.last_click_time = None
            return self.begin_editing(box.id)

        self.controller.select(box.id)
        self.last_click_id = box.id
        self.last_click_time = now
        return False

    # --- Keyboard events ---

    def key_press(self, key: str) -> bool:
        """Handle a key by name ("Delete", "Escape"). Returns whether it was used."""
        if key == "Delete":
            if self._gesture is None and self.controller.selected_id is not None:
                self.controller.delete_selected()
                return True
            return False
        if key == "Escape":
            if self._gesture is InteractionState.DRAGGING:
                return self.cancel_drag()
            if self._gesture is InteractionState.EDITING:
                self.finish_editing()
                return True
        return False

    # --- Edit sessions ---

    def begin_editing(self, box_id: str) -> bool:
        """Open *box_id* for editing. Returns False if the box does not exist."""
        if self._gesture is InteractionState.EDITING:
            if self.active_id == box_id:
                return True
            self.finish_editing()
        elif self._gesture is InteractionState.DRAGGING:
            self.cancel_drag()

        box = self.controller.model.get_box(box_id)
        if box is None:
            return False

        self.controller.select(box_id)
        self._set_gesture(InteractionState.EDITING, box_id)
        self.controller._notify('edit_started', box.copy())
        return True

    def finish_editing(self, text: Optional[str] = None) -> bool:
        """
        Close the edit session with *text*.

        ``None`` keeps the box's stored text, which removes a box that was
        added but never typed into. Returns False if no session was open.
        """
        if self._gesture is not InteractionState.EDITING:
            return False
        box_id = self.active_id
        self._set_gesture(None)
        self.controller.apply_edit(box_id, text)
        return True

    def reset(self) -> None:
        """Drop any gesture in progress without touching the boxes."""
        editing_id = self.editing_id
        self._set_gesture(None)
        self.last_click_id = None
        self.last_click_time = None
        if editing_id is not None:
            self.controller._notify('edit_finished', editing_id)
