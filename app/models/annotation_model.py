"""
AnnotationModel - Central data store for the annotation surface.

This module contains no Qt dependencies. It holds the ordered collection of
text boxes and answers hit-test queries against it.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .editor_config import DEFAULT_SURFACE_HEIGHT, DEFAULT_SURFACE_WIDTH
from .geometry import contains_point
from .text_box import TextBox


@dataclass
class AnnotationModel:
    """
    Ordered collection of text boxes on a fixed-size surface.

    Insertion order is paint order: the last box is painted last and is the
    first candidate in hit testing.
    """

    boxes: list[TextBox] = field(default_factory=list)
    surface_width: float = DEFAULT_SURFACE_WIDTH
    surface_height: float = DEFAULT_SURFACE_HEIGHT

    def __len__(self) -> int:
        return len(self.boxes)

    def add_box(self, box: TextBox) -> None:
        """Append a box on top of the paint order."""
        self.boxes.append(box)

    def remove_box(self, box_id: str) -> bool:
        """Remove a box by id. Returns False if no such box exists."""
        index = self.index_of(box_id)
        if index is None:
            return False
        del self.boxes[index]
        return True

    def get_box(self, box_id: Optional[str]) -> Optional[TextBox]:
        if box_id is None:
            return None
        for box in self.boxes:
            if box.id == box_id:
                return box
        return None

    def index_of(self, box_id: str) -> Optional[int]:
        for i, box in enumerate(self.boxes):
            if box.id == box_id:
                return i
        return None

    def box_at(self, x: float, y: float) -> Optional[TextBox]:
        """Return the topmost box containing (x, y), or None."""
        for box in reversed(self.boxes):
            if contains_point(box, x, y):
                return box
        return None

    def snapshot(self) -> tuple[TextBox, ...]:
        """Return value copies of every box, in order."""
        return tuple(box.copy() for box in self.boxes)

    def restore(self, boxes: Iterable[TextBox]) -> None:
        """Replace the live collection with copies of *boxes*."""
        self.boxes = [box.copy() for box in boxes]

    def clear(self) -> None:
        self.boxes.clear()
