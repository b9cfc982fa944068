"""
Pure layout for the render pipeline.

Turns the box collection and the current selection into a list of paint
instructions. The Qt painter in ``GUI.surface_renderer`` draws exactly what
this module plans, so layout is testable without a display. Planning reads
boxes but never writes to them.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from .geometry import BOX_PADDING, MeasureFunc, derive_geometry
from .text_box import TextBox, TextStyle

UNDERLINE_GAP = 2
UNDERLINE_WIDTH_RATIO = 0.08


@dataclass(frozen=True)
class Underline:
    x1: float
    x2: float
    y: float
    line_width: float


@dataclass(frozen=True)
class BoxPaint:
    """Everything the painter needs to draw one box."""

    box_id: str
    rect: tuple[float, float, float, float]
    selected: bool
    font_descriptor: str
    style: TextStyle
    text: str
    anchor_x: float
    baseline_y: float
    align: str
    text_width: float = 0.0
    underline: Optional[Underline] = None


def text_anchor_x(x: float, width: float, alignment: Optional[str],
                  padding: float = BOX_PADDING) -> float:
    """Return the horizontal text anchor for a box at *x* of *width*."""
    if alignment == "center":
        return x + width / 2
    if alignment == "right":
        return x + width - padding
    return x + padding


def text_span(anchor_x: float, text_width: float,
              alignment: Optional[str]) -> tuple[float, float]:
    """Return (start, end) of a run of *text_width* placed at the anchor."""
    if alignment == "center":
        return (anchor_x - text_width / 2, anchor_x + text_width / 2)
    if alignment == "right":
        return (anchor_x - text_width, anchor_x)
    return (anchor_x, anchor_x + text_width)


def plan_box(box: TextBox, selected: bool, measure: MeasureFunc,
             padding: float = BOX_PADDING) -> BoxPaint:
    """Lay out a single box from its text and style."""
    style = box.style
    width, height = derive_geometry(box.text, style, measure, padding)
    text_width = measure(box.text, style).width
    align = box.text_alignment if box.text_alignment in ("center", "right") else "left"
    anchor_x = text_anchor_x(box.x, width, align, padding)
    baseline_y = box.y + padding + style.size

    underline = None
    if box.text_underline:
        x1, x2 = text_span(anchor_x, text_width, align)
        underline = Underline(
            x1=x1,
            x2=x2,
            y=baseline_y + UNDERLINE_GAP,
            line_width=max(1.0, style.size * UNDERLINE_WIDTH_RATIO),
        )

    return BoxPaint(
        box_id=box.id,
        rect=(box.x, box.y, width, height),
        selected=selected,
        font_descriptor=style.font_descriptor(),
        style=style,
        text=box.text,
        anchor_x=anchor_x,
        baseline_y=baseline_y,
        align=align,
        text_width=text_width,
        underline=underline,
    )


def plan_surface(boxes: Iterable[TextBox], selected_id: Optional[str],
                 measure: MeasureFunc, padding: float = BOX_PADDING) -> list[BoxPaint]:
    """Lay out every box in paint (insertion) order."""
    return [plan_box(box, box.id == selected_id, measure, padding) for box in boxes]
