"""
Geometry helpers for text boxes.

This module contains no Qt dependencies. Text measurement is supplied by the
caller as a ``measure(text, style) -> TextExtent`` callable so the same
derivation runs against the Qt font engine in the application and against a
deterministic fake in tests.
"""

from typing import Callable

from .text_box import TextBox, TextExtent, TextStyle

BOX_PADDING = 10

MeasureFunc = Callable[[str, TextStyle], TextExtent]


def derive_geometry(text: str, style: TextStyle, measure: MeasureFunc,
                    padding: float = BOX_PADDING) -> TextExtent:
    """
    Return the box size for *text* rendered in *style*.

    The size is the measured text extent plus *padding* on every side. The
    height depends on the font size only, not on glyph ascent/descent.
    """
    extent = measure(text, style)
    return TextExtent(
        width=extent.width + 2 * padding,
        height=style.size + 2 * padding,
    )


def apply_geometry(box: TextBox, measure: MeasureFunc,
                   padding: float = BOX_PADDING) -> TextBox:
    """Recompute and store ``box.width`` / ``box.height``. Returns *box*."""
    box.width, box.height = derive_geometry(box.text, box.style, measure, padding)
    return box


def contains_point(box: TextBox, x: float, y: float) -> bool:
    """Return whether (x, y) lies inside the box bounds (edges included)."""
    return (box.x <= x <= box.x + box.width
            and box.y <= y <= box.y + box.height)


def clamp_position(x: float, y: float, width: float, height: float,
                   surface_width: float, surface_height: float) -> tuple[float, float]:
    """
    Clamp a top-left position so a box of the given size stays on the surface.

    Each axis is limited to ``[0, surface_dim - box_dim]``. A box larger than
    the surface is pinned to 0 on that axis.
    """
    max_x = max(0.0, surface_width - width)
    max_y = max(0.0, surface_height - height)
    return (min(max(x, 0.0), max_x), min(max(y, 0.0), max_y))
