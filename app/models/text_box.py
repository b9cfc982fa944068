"""Data classes for the floating text boxes placed on the surface."""

import itertools
import time
from dataclasses import dataclass
from typing import NamedTuple, Optional

# Font families offered by the toolbar. The core applies any family name
# verbatim; this list only feeds the UI.
FONT_FAMILIES = [
    "Arial",
    "Verdana",
    "Courier New",
    "Georgia",
    "Times New Roman",
    "Trebuchet MS",
    "Comic Sans MS",
    "Tahoma",
    "Impact",
    "Lucida Console",
    "Palatino",
    "Arial Black",
    "Helvetica",
    "cursive",
]

DEFAULT_FONT_FAMILY = "sans"
DEFAULT_FONT_SIZE = 12
MIN_FONT_SIZE = 1

# None means "unset" and lays out like "left"
ALIGNMENT_CYCLE = (None, "left", "center", "right")

_id_counter = itertools.count(1)


def new_box_id() -> str:
    """Return a unique, creation-ordered box identifier."""
    return f"{int(time.time() * 1000)}-{next(_id_counter)}"


class TextExtent(NamedTuple):
    width: float
    height: float


@dataclass(frozen=True)
class TextStyle:
    """The font attributes that affect how a box's text is measured."""

    family: str = DEFAULT_FONT_FAMILY
    size: int = DEFAULT_FONT_SIZE
    bold: bool = False
    italic: bool = False

    def font_descriptor(self) -> str:
        """Return a CSS-like font string, e.g. ``"bold 12px Arial, sans-serif"``."""
        parts = []
        if self.bold:
            parts.append("bold")
        if self.italic:
            parts.append("italic")
        parts.append(f"{self.size}px")
        parts.append(f"{self.family}, sans-serif")
        return " ".join(parts)


@dataclass
class TextBox:
    """A single text annotation on the surface.

    ``width`` and ``height`` are derived from the text and style and must be
    refreshed through :func:`models.geometry.apply_geometry` whenever either
    changes. ``font_bold`` and ``font_italic`` are presence attributes: the
    style applies when they hold ``"bold"`` / ``"italic"`` and is off when
    they are ``None``.
    """

    id: str = ""
    text: str = ""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    font_size: int = DEFAULT_FONT_SIZE
    font_family: str = DEFAULT_FONT_FAMILY
    font_bold: Optional[str] = None
    font_italic: Optional[str] = None
    text_alignment: Optional[str] = None
    text_underline: bool = False

    def __post_init__(self):
        if not self.id:
            self.id = new_box_id()

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def style(self) -> TextStyle:
        return TextStyle(
            family=self.font_family,
            size=self.font_size,
            bold=self.font_bold is not None,
            italic=self.font_italic is not None,
        )

    def copy(self) -> "TextBox":
        """Return an independent value copy of this box."""
        return TextBox.from_dict(self.to_dict())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "font_size": self.font_size,
            "font_family": self.font_family,
            "font_bold": self.font_bold,
            "font_italic": self.font_italic,
            "text_alignment": self.text_alignment,
            "text_underline": self.text_underline,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TextBox":
        return cls(
            id=data.get("id", ""),
            text=data.get("text", ""),
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
            width=data.get("width", 0.0),
            height=data.get("height", 0.0),
            font_size=data.get("font_size", DEFAULT_FONT_SIZE),
            font_family=data.get("font_family", DEFAULT_FONT_FAMILY),
            font_bold=data.get("font_bold"),
            font_italic=data.get("font_italic"),
            text_alignment=data.get("text_alignment"),
            text_underline=data.get("text_underline", False),
        )


def next_alignment(current: Optional[str]) -> Optional[str]:
    """Return the alignment that follows *current* in the toolbar cycle."""
    try:
        index = ALIGNMENT_CYCLE.index(current)
    except ValueError:
        index = 0
    return ALIGNMENT_CYCLE[(index + 1) % len(ALIGNMENT_CYCLE)]
