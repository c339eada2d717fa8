"""Value types shared by the staggered grid layout engine and its hosts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from PySide6.QtCore import QRect, Qt

from lanegrid.utils.errors import LayoutConfigurationError


class Orientation(Enum):
    """Scroll (main) axis of the grid."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    @classmethod
    def coerce(cls, value) -> "Orientation":
        """Accept an Orientation, a Qt.Orientation or a settings string."""
        if isinstance(value, cls):
            return value
        if value == Qt.Orientation.Vertical:
            return cls.VERTICAL
        if value == Qt.Orientation.Horizontal:
            return cls.HORIZONTAL
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise LayoutConfigurationError(
            f"Unknown orientation: {value!r}", {"orientation": value})


class Flow(Enum):
    """Direction in which content is being revealed."""

    FORWARD = "forward"    # toward higher main-axis coordinates
    BACKWARD = "backward"  # toward lower main-axis coordinates

    def reversed(self) -> "Flow":
        return Flow.BACKWARD if self is Flow.FORWARD else Flow.FORWARD


@dataclass(frozen=True)
class ItemRect:
    """Placement rectangle; right/bottom are exclusive."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def main_start(self, orientation: Orientation) -> int:
        return self.top if orientation is Orientation.VERTICAL else self.left

    def main_end(self, orientation: Orientation) -> int:
        return self.bottom if orientation is Orientation.VERTICAL else self.right

    def translated(self, orientation: Orientation, delta: int) -> "ItemRect":
        """Move the rect along the main axis."""
        if orientation is Orientation.VERTICAL:
            return ItemRect(self.left, self.top + delta, self.right, self.bottom + delta)
        return ItemRect(self.left + delta, self.top, self.right + delta, self.bottom)

    def to_qrect(self) -> QRect:
        return QRect(self.left, self.top, self.width, self.height)


# Declared item size that should follow the measured content.
WRAP_CONTENT = -2


@dataclass(frozen=True)
class ItemLayoutParams:
    """Sizes an item declares before measurement (fixed or WRAP_CONTENT)."""

    width: int = WRAP_CONTENT
    height: int = WRAP_CONTENT


class MeasureMode(Enum):
    EXACTLY = "exactly"
    UNSPECIFIED = "unspecified"


@dataclass(frozen=True)
class MeasureSpec:
    mode: MeasureMode
    size: int = 0

    @classmethod
    def exactly(cls, size: int) -> "MeasureSpec":
        return cls(MeasureMode.EXACTLY, size)

    @classmethod
    def unspecified(cls) -> "MeasureSpec":
        return cls(MeasureMode.UNSPECIFIED, 0)
