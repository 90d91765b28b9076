from __future__ import annotations

from dataclasses import dataclass

from jalali_picker.ui.picker.state import PickerMode

GAP = 8
MARGIN = 16
MIN_WIDTH = 300
DAY_GRID_HEIGHT = 400
YEAR_PICKER_HEIGHT = 500


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Placement:
    top: float
    left: float
    width: float
    max_height: float


def popup_height(mode: PickerMode) -> int:
    if mode is PickerMode.YEAR_PICKER:
        return YEAR_PICKER_HEIGHT
    return DAY_GRID_HEIGHT


def compute_placement(
    anchor: Rect,
    viewport: Size,
    mode: PickerMode,
    min_width: float = MIN_WIDTH,
) -> Placement:
    """Place the popup below the anchor, flipping and clamping to the viewport.

    Coordinates are relative to the viewport's top-left corner.
    """
    height = popup_height(mode)
    width = max(anchor.width, min_width)

    if anchor.bottom + height > viewport.height:
        top = max(anchor.top - height - GAP, MARGIN)
        available = anchor.top - GAP - top
    else:
        top = anchor.bottom + GAP
        available = viewport.height - top - MARGIN

    left = anchor.left
    if left + width > viewport.width:
        left = viewport.width - width - MARGIN
    if left < MARGIN:
        left = MARGIN

    return Placement(
        top=top,
        left=left,
        width=width,
        max_height=max(min(height, available), 0),
    )
