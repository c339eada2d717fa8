"""Incremental, bidirectional staggered (masonry) grid layout engine."""

from __future__ import annotations

from PySide6.QtCore import QMargins, QSize

from lanegrid.utils.errors import LayoutConfigurationError, MeasurementError
from lanegrid.utils.flow_log import log_flow, reset_throttle
from lanegrid.utils.settings import get_lane_count, get_orientation
from lanegrid.widgets.lane_layout_state import LaneSpan, LayoutState
from lanegrid.widgets.lane_table import LaneTable
from lanegrid.widgets.staggered_grid_types import (
    WRAP_CONTENT,
    Flow,
    ItemLayoutParams,
    ItemRect,
    MeasureSpec,
    Orientation,
)


class GridLayoutEngine:
    """Places items into lanes as they scroll in and retracts them as they leave.

    The host calls `attach` for every item that becomes visible and `detach`
    for every item it recycles, passing the direction of travel. Lane
    assignments are permanent, so an item always comes back in the lane it
    was first placed in.
    """

    def __init__(self, lane_count: int = 3, orientation=Orientation.VERTICAL):
        """
        Initialize the layout engine.

        Args:
            lane_count: Number of lanes, fixed for the engine's lifetime
            orientation: Scroll axis, an Orientation, Qt.Orientation or string
        """
        if isinstance(lane_count, bool) or not isinstance(lane_count, int) or lane_count < 1:
            raise LayoutConfigurationError(
                f"lane_count must be a positive integer, got {lane_count!r}",
                {"lane_count": lane_count})
        self._lane_count = lane_count
        self._orientation = Orientation.coerce(orientation)
        self._lane_table = LaneTable()
        self._layout_state = LayoutState(lane_count)
        self._container_size = QSize(0, 0)
        self._padding = QMargins(0, 0, 0, 0)
        self._layout_ready = False

    @classmethod
    def from_settings(cls) -> "GridLayoutEngine":
        """Build an engine from the persisted `lane_count` and `orientation`."""
        return cls(lane_count=get_lane_count(), orientation=get_orientation())

    @property
    def lane_count(self) -> int:
        return self._lane_count

    @property
    def lane_size(self) -> int:
        return self._layout_state.lane_size

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    @property
    def is_vertical(self) -> bool:
        return self._orientation is Orientation.VERTICAL

    @property
    def layout_ready(self) -> bool:
        return self._layout_ready

    def set_container_size(self, size: QSize, padding: QMargins | None = None):
        """Store the container geometry used by the next `reset_layout`."""
        if size.width() < 0 or size.height() < 0:
            raise LayoutConfigurationError(
                f"Container size must not be negative, got {size.width()}x{size.height()}",
                {"width": size.width(), "height": size.height()})
        self._container_size = QSize(size)
        self._padding = QMargins(padding) if padding is not None else QMargins(0, 0, 0, 0)

    def set_orientation(self, orientation):
        orientation = Orientation.coerce(orientation)
        if orientation is self._orientation:
            return
        self._orientation = orientation
        # Lane bounds are now along the wrong axis until the host resets.
        self._layout_ready = False
        log_flow("LANES", f"Orientation set to {orientation.value}; waiting for reset")

    def reset_layout(self, main_offset: int = 0):
        """Recompute lane bounds from the container size and collapse lanes to `main_offset`."""
        padding = self._padding
        if self.is_vertical:
            cross_available = self._container_size.width() - padding.left() - padding.right()
            cross_offset = padding.left()
            main_offset += padding.top()
        else:
            cross_available = self._container_size.height() - padding.top() - padding.bottom()
            cross_offset = padding.top()
            main_offset += padding.left()

        self._layout_state.initialize(
            self._lane_count, max(0, cross_available), main_offset, cross_offset)
        self._layout_ready = True
        reset_throttle()
        log_flow(
            "LANES",
            f"Reset {self._lane_count} lanes, lane_size={self.lane_size}, main_offset={main_offset}",
        )

    def offset_layout(self, delta: int):
        """Shift every lane along the main axis (pure scroll)."""
        self._layout_state.translate_all(delta)

    def lane_for_position(self, position: int) -> int | None:
        return self._lane_table.get(position)

    def lane_rect(self, lane: int) -> ItemRect:
        """Current occupied span of `lane` as a rectangle."""
        return self._span_to_rect(self._layout_state.lane(lane))

    def _span_to_rect(self, span: LaneSpan) -> ItemRect:
        if self.is_vertical:
            return ItemRect(span.cross_start, span.main_start, span.cross_end, span.main_end)
        return ItemRect(span.main_start, span.cross_start, span.main_end, span.cross_end)

    def _require_layout(self, operation: str):
        if not self._layout_ready:
            raise LayoutConfigurationError(
                f"Cannot {operation} before reset_layout() has established lane bounds",
                {"operation": operation})

    def _check_measurement(self, position: int, measured_cross: int, measured_main: int):
        if measured_cross < 0 or measured_main < 0:
            raise MeasurementError(position, measured_cross, measured_main)

    def _lane_edges(self, flow: Flow) -> list[int]:
        if flow is Flow.FORWARD:
            return self._layout_state.end_edges()
        return self._layout_state.start_edges()

    def attach(self, position: int, flow: Flow, measured_cross: int, measured_main: int) -> ItemRect:
        """
        Place an item next to its lane's leading edge and claim the space.

        Args:
            position: Item position
            flow: Direction of travel
            measured_cross: Measured size along the cross axis
            measured_main: Measured size along the main axis

        Returns:
            ItemRect the host should lay the item out in
        """
        self._require_layout("attach")
        self._check_measurement(position, measured_cross, measured_main)

        first_sight = position not in self._lane_table
        lane = self._lane_table.assign_or_get(position, flow, self._lane_edges(flow))
        span = self._layout_state.lane(lane)

        if flow is Flow.FORWARD:
            main_start = span.main_end
        else:
            main_start = span.main_start - measured_main
        item = LaneSpan(
            cross_start=span.cross_start,
            main_start=main_start,
            cross_end=span.cross_end,
            main_end=main_start + measured_main,
        )

        if flow is Flow.BACKWARD:
            self._layout_state.translate_lane(lane, -measured_main)
        self._layout_state.grow_lane(lane, measured_main)

        if first_sight:
            log_flow("LANES", f"Position {position} assigned to lane {lane} ({flow.value})")
        return self._span_to_rect(item)

    def detach(self, position: int, flow: Flow, measured_cross: int, measured_main: int):
        """Release the space an item held at its lane's edge.

        FORWARD travel recycles from the lane start, BACKWARD travel from the
        lane end. Positions that were never laid out are ignored.
        """
        self._require_layout("detach")
        self._check_measurement(position, measured_cross, measured_main)

        lane = self._lane_table.get(position)
        if lane is None:
            log_flow("LANES", f"Detach of unplaced position {position} ignored",
                     throttle_key="lanes_detach_unknown", every_s=0.5)
            return

        if flow is Flow.FORWARD:
            self._layout_state.translate_lane(lane, measured_main)
        self._layout_state.shrink_lane(lane, measured_main)

    def outer_start_edge(self) -> int:
        return self._layout_state.outer_start_edge()

    def inner_start_edge(self) -> int:
        return self._layout_state.inner_start_edge()

    def inner_end_edge(self) -> int:
        return self._layout_state.inner_end_edge()

    def outer_end_edge(self) -> int:
        return self._layout_state.outer_end_edge()

    def width_measure_spec(self, params: ItemLayoutParams) -> MeasureSpec:
        """Width constraint for an item: lane width when vertical, else its declared width."""
        if not self.is_vertical and params.width == WRAP_CONTENT:
            return MeasureSpec.unspecified()
        if self.is_vertical:
            return MeasureSpec.exactly(self.lane_size)
        return MeasureSpec.exactly(params.width)

    def height_measure_spec(self, params: ItemLayoutParams) -> MeasureSpec:
        """Height constraint for an item: lane height when horizontal, else its declared height."""
        if self.is_vertical and params.height == WRAP_CONTENT:
            return MeasureSpec.unspecified()
        if not self.is_vertical:
            return MeasureSpec.exactly(self.lane_size)
        return MeasureSpec.exactly(params.height)
