"""Viewport fill/recycle driver for a host using GridLayoutEngine.

The host view keeps ownership of item widgets; this service only decides
which positions must be attached or detached so the viewport stays covered
by every lane, and keeps the engine's lane spans in step.
"""

from dataclasses import dataclass

from lanegrid.utils.flow_log import log_flow
from lanegrid.widgets.staggered_grid_types import Flow, ItemRect


@dataclass
class AttachedItem:
    rect: ItemRect
    measured_cross: int
    measured_main: int


class StaggeredGridFillService:
    """Owns attach/detach orchestration for a staggered grid host view.

    The view must provide `engine`, `item_count()`, `layout_params(position)`,
    `measure_item(position, width_spec, height_spec) -> (width, height)` and
    `viewport_extent() -> (start, end)` along the main axis.
    """

    def __init__(self, view):
        self._view = view
        self._attached: dict[int, AttachedItem] = {}
        self.first_position = 0

    @property
    def _engine(self):
        return self._view.engine

    @property
    def last_position(self) -> int:
        return self.first_position + len(self._attached) - 1

    def attached_items(self) -> list[tuple[int, ItemRect]]:
        return [(position, self._attached[position].rect) for position in sorted(self._attached)]

    def _attach(self, position: int, flow: Flow) -> ItemRect:
        engine = self._engine
        params = self._view.layout_params(position)
        width, height = self._view.measure_item(
            position,
            engine.width_measure_spec(params),
            engine.height_measure_spec(params),
        )
        if engine.is_vertical:
            measured_cross, measured_main = width, height
        else:
            measured_cross, measured_main = height, width
        rect = engine.attach(position, flow, measured_cross, measured_main)
        self._attached[position] = AttachedItem(rect, measured_cross, measured_main)
        return rect

    def _detach(self, position: int, flow: Flow):
        item = self._attached.pop(position)
        self._engine.detach(position, flow, item.measured_cross, item.measured_main)

    def fill_forward(self) -> int:
        """Attach items after the last one until the shortest lane passes the viewport end."""
        engine = self._engine
        _, viewport_end = self._view.viewport_extent()
        item_count = self._view.item_count()
        added = 0
        position = self.last_position + 1
        while position < item_count and engine.inner_end_edge() < viewport_end:
            self._attach(position, Flow.FORWARD)
            position += 1
            added += 1
        if added:
            log_flow("FILL", f"Forward attached {added}, now {self.first_position}..{self.last_position}")
        return added

    def fill_backward(self) -> int:
        """Attach items before the first one until every lane starts before the viewport."""
        engine = self._engine
        viewport_start, _ = self._view.viewport_extent()
        added = 0
        while self.first_position > 0 and engine.inner_start_edge() > viewport_start:
            self._attach(self.first_position - 1, Flow.BACKWARD)
            self.first_position -= 1
            added += 1
        if added:
            log_flow("FILL", f"Backward attached {added}, now {self.first_position}..{self.last_position}")
        return added

    def recycle(self) -> int:
        """Detach items that have fully left the viewport from either end."""
        orientation = self._engine.orientation
        viewport_start, viewport_end = self._view.viewport_extent()
        removed = 0

        # Lowest positions sit at their lane's start, highest at its end.
        while self._attached:
            item = self._attached[self.first_position]
            if item.rect.main_end(orientation) > viewport_start:
                break
            self._detach(self.first_position, Flow.FORWARD)
            self.first_position += 1
            removed += 1

        while self._attached:
            position = self.last_position
            if self._attached[position].rect.main_start(orientation) < viewport_end:
                break
            self._detach(position, Flow.BACKWARD)
            removed += 1

        if removed:
            log_flow("FILL", f"Recycled {removed}, now {self.first_position}..{self.last_position}")
        return removed

    def scroll_by(self, delta: int):
        """Scroll content by `delta` (positive moves toward later items)."""
        if delta == 0:
            return
        engine = self._engine
        orientation = engine.orientation
        engine.offset_layout(-delta)
        for item in self._attached.values():
            item.rect = item.rect.translated(orientation, -delta)
        self.recycle()
        fill = self.fill_forward if delta > 0 else self.fill_backward
        # A jump past the viewport refills from collapsed lanes, so items
        # placed before the viewport must be recycled again.
        while fill() and self.recycle():
            pass

    def relayout(self, main_offset: int = 0) -> int:
        """Rebuild lanes from scratch, keeping the first position and lane assignments."""
        self._attached.clear()
        self._engine.reset_layout(main_offset)
        return self.fill_forward()
