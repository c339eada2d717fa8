import pytest
from PySide6.QtCore import QSize

from lanegrid.utils.errors import MeasurementError
from lanegrid.widgets.staggered_grid_fill_service import StaggeredGridFillService
from lanegrid.widgets.staggered_grid_layout import GridLayoutEngine
from lanegrid.widgets.staggered_grid_types import (
    ItemLayoutParams,
    ItemRect,
    MeasureMode,
    Orientation,
)


class FakeView:
    def __init__(self, sizes, *, lane_count=3, orientation=Orientation.VERTICAL,
                 container=QSize(300, 100), extent=(0, 100)):
        self.engine = GridLayoutEngine(lane_count=lane_count, orientation=orientation)
        self.engine.set_container_size(container)
        self.engine.reset_layout(0)
        self._sizes = list(sizes)
        self._extent = extent
        self.measured = []

    def item_count(self):
        return len(self._sizes)

    def layout_params(self, position):
        del position
        return ItemLayoutParams()

    def measure_item(self, position, width_spec, height_spec):
        self.measured.append(position)
        main = self._sizes[position]
        if self.engine.is_vertical:
            assert width_spec.mode is MeasureMode.EXACTLY
            assert height_spec.mode is MeasureMode.UNSPECIFIED
            return width_spec.size, main
        assert height_spec.mode is MeasureMode.EXACTLY
        return main, height_spec.size

    def viewport_extent(self):
        return self._extent


def test_fill_forward_until_shortest_lane_passes_viewport():
    view = FakeView([40] * 20)
    service = StaggeredGridFillService(view)

    added = service.fill_forward()

    assert added == 9
    assert service.first_position == 0
    assert service.last_position == 8
    assert view.engine.inner_end_edge() == 120
    assert service.attached_items()[0] == (0, ItemRect(0, 0, 100, 40))


def test_fill_forward_stops_when_items_run_out():
    view = FakeView([40, 40])
    service = StaggeredGridFillService(view)

    assert service.fill_forward() == 2
    assert service.fill_forward() == 0
    assert view.engine.inner_end_edge() == 0


def test_scroll_forward_recycles_top_rows_and_fills_bottom():
    view = FakeView([40] * 20)
    service = StaggeredGridFillService(view)
    service.fill_forward()

    service.scroll_by(50)

    positions = [position for position, _ in service.attached_items()]
    assert positions == list(range(3, 12))
    assert view.engine.outer_start_edge() == -10
    assert view.engine.inner_end_edge() == 110


def test_scroll_back_reproduces_lanes_and_rects():
    view = FakeView([40] * 20)
    service = StaggeredGridFillService(view)
    service.fill_forward()
    original = dict(service.attached_items())

    service.scroll_by(50)
    service.scroll_by(-50)

    restored = dict(service.attached_items())
    assert sorted(restored) == list(range(0, 9))
    assert restored == original
    for position in range(12):
        assert view.engine.lane_for_position(position) == position % 3


def test_uneven_items_keep_their_lane_after_round_trip():
    sizes = [50, 30, 10, 5, 70, 20, 45, 15, 60, 25, 35, 40, 10, 80]
    view = FakeView(sizes)
    service = StaggeredGridFillService(view)
    service.fill_forward()
    lanes = {position: view.engine.lane_for_position(position) for position, _ in service.attached_items()}

    service.scroll_by(120)
    service.scroll_by(-120)

    for position, _ in service.attached_items():
        if position in lanes:
            assert view.engine.lane_for_position(position) == lanes[position]
    assert view.engine.outer_start_edge() <= view.engine.inner_start_edge()
    assert view.engine.inner_end_edge() <= view.engine.outer_end_edge()


def test_fill_backward_noop_at_first_position():
    view = FakeView([40] * 5)
    service = StaggeredGridFillService(view)
    service.fill_forward()

    assert service.fill_backward() == 0


def test_relayout_resets_lanes_and_keeps_first_position():
    view = FakeView([40] * 30)
    service = StaggeredGridFillService(view)
    service.fill_forward()
    service.scroll_by(50)

    added = service.relayout(0)

    assert service.first_position == 3
    assert added == 9
    assert service.attached_items()[0] == (3, ItemRect(0, 0, 100, 40))


def test_horizontal_host_measures_width_on_main_axis():
    view = FakeView([30] * 10, lane_count=2, orientation=Orientation.HORIZONTAL,
                    container=QSize(100, 200), extent=(0, 60))
    service = StaggeredGridFillService(view)

    service.fill_forward()

    items = service.attached_items()
    assert [position for position, _ in items] == [0, 1, 2, 3]
    assert items[2] == (2, ItemRect(30, 0, 60, 100))
    assert view.engine.inner_end_edge() == 60


def test_failed_backward_measure_keeps_window_consistent():
    view = FakeView([40] * 20)
    service = StaggeredGridFillService(view)
    service.fill_forward()
    original = dict(service.attached_items())
    service.scroll_by(50)
    view._sizes[2] = -1

    with pytest.raises(MeasurementError):
        service.scroll_by(-50)

    assert service.first_position == 3
    assert [position for position, _ in service.attached_items()] == list(range(3, 9))
    assert service.recycle() == 0

    view._sizes[2] = 40
    assert service.fill_backward() == 3
    assert dict(service.attached_items()) == original


def test_large_jump_recycles_items_placed_before_viewport():
    view = FakeView([40] * 300)
    service = StaggeredGridFillService(view)
    service.fill_forward()

    service.scroll_by(1000)

    items = service.attached_items()
    assert [position for position, _ in items] == list(range(75, 84))
    assert all(rect.main_end(Orientation.VERTICAL) > 0 for _, rect in items)
    assert view.engine.inner_end_edge() >= 100
