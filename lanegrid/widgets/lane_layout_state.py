"""Per-lane occupied span tracking for the staggered grid."""

from dataclasses import dataclass, replace


@dataclass
class LaneSpan:
    """Occupied span of one lane, in main/cross axis terms."""

    cross_start: int = 0
    main_start: int = 0
    cross_end: int = 0
    main_end: int = 0

    @property
    def main_length(self) -> int:
        return self.main_end - self.main_start


class LayoutState:
    """Tracks every lane's span and answers aggregate edge queries.

    All operations are O(lane count) or better.
    """

    def __init__(self, lane_count: int):
        self._lanes = [LaneSpan() for _ in range(lane_count)]
        self._lane_size = 0

    @property
    def lane_size(self) -> int:
        return self._lane_size

    def _span(self, lane: int) -> LaneSpan:
        if not 0 <= lane < len(self._lanes):
            raise IndexError(f"lane {lane} out of range 0..{len(self._lanes) - 1}")
        return self._lanes[lane]

    def lane(self, lane: int) -> LaneSpan:
        """Return a copy of the lane's span."""
        return replace(self._span(lane))

    def initialize(self, lane_count: int, cross_available: int, main_offset: int, cross_offset: int = 0):
        """Split the cross axis evenly and collapse every lane to `main_offset`."""
        self._lane_size = cross_available // lane_count
        self._lanes = [
            LaneSpan(
                cross_start=cross_offset + i * self._lane_size,
                main_start=main_offset,
                cross_end=cross_offset + (i + 1) * self._lane_size,
                main_end=main_offset,
            )
            for i in range(lane_count)
        ]

    def translate_all(self, delta: int):
        for span in self._lanes:
            span.main_start += delta
            span.main_end += delta

    def translate_lane(self, lane: int, delta: int):
        span = self._span(lane)
        span.main_start += delta
        span.main_end += delta

    def grow_lane(self, lane: int, amount: int):
        self._span(lane).main_end += amount

    def shrink_lane(self, lane: int, amount: int):
        self._span(lane).main_end -= amount

    def start_edges(self) -> list[int]:
        return [span.main_start for span in self._lanes]

    def end_edges(self) -> list[int]:
        return [span.main_end for span in self._lanes]

    def outer_start_edge(self) -> int:
        """How far back content exists in any lane."""
        return min(self.start_edges())

    def inner_start_edge(self) -> int:
        """Point before which every lane still has content."""
        return max(self.start_edges())

    def inner_end_edge(self) -> int:
        """End of the shortest lane; limits forward completeness."""
        return min(self.end_edges())

    def outer_end_edge(self) -> int:
        return max(self.end_edges())
