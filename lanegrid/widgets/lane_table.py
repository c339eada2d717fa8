"""Permanent item position -> lane assignments for the staggered grid."""

from typing import Sequence

from lanegrid.widgets.staggered_grid_types import Flow


class LaneTable:
    """Write-once lane assignments.

    An item keeps the lane it was first placed in for the lifetime of the
    table, so scrolling back over seen content reproduces the same layout.
    """

    def __init__(self):
        self._lanes: dict[int, int] = {}

    def __len__(self):
        return len(self._lanes)

    def __contains__(self, position):
        return position in self._lanes

    def get(self, position: int) -> int | None:
        return self._lanes.get(position)

    def assign_or_get(self, position: int, flow: Flow, lane_edges: Sequence[int]) -> int:
        """Return the lane for `position`, choosing one on first sight.

        Args:
            position: Item position
            flow: Direction content is being revealed in
            lane_edges: Leading edge of every lane for `flow` (main end when
                FORWARD, main start when BACKWARD)

        Returns:
            Lane index
        """
        lane = self._lanes.get(position)
        if lane is not None:
            return lane

        # Shortest lane when going forward, the one reaching least far back
        # when going backward. Strict compare keeps the lowest index on ties.
        lane = 0
        best = lane_edges[0]
        for i, edge in enumerate(lane_edges):
            if (flow is Flow.FORWARD and edge < best) or (flow is Flow.BACKWARD and edge > best):
                best = edge
                lane = i

        self._lanes[position] = lane
        return lane
