"""Exceptions raised by the lane grid layout engine."""

from typing import Any, Optional


class LaneGridError(Exception):
    """Base exception for all lane grid errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class LayoutConfigurationError(LaneGridError, ValueError):
    """Raised for an unusable engine configuration.

    This includes:
    - Non-positive lane count
    - Unknown orientation
    - Negative container size
    - Attach/detach before the lane bounds were established
    """


class MeasurementError(LaneGridError, ValueError):
    """Raised when an item reports a negative measured size."""

    def __init__(self, position: int, measured_cross: int, measured_main: int):
        super().__init__(
            f"Item {position} has a negative measured size "
            f"(cross={measured_cross}, main={measured_main})",
            {"position": position, "cross": measured_cross, "main": measured_main},
        )
        self.position = position
