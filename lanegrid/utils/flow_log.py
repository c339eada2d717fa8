"""Timestamped, optionally throttled trace logging for lane layout diagnostics."""

import os
import time

from lanegrid.utils.settings import DEFAULT_SETTINGS, settings

_flow_log_last: dict[str, float] = {}


def _trace_forced() -> bool:
    return os.getenv('LANEGRID_TRACE', '0') == '1'


def log_flow(component: str, message: str, *, level: str = "DEBUG",
             throttle_key: str | None = None, every_s: float | None = None):
    """Print a `[time][TRACE][COMPONENT][LEVEL] message` line.

    DEBUG lines are dropped while `minimal_trace_logs` is on. WARNING and
    ERROR lines always go through.
    """
    if level == "DEBUG" and not _trace_forced():
        try:
            minimal_trace = bool(settings.value(
                "minimal_trace_logs", DEFAULT_SETTINGS['minimal_trace_logs'], type=bool))
        except Exception:
            minimal_trace = True
        if minimal_trace:
            return

    now = time.time()
    if throttle_key and every_s is not None:
        last = _flow_log_last.get(throttle_key, 0.0)
        if (now - last) < every_s:
            return
        _flow_log_last[throttle_key] = now
    ts = time.strftime("%H:%M:%S", time.localtime(now)) + f".{int((now % 1) * 1000):03d}"
    print(f"[{ts}][TRACE][{component}][{level}] {message}")


def reset_throttle():
    """Forget throttle timestamps (used when a layout is rebuilt from scratch)."""
    _flow_log_last.clear()
