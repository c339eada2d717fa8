from PySide6.QtCore import QSize

from lanegrid.utils import flow_log as flow_log_module
from lanegrid.utils import settings as settings_module
from lanegrid.utils.flow_log import log_flow, reset_throttle
from lanegrid.widgets.staggered_grid_layout import GridLayoutEngine
from lanegrid.widgets.staggered_grid_types import Flow


def test_debug_suppressed_by_minimal_trace(monkeypatch, capsys):
    monkeypatch.delenv("LANEGRID_TRACE", raising=False)
    monkeypatch.setattr(flow_log_module.settings, "value", lambda *args, **kwargs: True)

    log_flow("LANES", "hidden")

    assert capsys.readouterr().out == ""


def test_trace_env_forces_debug(monkeypatch, capsys):
    monkeypatch.setenv("LANEGRID_TRACE", "1")
    monkeypatch.setattr(flow_log_module.settings, "value", lambda *args, **kwargs: True)

    log_flow("LANES", "shown")

    out = capsys.readouterr().out
    assert "[TRACE][LANES][DEBUG] shown" in out


def test_warning_always_printed(monkeypatch, capsys):
    monkeypatch.delenv("LANEGRID_TRACE", raising=False)
    monkeypatch.setattr(flow_log_module.settings, "value", lambda *args, **kwargs: True)

    log_flow("FILL", "careful", level="WARNING")

    assert "[FILL][WARNING] careful" in capsys.readouterr().out


def test_throttle_drops_repeats(monkeypatch, capsys):
    monkeypatch.setattr(flow_log_module.settings, "value", lambda *args, **kwargs: False)
    reset_throttle()

    for _ in range(3):
        log_flow("FILL", "tick", throttle_key="tick", every_s=60.0)

    assert capsys.readouterr().out.count("tick") == 1
    reset_throttle()
    log_flow("FILL", "tick", throttle_key="tick", every_s=60.0)
    assert capsys.readouterr().out.count("tick") == 1


def test_settings_helpers_use_defaults(monkeypatch):
    monkeypatch.setattr(
        settings_module.settings,
        "value",
        lambda key, defaultValue=None, type=None: defaultValue,
    )

    assert settings_module.get_lane_count() == 3
    assert settings_module.get_orientation() == "vertical"


def test_layout_reset_clears_throttle(monkeypatch, capsys):
    monkeypatch.setenv("LANEGRID_TRACE", "1")
    engine = GridLayoutEngine(lane_count=2)
    engine.set_container_size(QSize(200, 200))
    engine.reset_layout(0)

    engine.detach(5, Flow.FORWARD, 100, 10)
    engine.detach(5, Flow.FORWARD, 100, 10)
    assert capsys.readouterr().out.count("unplaced position 5") == 1

    engine.reset_layout(0)
    engine.detach(5, Flow.FORWARD, 100, 10)
    assert capsys.readouterr().out.count("unplaced position 5") == 1
