from __future__ import annotations

from section_dashboard.config import DashboardConfig
from section_dashboard.dashboard import CLEAR_SCREEN, Dashboard
from section_dashboard.layout import ColumnsLayout


def _config(**overrides: object) -> DashboardConfig:
    data = {
        "header": "Dashboard",
        "sections": [
            {"tag": "notes", "kind": "text", "text": "* Notes"},
            {"kind": "text", "text": "* Footer"},
        ],
    }
    data.update(overrides)
    return DashboardConfig.from_dict(data)


def test_refresh_and_render() -> None:
    dashboard = Dashboard(_config())
    result = dashboard.refresh()

    assert result.ok
    assert dashboard.render() == "Dashboard\n* Notes\n* Footer"
    dashboard.refresh()
    assert dashboard.render() == "Dashboard\n* Notes\n* Footer"


def test_render_refreshes_when_needed() -> None:
    dashboard = Dashboard(_config())
    assert dashboard.last_result is None
    assert "* Notes" in dashboard.render()
    assert dashboard.last_result is not None


def test_header_producer_failure_is_visible() -> None:
    config = _config(header={"kind": "command", "command": ["/nonexistent/section-binary"]})
    dashboard = Dashboard(config)
    assert dashboard.document.blocks[0].content.startswith("[error] header:")


def test_configured_layout() -> None:
    dashboard = Dashboard(_config(layout="columns", columns=2, column_width=10))
    assert isinstance(dashboard.layout(), ColumnsLayout)
    assert dashboard.render().splitlines()[0].startswith("Dashboard")


def test_watch_runs_bounded_iterations() -> None:
    printed: list[str] = []
    sleeps: list[float] = []
    dashboard = Dashboard(_config())

    dashboard.watch(interval=7, iterations=2, echo=printed.append, sleep=sleeps.append)

    frames = [line for line in printed if line.startswith(CLEAR_SCREEN)]
    assert len(frames) == 2
    assert sleeps == [7]


def test_watch_exits_on_interrupt() -> None:
    printed: list[str] = []

    def interrupt(_: float) -> None:
        raise KeyboardInterrupt

    Dashboard(_config()).watch(interval=1, echo=printed.append, sleep=interrupt)
    assert printed[-1] == "\nExiting dashboard."
