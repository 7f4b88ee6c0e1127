"""systop - Main Textual application."""

import logging
import sys
from datetime import datetime
from enum import Enum

from rich.markup import escape
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import DataTable, Footer, Static, TabbedContent, TabPane

from systop.config import MonitorConfig, load_config
from systop.dirsize import scan_directory
from systop.formatting import format_bytes, format_load, format_percent, format_uptime, truncate_name
from systop.log import setup_logger
from systop.models import (
    DirectorySizeReport,
    NetworkSummary,
    ProcessSnapshot,
    Severity,
    Snapshot,
    StorageSummary,
    TemperatureSummary,
)
from systop.monitor import SystemMonitor
from systop.provider import ProviderError, PsutilProvider, ReadingProvider
from systop.ranking import top_by_cpu, top_by_memory
from systop.scheduler import RefreshScheduler

logger = logging.getLogger(__name__)

SEVERITY_COLORS = {
    Severity.NORMAL: "green",
    Severity.WARNING: "yellow",
    Severity.CRITICAL: "red",
}


class DisplayMode(Enum):
    """The two display modes, in tab order."""

    OVERVIEW = "overview"
    PROCESSES = "processes"

    def next(self) -> "DisplayMode":
        modes = list(DisplayMode)
        return modes[(modes.index(self) + 1) % len(modes)]

    def previous(self) -> "DisplayMode":
        modes = list(DisplayMode)
        return modes[(modes.index(self) - 1) % len(modes)]


class SortKey(Enum):
    """Sort keys for the process tables."""

    CPU = "cpu"
    MEM = "mem"


def usage_bar(percent: float, color: str, width: int = 20) -> str:
    """Draw a percentage as a bar of `width` cells."""
    bar_len = int(percent / (100 / width))
    bar_len = min(max(bar_len, 0), width)
    return f"[{color}]" + "█" * bar_len + f"[/{color}][dim]" + "░" * (width - bar_len) + "[/dim]"


def render_cpu(snapshot: Snapshot) -> str:
    return f"\\[{usage_bar(snapshot.cpu_percent, 'green')}] {format_percent(snapshot.cpu_percent)}"


def render_memory(snapshot: Snapshot) -> str:
    memory = snapshot.memory
    if memory.percent is None:
        return "Not available"
    return (
        f"{format_bytes(memory.used)}/{format_bytes(memory.total)}\n"
        f"\\[{usage_bar(memory.percent, 'cyan')}] {format_percent(memory.percent)}"
    )


def render_swap(snapshot: Snapshot) -> str:
    swap = snapshot.swap
    if swap.percent is None or snapshot.swap_severity is None:
        return "[dim]Not configured[/dim]"
    color = SEVERITY_COLORS[snapshot.swap_severity]
    return (
        f"{format_bytes(swap.used)}/{format_bytes(swap.total)}\n"
        f"\\[{usage_bar(swap.percent, color)}] {format_percent(swap.percent)}"
    )


def render_temperature(summary: TemperatureSummary) -> str:
    if not summary.available:
        return "CPU Temperature: Not available"
    color = SEVERITY_COLORS[summary.severity]
    return (
        f"CPU Temp: {summary.average:.1f}°C (max: {summary.maximum:.1f}°C) "
        f"[{color}]{summary.severity.value}[/{color}]"
    )


def render_system_info(snapshot: Snapshot) -> str:
    return "\n".join(
        [
            f"Load Average: {format_load(snapshot.load_avg)} (1m 5m 15m)",
            render_temperature(snapshot.temperature),
            f"Uptime: {format_uptime(snapshot.uptime_seconds)}",
        ]
    )


def render_network(summary: NetworkSummary) -> str:
    lines = [
        f"Active Interfaces: {summary.active_count}",
        f"Total Received: {format_bytes(summary.total_received)}",
        f"Total Transmitted: {format_bytes(summary.total_transmitted)}",
    ]
    for interface in summary.interfaces:
        lines.append(
            f"  {escape(truncate_name(interface.name, 10))} | "
            f"RX: {format_bytes(interface.received_bytes)} "
            f"TX: {format_bytes(interface.transmitted_bytes)}"
        )
    return "\n".join(lines)


def render_storage(summary: StorageSummary, report: DirectorySizeReport | None) -> str:
    lines: list[str] = []
    if summary.percent is not None:
        lines.append(
            f"{summary.disk_count} Disks Total | {format_percent(summary.percent)} | "
            f"{format_bytes(summary.used_bytes)}/{format_bytes(summary.total_bytes)}"
        )
        lines.append("")
    for disk in summary.disks:
        lines.append(
            f"{escape(truncate_name(disk.name, 20))} | {format_percent(disk.percent or 0.0)} | "
            f"{format_bytes(disk.used_bytes)}/{format_bytes(disk.total_bytes)}"
        )

    if report is not None:
        lines.append("Home Directory:")
        lines.append(f"   Path: {escape(truncate_name(str(report.path), 35))}")
        if report.total_bytes is None:
            lines.append(f"   [red]{report.error}[/red]")
        else:
            lines.append(f"   Size: {format_bytes(report.total_bytes)}")
            for entry in report.subdirectories:
                lines.append(f"   {escape(entry.name)}: {format_bytes(entry.size_bytes)}")
    return "\n".join(lines)


class OverviewPanel(Vertical):
    """Gauges, system information, network and storage panels."""

    DEFAULT_CSS = """
    OverviewPanel #gauges {
        height: 5;
    }

    OverviewPanel .panel {
        border: round $primary;
        padding: 0 1;
    }

    OverviewPanel #gauges .panel {
        width: 1fr;
    }

    OverviewPanel #system-info {
        height: 5;
    }

    OverviewPanel #details {
        height: 1fr;
    }

    OverviewPanel #network-info {
        width: 2fr;
    }

    OverviewPanel #storage-info {
        width: 3fr;
    }
    """

    PANEL_TITLES = {
        "cpu-gauge": "CPU",
        "mem-gauge": "Memory",
        "swap-gauge": "Swap",
        "system-info": "System Information",
        "network-info": "Network I/O",
        "storage-info": "Storage & Home Directory",
    }

    def compose(self) -> ComposeResult:
        """Compose the overview layout."""
        with Horizontal(id="gauges"):
            yield Static("Loading...", id="cpu-gauge", classes="panel")
            yield Static("Loading...", id="mem-gauge", classes="panel")
            yield Static("Loading...", id="swap-gauge", classes="panel")
        yield Static("Loading...", id="system-info", classes="panel")
        with Horizontal(id="details"):
            yield Static("Loading...", id="network-info", classes="panel")
            yield Static("Loading...", id="storage-info", classes="panel")

    def on_mount(self) -> None:
        for panel_id, title in self.PANEL_TITLES.items():
            self.query_one(f"#{panel_id}", Static).border_title = title

    def update_snapshot(self, snapshot: Snapshot, home_report: DirectorySizeReport | None) -> None:
        """Update every panel from a snapshot and the home directory report."""
        self.query_one("#cpu-gauge", Static).update(render_cpu(snapshot))
        self.query_one("#mem-gauge", Static).update(render_memory(snapshot))
        self.query_one("#swap-gauge", Static).update(render_swap(snapshot))
        self.query_one("#system-info", Static).update(render_system_info(snapshot))
        self.query_one("#network-info", Static).update(render_network(snapshot.network))
        self.query_one("#storage-info", Static).update(render_storage(snapshot.storage, home_report))


class ProcessTable(Container):
    """Container for a ranked process table."""

    DEFAULT_CSS = """
    ProcessTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    TITLES = {
        SortKey.CPU: "Top CPU Processes",
        SortKey.MEM: "Top Memory Processes",
    }

    def __init__(self, sort_key: SortKey, *args, **kwargs) -> None:
        """Initialize ProcessTable."""
        super().__init__(*args, **kwargs)
        self._sort_key = sort_key
        self._pids: list[int] = []

    @property
    def sort_key(self) -> SortKey:
        return self._sort_key

    @property
    def pids(self) -> list[int]:
        """PIDs currently shown, in display order."""
        return list(self._pids)

    def compose(self) -> ComposeResult:
        """Compose the process table."""
        yield DataTable()

    def on_mount(self) -> None:
        """Initialize the data table when mounted."""
        self.border_title = self.TITLES[self._sort_key]
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.add_column("PID", key="pid", width=8)
        table.add_column("Name", key="name", width=26)
        if self._sort_key is SortKey.CPU:
            table.add_column("CPU %", key="cpu", width=8)
        else:
            table.add_column("Memory", key="mem", width=12)

    def update_processes(self, processes: tuple[ProcessSnapshot, ...]) -> None:
        """Replace the table rows with an already ranked process list."""
        table = self.query_one(DataTable)
        table.clear()
        for proc in processes:
            if self._sort_key is SortKey.CPU:
                value = format_percent(proc.cpu_percent)
            else:
                value = format_bytes(proc.memory_rss)
            # Text cells are shown literally, never parsed as markup
            table.add_row(str(proc.pid), Text(truncate_name(proc.name, 25)), value)
        self._pids = [proc.pid for proc in processes]


def build_monitor(config: MonitorConfig, provider: ReadingProvider) -> SystemMonitor:
    """Create a SystemMonitor using the configured intervals and limits."""
    return SystemMonitor(
        provider,
        RefreshScheduler(config.refresh_interval),
        max_interfaces=config.max_interfaces,
        max_disks=config.max_disks,
    )


class SystopApp(App):
    """Main systop application."""

    TITLE = "systop"
    SUB_TITLE = "Terminal System Monitor"

    CSS = """
    Screen {
        layout: vertical;
    }

    TabbedContent {
        height: 1fr;
    }

    #status-bar {
        height: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("right", "next_tab", "Next tab", priority=True),
        Binding("tab", "next_tab", "Next tab", show=False, priority=True),
        Binding("left", "previous_tab", "Previous tab", priority=True),
    ]

    def __init__(
        self,
        config: MonitorConfig | None = None,
        provider: ReadingProvider | None = None,
        monitor: SystemMonitor | None = None,
    ) -> None:
        """
        Initialize the SystopApp.

        Args:
            config: Settings; defaults to MonitorConfig().
            provider: Reading provider; defaults to PsutilProvider().
            monitor: Ready-made monitor, overriding `provider`.
        """
        super().__init__()
        self._config = config or MonitorConfig()
        if monitor is None:
            monitor = build_monitor(self._config, provider or PsutilProvider())
        self._monitor = monitor
        self._snapshot: Snapshot | None = None
        self._home_report: DirectorySizeReport | None = None

    @property
    def snapshot(self) -> Snapshot | None:
        """The snapshot currently on screen."""
        return self._snapshot

    @property
    def home_report(self) -> DirectorySizeReport | None:
        return self._home_report

    @property
    def mode(self) -> DisplayMode:
        """Get the active display mode."""
        return DisplayMode(self.query_one(TabbedContent).active)

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        with TabbedContent(initial=DisplayMode.OVERVIEW.value):
            with TabPane("Overview", id=DisplayMode.OVERVIEW.value):
                yield OverviewPanel()
            with TabPane("Processes", id=DisplayMode.PROCESSES.value):
                yield ProcessTable(SortKey.CPU, id="top-cpu")
                yield ProcessTable(SortKey.MEM, id="top-mem")
        yield Static("", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Draw the first reading once laid out and start the polling timer."""
        self.call_after_refresh(self._check_for_updates)
        self.set_interval(self._config.poll_interval, self._check_for_updates)

    def _check_for_updates(self) -> None:
        """Poll the monitor and redraw when a new snapshot is available."""
        try:
            snapshot = self._monitor.poll()
        except ProviderError as exc:
            logger.critical("Cannot read system metrics: %s", exc)
            self.exit(return_code=1, message=f"systop: cannot read system metrics: {exc}")
            return

        if snapshot is None or snapshot is self._snapshot:
            return

        self._snapshot = snapshot
        self._home_report = scan_directory(
            self._config.resolve_home(),
            self._config.home_subdirectories,
            self._config.max_subdirectories,
        )
        self._update_ui(snapshot)

    def _update_ui(self, snapshot: Snapshot) -> None:
        """Update the UI with the new snapshot."""
        self.query_one(OverviewPanel).update_snapshot(snapshot, self._home_report)
        n = self._config.top_processes
        self.query_one("#top-cpu", ProcessTable).update_processes(top_by_cpu(snapshot, n))
        self.query_one("#top-mem", ProcessTable).update_processes(top_by_memory(snapshot, n))

        updated = datetime.fromtimestamp(snapshot.timestamp).strftime("%H:%M:%S")
        self.query_one("#status-bar", Static).update(
            f"Last updated: {updated} | Press 'q' to quit | ←/→ or Tab to switch tabs"
        )

    def _set_mode(self, mode: DisplayMode) -> None:
        self.query_one(TabbedContent).active = mode.value

    def action_next_tab(self) -> None:
        """Switch to the next display mode."""
        self._set_mode(self.mode.next())

    def action_previous_tab(self) -> None:
        """Switch to the previous display mode."""
        self._set_mode(self.mode.previous())


def main() -> None:
    """Entry point for the systop application."""
    try:
        config = load_config()
        setup_logger(level=config.log_level, log_file=config.log_file)
        monitor = build_monitor(config, PsutilProvider())
        monitor.refresh()
    except (ProviderError, ValueError, OSError) as exc:
        print(f"systop: startup failed: {exc}", file=sys.stderr)
        sys.exit(1)

    app = SystopApp(config=config, monitor=monitor)
    app.run()
    sys.exit(app.return_code or 0)


if __name__ == "__main__":
    main()
